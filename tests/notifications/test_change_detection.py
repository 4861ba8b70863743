from __future__ import annotations

from datetime import timedelta

from src.attendance_ledger.attendance_ledger.attendance import engine
from src.attendance_ledger.attendance_ledger.core.enums import NotificationKind
from src.attendance_ledger.attendance_ledger.ledger.store import encode_logs
from src.attendance_ledger.attendance_ledger.notifications.detection import classify, describe, detect_changed_log


def test_recent_change_is_delivered(alex, fixed_now):
    log = engine.start_work(alex, fixed_now - timedelta(seconds=2))

    assert detect_changed_log(None, encode_logs([log]), fixed_now) == log


def test_stale_change_is_suppressed(alex, fixed_now):
    log = engine.start_work(alex, fixed_now - timedelta(seconds=10))

    assert detect_changed_log(None, encode_logs([log]), fixed_now) is None


def test_threshold_boundary_is_inclusive(alex, fixed_now):
    log = engine.start_work(alex, fixed_now - timedelta(seconds=5))

    assert detect_changed_log(None, encode_logs([log]), fixed_now) == log


def test_checkout_time_takes_precedence_over_checkin(alex, sarah, fixed_now):
    long_shift = engine.close_work(engine.start_work(alex, fixed_now - timedelta(hours=8)), fixed_now - timedelta(seconds=1))
    fresh_checkin = engine.start_work(sarah, fixed_now - timedelta(seconds=3))
    old_raw = encode_logs([fresh_checkin])

    changed = detect_changed_log(old_raw, encode_logs([fresh_checkin, long_shift]), fixed_now)

    assert changed == long_shift


def test_backdated_entry_is_not_picked(alex, sarah, fixed_now):
    live = engine.start_work(alex, fixed_now - timedelta(seconds=1))
    backdated = engine.manual_entry(sarah, day="2026-01-15", log_type="OFFICE_WORK", start_time="09:00", end_time="17:00")

    changed = detect_changed_log(encode_logs([live]), encode_logs([live, backdated]), fixed_now)

    # Known approximation: the most recent log wins, not the one actually written.
    assert changed == live


def test_unreadable_or_empty_snapshots_yield_nothing(alex, fixed_now):
    log = engine.start_work(alex, fixed_now)

    assert detect_changed_log(encode_logs([log]), "not json", fixed_now) is None
    assert detect_changed_log(encode_logs([log]), encode_logs([]), fixed_now) is None
    assert detect_changed_log(encode_logs([log]), None, fixed_now) is None


def test_unreadable_previous_snapshot_does_not_hide_fresh_change(alex, fixed_now, caplog):
    fresh_checkin = engine.start_work(alex, fixed_now - timedelta(seconds=1))

    assert detect_changed_log("{broken", encode_logs([fresh_checkin]), fixed_now) == fresh_checkin
    assert "Previous log snapshot is unreadable" in caplog.text

def test_classification(alex, fixed_now):
    active = engine.start_work(alex, fixed_now)
    closed = engine.close_work(active, fixed_now + timedelta(hours=1))
    leave = engine.manual_entry(alex, day="2026-02-02", log_type="SICK_LEAVE")
    manual = engine.manual_entry(alex, day="2026-02-02", log_type="OFFICE_WORK", start_time="09:00", end_time="10:00")

    assert classify(active) == NotificationKind.CHECKED_IN
    assert classify(closed) == NotificationKind.CHECKED_OUT
    assert classify(manual) == NotificationKind.CHECKED_OUT
    assert classify(leave) is None

    assert describe(active) == "Alex Rivera checked in at 09:00 AM"
    assert describe(closed) == "Alex Rivera checked out at 10:00 AM"
    assert describe(leave) is None
