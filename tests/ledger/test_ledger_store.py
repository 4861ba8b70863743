from __future__ import annotations

import random
from datetime import date, datetime, timedelta

import pytest

from src.attendance_ledger.attendance_ledger.attendance import engine
from src.attendance_ledger.attendance_ledger.core import constants
from src.attendance_ledger.attendance_ledger.core.enums import LogType, Role, Theme
from src.attendance_ledger.attendance_ledger.core.exceptions import StorageError
from src.attendance_ledger.attendance_ledger.ledger.seed import seed_demo_logs
from src.attendance_ledger.attendance_ledger.ledger.store import LedgerStore
from src.attendance_ledger.attendance_ledger.storage.memory import InMemoryStorage
from src.attendance_ledger.attendance_ledger.users.model import SEED_USERS, User


def test_user_list_is_seeded_once(store):
    users = store.list_users()

    assert [u.id for u in users] == ["u1", "u2", "u3"]
    assert store.storage.get(constants.USERS_LIST_KEY) is not None
    assert store.list_users() == list(SEED_USERS)


def test_add_and_remove_user_keeps_insertion_order(store):
    store.add_user(User(id="u9", name="Dana Lee", email="dana@example.com", role=Role.EMPLOYEE))

    assert [u.id for u in store.list_users()] == ["u1", "u2", "u3", "u9"]
    assert store.remove_user("u2") is True
    assert store.remove_user("u2") is False
    assert [u.id for u in store.list_users()] == ["u1", "u3", "u9"]


def test_resave_replaces_in_place(store, alex, sarah, fixed_now):
    first = engine.start_work(alex, fixed_now)
    second = engine.start_work(sarah, fixed_now)
    third = engine.manual_entry(alex, day="2026-02-01", log_type=LogType.SICK_LEAVE)
    for log in (first, second, third):
        store.save_log(log)

    closed = engine.close_work(second, fixed_now + timedelta(hours=8))
    store.save_log(closed)

    logs = store.list_logs()
    assert [l.id for l in logs] == [first.id, second.id, third.id]
    assert logs[1] == closed


def test_logs_round_trip_through_storage(medium, alex, sarah, fixed_now):
    writer = LedgerStore(InMemoryStorage(medium))
    logs = [
        engine.start_work(alex, fixed_now),
        engine.close_work(engine.start_work(sarah, fixed_now), fixed_now + timedelta(seconds=4000)),
        engine.manual_entry(alex, day="2026-01-30", log_type="CASUAL_LEAVE", notes="Moving day"),
        engine.manual_entry(sarah, day="2026-01-29", log_type="OFFICE_WORK", start_time="08:15", end_time="16:45"),
    ]
    writer.save_logs(logs)

    reader = LedgerStore(InMemoryStorage(medium))
    assert reader.list_logs() == logs


def test_active_log_lookup(store, alex, sarah, fixed_now):
    active = engine.start_work(alex, fixed_now)
    store.save_log(active)
    store.save_log(engine.close_work(engine.start_work(sarah, fixed_now), fixed_now))

    assert store.get_active_log("u1") == active
    assert store.get_active_log("u2") is None
    assert store.get_active_log("missing") is None


def test_malformed_logs_payload_raises(store):
    store.storage.set(constants.LOGS_KEY, "{not json")
    with pytest.raises(StorageError):
        store.list_logs()

    store.storage.set(constants.LOGS_KEY, '[{"id": "x"}]')
    with pytest.raises(StorageError):
        store.list_logs()


def test_session_user_round_trip(store, alex):
    assert store.get_session_user() is None

    store.save_session_user(alex)
    assert store.get_session_user() == alex

    store.clear_session_user()
    assert store.get_session_user() is None


def test_theme_defaults_to_dark(store):
    assert store.get_theme() == Theme.DARK

    store.save_theme(Theme.LIGHT)
    assert store.get_theme() == Theme.LIGHT
    assert store.storage.get(constants.THEME_KEY) == "light"

    store.storage.set(constants.THEME_KEY, "neon")
    assert store.get_theme() == Theme.DARK


def test_demo_seed_covers_weekdays_for_employees_only(store):
    today = date(2026, 2, 6)

    count = seed_demo_logs(store, today, rng=random.Random(7))
    logs = store.list_logs()

    assert count == len(logs) == 10 * 2
    assert {l.user_id for l in logs} == {"u1", "u3"}
    assert all(datetime.fromisoformat(l.date).weekday() < 5 for l in logs)
    assert all(l.id == f"log-{l.date}-{l.user_id}" for l in logs)
    for log in logs:
        if log.type == LogType.OFFICE_WORK:
            assert 450 <= log.duration_minutes <= 570
            assert 8 <= log.check_in.hour <= 10
        else:
            assert log.duration_minutes == 0

    assert seed_demo_logs(store, today, rng=random.Random(7)) == 0
