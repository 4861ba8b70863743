from __future__ import annotations

from src.attendance_ledger.attendance_ledger.storage.memory import InMemoryStorage, SharedMemoryMedium
from src.attendance_ledger.attendance_ledger.storage.port import StorageEvent


def test_sessions_share_values_and_notify_others_only():
    medium = SharedMemoryMedium()
    tab_a = medium.open_session()
    tab_b = medium.open_session()
    seen_a, seen_b = [], []
    tab_a.subscribe(seen_a.append)
    tab_b.subscribe(seen_b.append)

    tab_a.set("k", "1")
    tab_a.set("k", "2")

    assert tab_b.get("k") == "2"
    assert seen_a == []
    assert seen_b == [StorageEvent("k", None, "1"), StorageEvent("k", "1", "2")]


def test_unchanged_write_is_silent():
    medium = SharedMemoryMedium()
    tab_a, tab_b = InMemoryStorage(medium), InMemoryStorage(medium)
    seen = []
    tab_b.subscribe(seen.append)

    tab_a.set("k", "same")
    tab_a.set("k", "same")

    assert len(seen) == 1


def test_remove_and_unsubscribe():
    medium = SharedMemoryMedium()
    tab_a, tab_b = medium.open_session(), medium.open_session()
    seen = []
    unsubscribe = tab_b.subscribe(seen.append)

    tab_a.set("k", "v")
    tab_a.remove("k")
    unsubscribe()
    tab_a.set("k", "again")

    assert tab_b.get("k") == "again"
    assert seen == [StorageEvent("k", None, "v"), StorageEvent("k", "v", None)]


def test_closed_session_gets_no_events():
    medium = SharedMemoryMedium()
    tab_a, tab_b = medium.open_session(), medium.open_session()
    seen = []
    tab_b.subscribe(seen.append)

    medium.close_session(tab_b)
    tab_a.set("k", "v")

    assert seen == []


def test_failing_listener_does_not_block_others():
    medium = SharedMemoryMedium()
    tab_a, tab_b = medium.open_session(), medium.open_session()
    seen = []

    def boom(event):
        raise RuntimeError("render failed")

    tab_b.subscribe(boom)
    tab_b.subscribe(seen.append)
    tab_a.set("k", "v")

    assert len(seen) == 1
