from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_ledger.attendance_ledger.core.enums import Role
from src.attendance_ledger.attendance_ledger.ledger.store import LedgerStore
from src.attendance_ledger.attendance_ledger.storage.memory import InMemoryStorage, SharedMemoryMedium
from src.attendance_ledger.attendance_ledger.users.model import User


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def medium() -> SharedMemoryMedium:
    return SharedMemoryMedium()


@pytest.fixture
def store(medium) -> LedgerStore:
    return LedgerStore(InMemoryStorage(medium))


@pytest.fixture
def alex() -> User:
    return User(id="u1", name="Alex Rivera", email="alex@example.com", role=Role.EMPLOYEE, department="Engineering")


@pytest.fixture
def sarah() -> User:
    return User(id="u2", name="Sarah Chen", email="sarah@example.com", role=Role.HR, department="Human Resources")


class FakeKVCursor:
    """Just enough of a mysql-connector cursor for the ledger kv table."""

    def __init__(self, rows: dict[str, str]):
        self._rows = rows
        self._result: list[dict] = []

    def execute(self, sql: str, params=()):
        statement = " ".join(sql.split())
        if statement.startswith("SELECT v"):
            value = self._rows.get(params[0])
            self._result = [{"v": value}] if value is not None else []
        elif statement.startswith("SELECT k, v"):
            self._result = [{"k": k, "v": v} for k, v in self._rows.items()]
        elif statement.startswith("INSERT"):
            self._rows[params[0]] = params[1]
        elif statement.startswith("DELETE"):
            self._rows.pop(params[0], None)

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeKVConnection:
    def __init__(self, rows: dict[str, str]):
        self._rows = rows

    def cursor(self, dictionary=True):
        return FakeKVCursor(self._rows)

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    """Stands in for DatabaseConnection; every connection shares one table."""

    def __init__(self):
        self.rows: dict[str, str] = {}

    def connect(self, with_database: bool = True):
        return FakeKVConnection(self.rows)


@pytest.fixture
def kv_db() -> FakeConnFactory:
    return FakeConnFactory()
