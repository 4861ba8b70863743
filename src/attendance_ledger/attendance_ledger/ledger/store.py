from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from ..attendance.engine import find_active
from ..attendance.model import TimeLog
from ..core import constants
from ..core.enums import Theme
from ..core.exceptions import StorageError
from ..storage.port import KeyValueStorage
from ..users.model import SEED_USERS, User

logger = logging.getLogger(__name__)


def decode_logs(raw: Optional[str]) -> list[TimeLog]:
    """Deserialize a stored log collection.

    Raises StorageError when the payload is not a JSON list of logs.
    """
    if raw is None:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise TypeError(f"expected a list, got {type(items).__name__}")
        return [TimeLog.from_dict(item) for item in items]
    except (TypeError, ValueError, KeyError) as e:
        raise StorageError(f"Malformed log collection: {e}") from e


def encode_logs(logs: Sequence[TimeLog]) -> str:
    return json.dumps([log.to_dict() for log in logs])


class LedgerStore:
    """Durable keyed storage of users, time logs, session user and theme.

    Every collection lives under one key as a single JSON document. Writes
    read the whole collection, change it in memory and write it back, so
    concurrent sessions race at collection granularity (last write wins).
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    def _read_json(self, key: str) -> Any:
        raw = self._storage.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Malformed payload under {key!r}: {e}") from e

    def _write_json(self, key: str, value: Any) -> None:
        self._storage.set(key, json.dumps(value))

    # Users

    def list_users(self) -> list[User]:
        data = self._read_json(constants.USERS_LIST_KEY)
        if data is None:
            users = list(SEED_USERS)
            self._save_users(users)
            return users
        try:
            return [User.from_dict(item) for item in data]
        except (TypeError, ValueError, KeyError) as e:
            raise StorageError(f"Malformed user list: {e}") from e

    def _save_users(self, users: Sequence[User]) -> None:
        self._write_json(constants.USERS_LIST_KEY, [u.to_dict() for u in users])

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.id == user_id), None)

    def add_user(self, user: User) -> None:
        users = self.list_users()
        users.append(user)
        self._save_users(users)

    def remove_user(self, user_id: str) -> bool:
        users = self.list_users()
        remaining = [u for u in users if u.id != user_id]
        self._save_users(remaining)
        return len(remaining) != len(users)

    # Logs

    def list_logs(self) -> list[TimeLog]:
        return decode_logs(self._storage.get(constants.LOGS_KEY))

    def has_logs(self) -> bool:
        return self._storage.get(constants.LOGS_KEY) is not None

    def save_log(self, log: TimeLog) -> None:
        logs = self.list_logs()
        index = next((i for i, existing in enumerate(logs) if existing.id == log.id), None)
        if index is None:
            logs.append(log)
        else:
            logs[index] = log
        self.save_logs(logs)

    def save_logs(self, logs: Sequence[TimeLog]) -> None:
        self._storage.set(constants.LOGS_KEY, encode_logs(logs))

    def get_active_log(self, user_id: str) -> Optional[TimeLog]:
        return find_active(self.list_logs(), user_id)

    # Session & preferences

    def get_session_user(self) -> Optional[User]:
        data = self._read_json(constants.USER_KEY)
        if data is None:
            return None
        try:
            return User.from_dict(data)
        except (TypeError, ValueError, KeyError) as e:
            raise StorageError(f"Malformed session user: {e}") from e

    def save_session_user(self, user: User) -> None:
        self._write_json(constants.USER_KEY, user.to_dict())

    def clear_session_user(self) -> None:
        self._storage.remove(constants.USER_KEY)

    def get_theme(self) -> Theme:
        raw = self._storage.get(constants.THEME_KEY)
        try:
            return Theme(raw) if raw else Theme.DARK
        except ValueError:
            logger.warning("Unknown theme %r in storage, using dark", raw)
            return Theme.DARK

    def save_theme(self, theme: Theme) -> None:
        self._storage.set(constants.THEME_KEY, Theme(theme).value)
