from __future__ import annotations

import logging
import uuid
from typing import Optional
from urllib.parse import quote

from ..common.validators import require_email, require_non_empty
from ..core.constants import AVATAR_URL_TEMPLATE
from ..core.enums import Role, Theme
from ..core.exceptions import ValidationError
from ..sync.sheets import ReplicationSink
from .model import User
from .repository import SessionRepository, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage the user registry (HR)."""

    def __init__(self, users: UserRepository, *, replication: Optional[ReplicationSink] = None):
        self._users = users
        self._replication = replication

    def list_users(self) -> list[User]:
        return list(self._users.list_users())

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get_user(user_id)

    def add_user(self, *, name: str, email: str, role: Role | str = Role.EMPLOYEE, department: str = "") -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        try:
            role = Role(role)
        except ValueError as e:
            raise ValidationError(f"Unknown role: {role!r}") from e

        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            role=role,
            department=(department or "").strip() or None,
            avatar=AVATAR_URL_TEMPLATE.format(name=quote(name)),
        )
        self._users.add_user(user)

        if self._replication is not None:
            try:
                self._replication.sync_user(user)
            except Exception:
                logger.exception("Could not schedule replication for user %s", user.id)
        return user

    def remove_user(self, user_id: str) -> bool:
        """Remove from the registry; the user's historical logs are kept."""
        return self._users.remove_user(user_id)


class SessionService:
    """Use case: who is using this session, and with which theme."""

    def __init__(self, session: SessionRepository, users: UserRepository):
        self._session = session
        self._users = users

    def login(self, user_id: str) -> User:
        user = self._users.get_user(user_id)
        if not user:
            raise ValidationError("User does not exist")
        self._session.save_session_user(user)
        return user

    def logout(self) -> None:
        self._session.clear_session_user()

    def current_user(self) -> Optional[User]:
        return self._session.get_session_user()

    def theme(self) -> Theme:
        return self._session.get_theme()

    def set_theme(self, theme: Theme | str) -> Theme:
        try:
            theme = Theme(theme)
        except ValueError as e:
            raise ValidationError(f"Unknown theme: {theme!r}") from e
        self._session.save_theme(theme)
        return theme

    def toggle_theme(self) -> Theme:
        current = self._session.get_theme()
        return self.set_theme(Theme.LIGHT if current == Theme.DARK else Theme.DARK)
