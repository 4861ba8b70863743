from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Theme
from .model import User


class UserRepository(Protocol):
    """Repository interface for the user registry.

    Note (DIP): services depend on this interface, not on a concrete storage.
    """

    def list_users(self) -> Sequence[User]:
        raise NotImplementedError

    def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def add_user(self, user: User) -> None:
        raise NotImplementedError

    def remove_user(self, user_id: str) -> bool:
        raise NotImplementedError


class SessionRepository(Protocol):
    """Current session user and display preference."""

    def get_session_user(self) -> Optional[User]:
        raise NotImplementedError

    def save_session_user(self, user: User) -> None:
        raise NotImplementedError

    def clear_session_user(self) -> None:
        raise NotImplementedError

    def get_theme(self) -> Theme:
        raise NotImplementedError

    def save_theme(self, theme: Theme) -> None:
        raise NotImplementedError
