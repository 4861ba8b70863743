from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a person whose attendance is tracked.

    Plain data object; serialization mirrors the stored JSON layout.
    """

    id: str
    name: str
    email: str
    role: Role
    department: Optional[str] = None
    avatar: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }
        if self.department is not None:
            data["department"] = self.department
        if self.avatar is not None:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            email=str(data.get("email") or ""),
            role=Role(data.get("role", Role.EMPLOYEE.value)),
            department=data.get("department"),
            avatar=data.get("avatar"),
        )


SEED_USERS: tuple[User, ...] = (
    User(
        id="u1",
        name="Alex Rivera",
        email="alex.rivera@ledger.local",
        role=Role.EMPLOYEE,
        department="Engineering",
        avatar="https://picsum.photos/100/100",
    ),
    User(
        id="u2",
        name="Sarah Chen",
        email="sarah.chen@ledger.local",
        role=Role.HR,
        department="Human Resources",
        avatar="https://picsum.photos/101/101",
    ),
    User(
        id="u3",
        name="Jordan Smith",
        email="jordan.smith@ledger.local",
        role=Role.EMPLOYEE,
        department="Design",
        avatar="https://picsum.photos/102/102",
    ),
)
