from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flask_login import UserMixin


@dataclass(frozen=True)
class AuthUser(UserMixin):
    """A user resolved by the members service.

    `name` follows the members service convention of `[last, first]`. This is
    what gets cached into the Flask session between requests.
    """

    id: int
    name: tuple[str, str]
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def last_name(self) -> str:
        return self.name[0]

    @property
    def first_name(self) -> str:
        return self.name[1]

    @property
    def name_display(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def has_permission(self, permission) -> bool:
        return getattr(permission, "value", permission) in self.permissions

    def get_id(self) -> str:
        return str(self.id)

    def to_session(self) -> dict[str, Any]:
        return {"id": self.id, "name": list(self.name), "permissions": sorted(self.permissions)}

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "AuthUser":
        name = list(data.get("name") or ["", ""])
        while len(name) < 2:
            name.append("")
        return cls(
            id=int(data["id"]),
            name=(str(name[0]), str(name[1])),
            permissions=frozenset(str(p) for p in data.get("permissions") or []),
        )
