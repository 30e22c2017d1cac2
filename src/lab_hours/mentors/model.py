from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Mentor:
    id: int
    first_name: str
    last_name: str
    phone_number: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
