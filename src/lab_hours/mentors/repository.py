from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Mentor


class MentorRepository(Protocol):
    def get_by_id(self, mentor_id: int) -> Optional[Mentor]:
        raise NotImplementedError

    def get_by_phone_number(self, phone_number: str) -> Optional[Mentor]:
        """Lookup by an already normalized 10-digit number."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Mentor]:
        raise NotImplementedError

    def create(self, *, first_name: str, last_name: str, phone_number: str) -> int:
        raise NotImplementedError

    def delete_by_id(self, mentor_id: int) -> bool:
        raise NotImplementedError
