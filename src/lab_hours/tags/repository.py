from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Tag


class TagRepository(Protocol):
    def get_by_tag_id(self, tag_id: str) -> Optional[Tag]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Tag]:
        raise NotImplementedError

    def create(self, *, tag_id: str, student_id: Optional[int] = None, mentor_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def reassign(self, *, tag_id: str, student_id: Optional[int], mentor_id: Optional[int]) -> bool:
        """Point an existing tag at one owner, clearing the other."""
        raise NotImplementedError
