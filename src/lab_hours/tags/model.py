from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import OwnerKind
from ..mentors.model import Mentor
from ..students.model import Student


@dataclass(frozen=True)
class Tag:
    """A physical RFID tag and whoever it is assigned to."""

    id: int
    tag_id: str
    student_id: Optional[int] = None
    mentor_id: Optional[int] = None


@dataclass(frozen=True)
class TagOwner:
    """Who a scanned tag resolves to.

    Exactly one of `student`/`mentor` is set for STUDENT/MENTOR owners, and
    neither for UNASSIGNED.
    """

    kind: OwnerKind
    tag_id: str
    student: Optional[Student] = None
    mentor: Optional[Mentor] = None

    @classmethod
    def unassigned(cls, tag_id: str) -> "TagOwner":
        return cls(kind=OwnerKind.UNASSIGNED, tag_id=tag_id)

    @classmethod
    def for_student(cls, tag_id: str, student: Student) -> "TagOwner":
        return cls(kind=OwnerKind.STUDENT, tag_id=tag_id, student=student)

    @classmethod
    def for_mentor(cls, tag_id: str, mentor: Mentor) -> "TagOwner":
        return cls(kind=OwnerKind.MENTOR, tag_id=tag_id, mentor=mentor)

    @property
    def name(self) -> Optional[str]:
        if self.kind is OwnerKind.STUDENT:
            return self.student.full_name
        if self.kind is OwnerKind.MENTOR:
            return self.mentor.full_name
        return None

    @property
    def owner_id(self) -> Optional[int]:
        if self.kind is OwnerKind.STUDENT:
            return self.student.id
        if self.kind is OwnerKind.MENTOR:
            return self.mentor.id
        return None

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.kind.value, "tag_id": self.tag_id, "id": self.owner_id, "name": self.name}
