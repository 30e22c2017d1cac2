from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import parse_id
from ..core.enums import OwnerKind
from ..core.exceptions import ValidationError
from ..mentors.repository import MentorRepository
from ..students.repository import StudentRepository
from .model import Tag, TagOwner
from .repository import TagRepository

logger = logging.getLogger(__name__)


class TagService:
    """Use case: look up and (re)assign RFID tags."""

    def __init__(self, tags: TagRepository, students: StudentRepository, mentors: MentorRepository):
        self._tags = tags
        self._students = students
        self._mentors = mentors

    def get_tag(self, tag_id: str) -> Optional[Tag]:
        return self._tags.get_by_tag_id(tag_id)

    def list_tags(self) -> Sequence[Tag]:
        return self._tags.list_all()

    def resolve_owner(self, tag_id: str) -> TagOwner:
        """Resolve a tag id to its owner; unknown or ownerless tags are UNASSIGNED."""
        tag = self._tags.get_by_tag_id(tag_id)
        if tag is None:
            return TagOwner.unassigned(tag_id)

        if tag.student_id is not None:
            student = self._students.get_by_id(tag.student_id)
            if student is not None:
                return TagOwner.for_student(tag_id, student)
        elif tag.mentor_id is not None:
            mentor = self._mentors.get_by_id(tag.mentor_id)
            if mentor is not None:
                return TagOwner.for_mentor(tag_id, mentor)

        return TagOwner.unassigned(tag_id)

    def assign(self, tag_id: Optional[str], raw_owner_id: Optional[str], mode: Optional[str]) -> Tag:
        try:
            kind = OwnerKind(mode)
        except ValueError:
            kind = None
        if kind not in (OwnerKind.STUDENT, OwnerKind.MENTOR):
            raise ValidationError("Parameter 'mode' is missing.")

        if not tag_id or not tag_id.strip():
            raise ValidationError("Parameter 'tag' is missing.")
        tag_id = tag_id.strip()

        owner_id = parse_id(raw_owner_id)
        if owner_id is None:
            raise ValidationError("Parameter 'id' is missing.")

        if kind is OwnerKind.STUDENT:
            if self._students.get_by_id(owner_id) is None:
                raise ValidationError("Invalid student.")
            student_id, mentor_id = owner_id, None
        else:
            if self._mentors.get_by_id(owner_id) is None:
                raise ValidationError("Invalid mentor.")
            student_id, mentor_id = None, owner_id

        if self._tags.get_by_tag_id(tag_id) is None:
            self._tags.create(tag_id=tag_id, student_id=student_id, mentor_id=mentor_id)
            logger.info("Assigned new tag %s to %s %s", tag_id, kind.value, owner_id)
        else:
            self._tags.reassign(tag_id=tag_id, student_id=student_id, mentor_id=mentor_id)
            logger.info("Reassigned tag %s to %s %s", tag_id, kind.value, owner_id)
        return self._tags.get_by_tag_id(tag_id)
