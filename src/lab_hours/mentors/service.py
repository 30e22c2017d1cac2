from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import normalize_phone_number, require_non_empty
from ..core.exceptions import ValidationError
from .model import Mentor
from .repository import MentorRepository

logger = logging.getLogger(__name__)


class MentorService:
    """Use case: manage the mentor directory."""

    def __init__(self, mentors: MentorRepository):
        self._mentors = mentors

    def list_mentors(self) -> Sequence[Mentor]:
        return self._mentors.list_all()

    def get_mentor(self, mentor_id: Optional[int]) -> Mentor:
        mentor = self._mentors.get_by_id(mentor_id) if mentor_id is not None else None
        if mentor is None:
            raise ValidationError("Invalid mentor.")
        return mentor

    def find_by_phone_number(self, raw_phone_number: Optional[str]) -> Optional[Mentor]:
        phone_number = normalize_phone_number(raw_phone_number)
        if phone_number is None:
            return None
        return self._mentors.get_by_phone_number(phone_number)

    def create_mentor(self, *, first_name: Optional[str], last_name: Optional[str], phone_number: Optional[str]) -> int:
        first_name = require_non_empty(first_name, "Missing first name.")
        last_name = require_non_empty(last_name, "Missing last name.")
        raw_phone = require_non_empty(phone_number, "Missing phone number.")

        normalized = normalize_phone_number(raw_phone)
        if normalized is None:
            raise ValidationError("Invalid phone number.")

        mentor_id = self._mentors.create(first_name=first_name, last_name=last_name, phone_number=normalized)
        logger.info("Created mentor %s %s (%s)", first_name, last_name, normalized)
        return mentor_id

    def delete_mentor(self, mentor_id: Optional[int]) -> None:
        mentor = self.get_mentor(mentor_id)
        self._mentors.delete_by_id(mentor.id)
        logger.info("Deleted mentor %s", mentor.full_name)
