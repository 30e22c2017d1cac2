from __future__ import annotations

import logging
from typing import Protocol, Sequence

from ..auth.model import AuthUser
from ..core.enums import Permission
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class MemberDirectory(Protocol):
    def find_users_with_permission(self, permission: str) -> Sequence[AuthUser]:
        raise NotImplementedError


class StudentService:
    """Use case: student listings and re-indexing from the members service."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self) -> Sequence[Student]:
        return self._students.list_by_last_name()

    def leader_board(self) -> list[Student]:
        students = list(self._students.list_by_last_name())
        students.sort(key=lambda s: s.project_hours, reverse=True)
        return students

    def reindex(self, directory: MemberDirectory) -> int:
        members = directory.find_users_with_permission(Permission.HOURS_SIGN_IN.value)
        students = [Student(id=int(m.id), first_name=m.first_name, last_name=m.last_name) for m in members]
        count = self._students.replace_all(students)
        logger.info("Re-indexed students: %d from members service, %d in table", len(students), count)
        return count
