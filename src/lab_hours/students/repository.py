from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_by_last_name(self) -> Sequence[Student]:
        """All students ordered by last name, with project_hours filled."""
        raise NotImplementedError

    def replace_all(self, students: Sequence[Student]) -> int:
        """Make the table match `students`; returns the resulting row count."""
        raise NotImplementedError
