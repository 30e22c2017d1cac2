from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import LabSession


class LabSessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[LabSession]:
        raise NotImplementedError

    def get_open_for_student(self, student_id: int) -> Optional[LabSession]:
        raise NotImplementedError

    def get_last_for_student(self, student_id: int) -> Optional[LabSession]:
        """Most recently created session, open or closed."""
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[LabSession]:
        raise NotImplementedError

    def list_open(self, *, ordered: bool = False) -> Sequence[LabSession]:
        raise NotImplementedError

    def list_closed(self) -> Sequence[LabSession]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        time_in: datetime,
        time_out: Optional[datetime] = None,
        notes: Optional[str] = None,
        mentor_name: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        session_id: int,
        time_in: datetime,
        time_out: Optional[datetime],
        notes: Optional[str],
        mentor_name: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def close(
        self,
        *,
        session_id: int,
        time_out: datetime,
        mentor_id: Optional[int] = None,
        mentor_name: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, session_id: int) -> bool:
        raise NotImplementedError
