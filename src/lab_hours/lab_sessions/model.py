from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import hours_between


@dataclass(frozen=True)
class LabSession:
    """Domain entity: one visit of a student to the lab."""

    id: int
    student_id: int
    time_in: datetime
    time_out: Optional[datetime] = None
    notes: Optional[str] = None
    mentor_name: Optional[str] = None
    mentor_id: Optional[int] = None
    # Read-only extras filled by queries for display
    mentor_full_name: Optional[str] = None
    student_name: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.time_out is None

    @property
    def duration_hours(self) -> Optional[float]:
        if self.time_out is None:
            return None
        return hours_between(self.time_in, self.time_out)

    @property
    def signed_out_by(self) -> Optional[str]:
        return self.mentor_name or self.mentor_full_name
