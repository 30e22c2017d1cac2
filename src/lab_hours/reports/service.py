from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

import pandas as pd

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_STRIKE_MIN_HOURS, STRIKE_WEEK_DAYS
from ..lab_sessions.model import LabSession
from ..lab_sessions.repository import LabSessionRepository
from ..students.model import Student
from ..students.repository import StudentRepository

CSV_HEADER = ["Last Name", "First Name", "Student ID", "Project Hours"]


@dataclass(frozen=True)
class Week:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class StrikeRow:
    student: Student
    weekly_hours: list[float]
    strikes: int


@dataclass(frozen=True)
class StrikeReport:
    weeks: list[Week]
    rows: list[StrikeRow]
    min_hours: float


class ReportService:
    def __init__(
        self,
        students: StudentRepository,
        sessions: LabSessionRepository,
        *,
        strike_start: datetime,
        min_hours: float = DEFAULT_STRIKE_MIN_HOURS,
    ):
        self._students = students
        self._sessions = sessions
        self._strike_start = strike_start
        self._min_hours = min_hours

    def csv_report(self) -> str:
        """One row per student by last name; values are joined without quoting."""
        rows = [",".join(CSV_HEADER)]
        for s in self._students.list_by_last_name():
            rows.append(",".join([s.last_name, s.first_name, str(s.id), str(round(s.project_hours, 2))]))
        return "\n".join(rows)

    def strike_weeks(self, *, now: Optional[datetime] = None) -> list[Week]:
        """Consecutive 7-day windows from the report start until one ends after `now`."""
        now = now or now_local()
        weeks = []
        start = self._strike_start
        while True:
            end = start + timedelta(days=STRIKE_WEEK_DAYS)
            weeks.append(Week(start=start, end=end))
            start = end
            if start >= now:
                break
        return weeks

    def strike_report(self, *, now: Optional[datetime] = None) -> StrikeReport:
        now = now or now_local()
        weeks = self.strike_weeks(now=now)
        table = self._weekly_hours(self._sessions.list_closed(), len(weeks))

        rows = []
        for student in self._students.list_by_last_name():
            if student.id in table.index:
                hours = [float(h) for h in table.loc[student.id]]
            else:
                hours = [0.0] * len(weeks)
            # The week in progress cannot be a strike yet
            strikes = sum(1 for week, h in zip(weeks, hours) if week.end <= now and h < self._min_hours)
            rows.append(StrikeRow(student=student, weekly_hours=hours, strikes=strikes))

        return StrikeReport(weeks=weeks, rows=rows, min_hours=self._min_hours)

    def _weekly_hours(self, sessions: Sequence[LabSession], week_count: int) -> pd.DataFrame:
        """Hours per student (index) per week number (columns)."""
        empty = pd.DataFrame(columns=range(week_count), dtype=float)
        frame = pd.DataFrame(
            [{"student_id": s.student_id, "time_in": s.time_in, "hours": s.duration_hours} for s in sessions],
            columns=["student_id", "time_in", "hours"],
        )
        if frame.empty:
            return empty

        frame["time_in"] = pd.to_datetime(frame["time_in"])
        frame["week"] = (frame["time_in"] - pd.Timestamp(self._strike_start)) // pd.Timedelta(days=STRIKE_WEEK_DAYS)
        frame = frame[(frame["week"] >= 0) & (frame["week"] < week_count)]
        if frame.empty:
            return empty

        table = frame.pivot_table(index="student_id", columns="week", values="hours", aggfunc="sum", fill_value=0.0)
        return table.reindex(columns=range(week_count), fill_value=0.0)
