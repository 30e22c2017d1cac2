from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.schema import LabSessionRow
from ..extensions import db
from .model import LabSession
from .repository import LabSessionRepository


def _to_session(row: LabSessionRow) -> LabSession:
    mentor = row.mentor
    student = row.student
    return LabSession(
        id=int(row.id),
        student_id=int(row.student_id),
        time_in=row.time_in,
        time_out=row.time_out,
        notes=row.notes,
        mentor_name=row.mentor_name,
        mentor_id=row.mentor_id,
        mentor_full_name=f"{mentor.first_name} {mentor.last_name}" if mentor else None,
        student_name=f"{student.first_name} {student.last_name}" if student else None,
    )


class SQLAlchemyLabSessionRepository(LabSessionRepository):
    def get_by_id(self, session_id: int) -> Optional[LabSession]:
        row = db.session.get(LabSessionRow, session_id)
        return _to_session(row) if row else None

    def get_open_for_student(self, student_id: int) -> Optional[LabSession]:
        row = db.session.execute(
            db.select(LabSessionRow)
            .where(LabSessionRow.student_id == student_id, LabSessionRow.time_out.is_(None))
            .order_by(LabSessionRow.id)
            .limit(1)
        ).scalar_one_or_none()
        return _to_session(row) if row else None

    def get_last_for_student(self, student_id: int) -> Optional[LabSession]:
        row = db.session.execute(
            db.select(LabSessionRow)
            .where(LabSessionRow.student_id == student_id)
            .order_by(LabSessionRow.id.desc())
            .limit(1)
        ).scalar_one_or_none()
        return _to_session(row) if row else None

    def list_for_student(self, student_id: int) -> Sequence[LabSession]:
        rows = db.session.execute(
            db.select(LabSessionRow).where(LabSessionRow.student_id == student_id).order_by(LabSessionRow.id)
        ).scalars()
        return [_to_session(r) for r in rows]

    def list_open(self, *, ordered: bool = False) -> Sequence[LabSession]:
        stmt = db.select(LabSessionRow).where(LabSessionRow.time_out.is_(None))
        if ordered:
            stmt = stmt.order_by(LabSessionRow.id)
        return [_to_session(r) for r in db.session.execute(stmt).scalars()]

    def list_closed(self) -> Sequence[LabSession]:
        rows = db.session.execute(
            db.select(LabSessionRow).where(LabSessionRow.time_out.is_not(None)).order_by(LabSessionRow.id)
        ).scalars()
        return [_to_session(r) for r in rows]

    def create(
        self,
        *,
        student_id: int,
        time_in: datetime,
        time_out: Optional[datetime] = None,
        notes: Optional[str] = None,
        mentor_name: Optional[str] = None,
    ) -> int:
        row = LabSessionRow(
            student_id=student_id,
            time_in=time_in,
            time_out=time_out,
            notes=notes,
            mentor_name=mentor_name,
        )
        db.session.add(row)
        db.session.commit()
        return int(row.id)

    def update(
        self,
        *,
        session_id: int,
        time_in: datetime,
        time_out: Optional[datetime],
        notes: Optional[str],
        mentor_name: Optional[str],
    ) -> bool:
        row = db.session.get(LabSessionRow, session_id)
        if row is None:
            return False
        row.time_in = time_in
        row.time_out = time_out
        row.notes = notes
        row.mentor_name = mentor_name
        db.session.commit()
        return True

    def close(
        self,
        *,
        session_id: int,
        time_out: datetime,
        mentor_id: Optional[int] = None,
        mentor_name: Optional[str] = None,
    ) -> bool:
        row = db.session.get(LabSessionRow, session_id)
        if row is None:
            return False
        row.time_out = time_out
        if mentor_id is not None:
            row.mentor_id = mentor_id
        if mentor_name is not None:
            row.mentor_name = mentor_name
        db.session.commit()
        return True

    def delete_by_id(self, session_id: int) -> bool:
        row = db.session.get(LabSessionRow, session_id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True
