from __future__ import annotations

from typing import Optional, Sequence

from ..database.schema import LabSessionRow, StudentRow, TagRow
from ..extensions import db
from .model import Student
from .repository import StudentRepository


def _project_hours(row: StudentRow) -> float:
    total = 0.0
    for s in row.lab_sessions:
        if s.time_out is not None:
            total += (s.time_out - s.time_in).total_seconds() / 3600
    return total


def _to_student(row: StudentRow, *, with_hours: bool = False) -> Student:
    return Student(
        id=int(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        project_hours=_project_hours(row) if with_hours else 0.0,
    )


class SQLAlchemyStudentRepository(StudentRepository):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        row = db.session.get(StudentRow, student_id)
        return _to_student(row, with_hours=True) if row else None

    def list_by_last_name(self) -> Sequence[Student]:
        rows = db.session.execute(
            db.select(StudentRow).order_by(StudentRow.last_name, StudentRow.first_name)
        ).scalars()
        return [_to_student(r, with_hours=True) for r in rows]

    def replace_all(self, students: Sequence[Student]) -> int:
        incoming = {s.id: s for s in students}

        for row in db.session.execute(db.select(StudentRow)).scalars():
            if row.id in incoming:
                continue
            # Keep students that still own history so sessions are never orphaned
            has_history = db.session.execute(
                db.select(LabSessionRow.id).where(LabSessionRow.student_id == row.id).limit(1)
            ).first() or db.session.execute(
                db.select(TagRow.id).where(TagRow.student_id == row.id).limit(1)
            ).first()
            if not has_history:
                db.session.delete(row)

        for s in incoming.values():
            row = db.session.get(StudentRow, s.id)
            if row is None:
                db.session.add(StudentRow(id=s.id, first_name=s.first_name, last_name=s.last_name))
            else:
                row.first_name = s.first_name
                row.last_name = s.last_name

        db.session.commit()
        return db.session.execute(db.select(db.func.count(StudentRow.id))).scalar_one()
