from __future__ import annotations

from typing import Optional, Sequence

from ..database.schema import LabSessionRow, MentorRow, TagRow
from ..extensions import db
from .model import Mentor
from .repository import MentorRepository


def _to_mentor(row: MentorRow) -> Mentor:
    return Mentor(
        id=int(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        phone_number=row.phone_number,
    )


class SQLAlchemyMentorRepository(MentorRepository):
    def get_by_id(self, mentor_id: int) -> Optional[Mentor]:
        row = db.session.get(MentorRow, mentor_id)
        return _to_mentor(row) if row else None

    def get_by_phone_number(self, phone_number: str) -> Optional[Mentor]:
        row = db.session.execute(
            db.select(MentorRow).where(MentorRow.phone_number == phone_number).order_by(MentorRow.id).limit(1)
        ).scalar_one_or_none()
        return _to_mentor(row) if row else None

    def list_all(self) -> Sequence[Mentor]:
        rows = db.session.execute(db.select(MentorRow).order_by(MentorRow.last_name, MentorRow.first_name)).scalars()
        return [_to_mentor(r) for r in rows]

    def create(self, *, first_name: str, last_name: str, phone_number: str) -> int:
        row = MentorRow(first_name=first_name, last_name=last_name, phone_number=phone_number)
        db.session.add(row)
        db.session.commit()
        return int(row.id)

    def delete_by_id(self, mentor_id: int) -> bool:
        row = db.session.get(MentorRow, mentor_id)
        if row is None:
            return False
        # Past sign-outs keep their time_out but lose the mentor link
        db.session.execute(
            db.update(LabSessionRow).where(LabSessionRow.mentor_id == mentor_id).values(mentor_id=None)
        )
        db.session.execute(db.update(TagRow).where(TagRow.mentor_id == mentor_id).values(mentor_id=None))
        db.session.delete(row)
        db.session.commit()
        return True
