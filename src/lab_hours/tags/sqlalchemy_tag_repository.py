from __future__ import annotations

from typing import Optional, Sequence

from ..database.schema import TagRow
from ..extensions import db
from .model import Tag
from .repository import TagRepository


def _to_tag(row: TagRow) -> Tag:
    return Tag(id=int(row.id), tag_id=row.tag_id, student_id=row.student_id, mentor_id=row.mentor_id)


class SQLAlchemyTagRepository(TagRepository):
    def get_by_tag_id(self, tag_id: str) -> Optional[Tag]:
        row = db.session.execute(db.select(TagRow).where(TagRow.tag_id == tag_id)).scalar_one_or_none()
        return _to_tag(row) if row else None

    def list_all(self) -> Sequence[Tag]:
        return [_to_tag(r) for r in db.session.execute(db.select(TagRow).order_by(TagRow.id)).scalars()]

    def create(self, *, tag_id: str, student_id: Optional[int] = None, mentor_id: Optional[int] = None) -> int:
        row = TagRow(tag_id=tag_id, student_id=student_id, mentor_id=mentor_id)
        db.session.add(row)
        db.session.commit()
        return int(row.id)

    def reassign(self, *, tag_id: str, student_id: Optional[int], mentor_id: Optional[int]) -> bool:
        row = db.session.execute(db.select(TagRow).where(TagRow.tag_id == tag_id)).scalar_one_or_none()
        if row is None:
            return False
        row.student_id = student_id
        row.mentor_id = mentor_id
        db.session.commit()
        return True
