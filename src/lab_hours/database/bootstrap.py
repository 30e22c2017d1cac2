from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..extensions import db
from . import schema

logger = logging.getLogger(__name__)


def init_schema() -> None:
    """Create missing tables (idempotent). Needs an app context."""
    db.create_all()
    logger.debug("Schema ready (tables=%s)", sorted(db.metadata.tables))


def seed_demo_data(*, now: datetime | None = None) -> None:
    """Load a handful of students, mentors and tags for local development."""
    now = now or datetime.now()

    students = [
        schema.StudentRow(id=1001, first_name="Ada", last_name="Lovelace"),
        schema.StudentRow(id=1002, first_name="Alan", last_name="Turing"),
        schema.StudentRow(id=1003, first_name="Grace", last_name="Hopper"),
    ]
    mentors = [
        schema.MentorRow(first_name="Pat", last_name="Fairbank", phone_number="5551234567"),
        schema.MentorRow(first_name="Jess", last_name="Boucher", phone_number="5559876543"),
    ]
    for row in students:
        db.session.merge(row)
    for row in mentors:
        existing = db.session.execute(
            db.select(schema.MentorRow).where(schema.MentorRow.phone_number == row.phone_number)
        ).first()
        if not existing:
            db.session.add(row)
    db.session.flush()

    if not db.session.execute(db.select(schema.LabSessionRow).limit(1)).first():
        db.session.add(
            schema.LabSessionRow(
                student_id=1001,
                time_in=now - timedelta(days=2, hours=3),
                time_out=now - timedelta(days=2),
                mentor_name="Pat Fairbank",
            )
        )

    tag_owners = {"0001": {"student_id": 1001}, "0002": {"student_id": 1002}}
    for tag_id, owner in tag_owners.items():
        if not db.session.execute(db.select(schema.TagRow).where(schema.TagRow.tag_id == tag_id)).first():
            db.session.add(schema.TagRow(tag_id=tag_id, **owner))

    db.session.commit()
    logger.info("Demo seed ready")
