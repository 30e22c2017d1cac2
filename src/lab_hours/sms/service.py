from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_hours, now_local
from ..common.validators import parse_id
from ..core.constants import SMS_MASS_SIGN_OUT_COMMAND
from ..lab_sessions.service import LabSessionService
from ..mentors.service import MentorService
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)


class SmsCommandService:
    """Turn a text from a mentor's phone into sign-outs.

    The body is either the mass sign-out command or whitespace-separated
    student ids. Failures are reported back as message text, one per id, in
    the order the ids were sent.
    """

    def __init__(self, mentors: MentorService, students: StudentRepository, lab_sessions: LabSessionService):
        self._mentors = mentors
        self._students = students
        self._lab_sessions = lab_sessions

    def handle(self, sender: Optional[str], body: Optional[str], *, now: Optional[datetime] = None) -> list[str]:
        now = now or now_local()
        body = body or ""

        mentor = self._mentors.find_by_phone_number(sender)
        if mentor is None:
            logger.warning("SMS from unknown number %r", sender)
            return ["Error: Don't recognize sender's phone number."]

        if body.lower() == SMS_MASS_SIGN_OUT_COMMAND:
            self._lab_sessions.sign_out_all(mentor=mentor, now=now)
            return ["All students signed out."]

        ids = body.split()
        if not ids:
            return ["Error: No student IDs given."]

        messages = []
        for raw_id in ids:
            student_id = parse_id(raw_id)
            student = self._students.get_by_id(student_id) if student_id is not None else None
            if student is None:
                messages.append("Error: No matching student.")
                continue

            lab_session = self._lab_sessions.find_open_session(student.id)
            if lab_session is None:
                messages.append(f"Error: {student.full_name} is not signed in.")
                continue

            closed = self._lab_sessions.sign_out(lab_session, mentor=mentor, now=now)
            messages.append(f"{student.full_name} signed out after {format_hours(closed.duration_hours)} hours.")
        return messages
