from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_form_datetime
from ..common.validators import parse_id
from ..core.constants import DEBOUNCE_SECONDS
from ..core.exceptions import ValidationError
from ..mentors.model import Mentor
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import LabSession
from .repository import LabSessionRepository

logger = logging.getLogger(__name__)


class LabSessionService:
    """Use case: sign students in and out and let admins fix their records.

    A student never has more than one open session; every path that creates
    a session checks for an existing one first.
    """

    def __init__(
        self,
        sessions: LabSessionRepository,
        students: StudentRepository,
        *,
        ip_whitelist: Sequence[str] = (),
        debounce_seconds: int = DEBOUNCE_SECONDS,
    ):
        self._sessions = sessions
        self._students = students
        self._ip_whitelist = tuple(ip_whitelist)
        self._debounce = timedelta(seconds=int(debounce_seconds))

    # ---- lookups -------------------------------------------------------

    def get_student(self, raw_student_id) -> Student:
        student_id = parse_id(raw_student_id)
        student = self._students.get_by_id(student_id) if student_id is not None else None
        if student is None:
            raise ValidationError("Invalid student.")
        return student

    def get_session(self, raw_session_id) -> LabSession:
        session_id = parse_id(raw_session_id)
        lab_session = self._sessions.get_by_id(session_id) if session_id is not None else None
        if lab_session is None:
            raise ValidationError("Invalid lab session.")
        return lab_session

    def open_sessions(self, *, ordered: bool = False) -> Sequence[LabSession]:
        return self._sessions.list_open(ordered=ordered)

    def sessions_for_student(self, student_id: int) -> Sequence[LabSession]:
        return self._sessions.list_for_student(student_id)

    def find_open_session(self, student_id: int) -> Optional[LabSession]:
        return self._sessions.get_open_for_student(student_id)

    # ---- self-service sign in -----------------------------------------

    def ip_allowed(self, remote_ip: Optional[str]) -> bool:
        if not self._ip_whitelist:
            return True
        return any((remote_ip or "").startswith(prefix) for prefix in self._ip_whitelist)

    def sign_in(self, raw_student_id, *, remote_ip: Optional[str], now: Optional[datetime] = None) -> int:
        now = now or now_local()
        student = self.get_student(raw_student_id)

        if not self.ip_allowed(remote_ip):
            logger.warning("Rejected sign-in for %s from %s", student.id, remote_ip)
            raise ValidationError("Invalid IP address. Must sign in from the Robotics Lab.")

        if self._sessions.get_open_for_student(student.id) is not None:
            raise ValidationError(f"An open lab session already exists for student {student.id}.")

        return self.start_session(student, now=now)

    def start_session(self, student: Student, *, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        session_id = self._sessions.create(student_id=student.id, time_in=now)
        logger.info("Signed in %s (session %s)", student.full_name, session_id)
        return session_id

    def is_debounced(self, student: Student, *, now: Optional[datetime] = None) -> bool:
        """True while the student's last sign-out is within the debounce window.

        Only the most recently created session counts. A student with no
        sessions, or whose last session has no time_out, is never debounced.
        """
        now = now or now_local()
        last = self._sessions.get_last_for_student(student.id)
        if last is None or last.time_out is None:
            return False
        return now - last.time_out <= self._debounce

    # ---- sign out ------------------------------------------------------

    def sign_out(
        self,
        lab_session: LabSession,
        *,
        mentor: Optional[Mentor] = None,
        mentor_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LabSession:
        """Close `lab_session` and return the closed record."""
        now = now or now_local()
        self._sessions.close(
            session_id=lab_session.id,
            time_out=now,
            mentor_id=mentor.id if mentor else None,
            mentor_name=mentor_name,
        )
        closed = self._sessions.get_by_id(lab_session.id)
        logger.info(
            "Signed out session %s after %.2f hours (by %s)",
            lab_session.id,
            closed.duration_hours if closed else 0.0,
            mentor.full_name if mentor else mentor_name,
        )
        return closed

    def sign_out_all(self, *, mentor: Mentor, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        open_sessions = self._sessions.list_open()
        for lab_session in open_sessions:
            self._sessions.close(session_id=lab_session.id, time_out=now, mentor_id=mentor.id)
        logger.info("%s signed out all %d open sessions", mentor.full_name, len(open_sessions))
        return len(open_sessions)

    def force_sign_out(self, raw_session_id, *, acting_name: str, now: Optional[datetime] = None) -> LabSession:
        lab_session = self.get_session(raw_session_id)
        return self.sign_out(lab_session, mentor_name=acting_name, now=now)

    # ---- admin edits ---------------------------------------------------

    def create_for_student(
        self,
        raw_student_id,
        *,
        time_in: Optional[str],
        time_out: Optional[str],
        notes: Optional[str],
        acting_name: str,
    ) -> int:
        student = self.get_student(raw_student_id)
        parsed_in = parse_form_datetime(time_in, "time_in")
        if parsed_in is None:
            raise ValidationError("Invalid time_in.")
        parsed_out = parse_form_datetime(time_out, "time_out")

        session_id = self._sessions.create(
            student_id=student.id,
            time_in=parsed_in,
            time_out=parsed_out,
            notes=notes or None,
            mentor_name=acting_name if parsed_out is not None else None,
        )
        logger.info("%s added session %s for %s", acting_name, session_id, student.full_name)
        return session_id

    def edit(
        self,
        raw_session_id,
        *,
        time_in: Optional[str],
        time_out: Optional[str],
        notes: Optional[str],
        acting_name: str,
    ) -> None:
        lab_session = self.get_session(raw_session_id)
        parsed_in = parse_form_datetime(time_in, "time_in")
        if parsed_in is None:
            raise ValidationError("Invalid time_in.")
        parsed_out = parse_form_datetime(time_out, "time_out")

        # Attribution follows whoever added the sign-out
        if parsed_out is not None and lab_session.time_out is None:
            mentor_name = acting_name
        elif parsed_out is None and lab_session.time_out is not None:
            mentor_name = None
        else:
            mentor_name = lab_session.mentor_name

        self._sessions.update(
            session_id=lab_session.id,
            time_in=parsed_in,
            time_out=parsed_out,
            notes=notes or None,
            mentor_name=mentor_name,
        )
        logger.info("%s edited session %s", acting_name, lab_session.id)

    def delete(self, raw_session_id, *, acting_name: str) -> None:
        lab_session = self.get_session(raw_session_id)
        self._sessions.delete_by_id(lab_session.id)
        logger.info("%s deleted session %s", acting_name, lab_session.id)
