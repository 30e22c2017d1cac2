from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .auth.client import MembersClient
from .lab_sessions.service import LabSessionService
from .lab_sessions.sqlalchemy_lab_session_repository import SQLAlchemyLabSessionRepository
from .mentors.service import MentorService
from .mentors.sqlalchemy_mentor_repository import SQLAlchemyMentorRepository
from .reports.service import ReportService
from .sms.service import SmsCommandService
from .students.service import StudentService
from .students.sqlalchemy_student_repository import SQLAlchemyStudentRepository
from .tags.bridge import TagBridge
from .tags.service import TagService
from .tags.sqlalchemy_tag_repository import SQLAlchemyTagRepository


@dataclass(frozen=True)
class Container:
    members_client: Any

    students_repo: SQLAlchemyStudentRepository
    mentors_repo: SQLAlchemyMentorRepository
    lab_sessions_repo: SQLAlchemyLabSessionRepository
    tags_repo: SQLAlchemyTagRepository

    student_service: StudentService
    mentor_service: MentorService
    lab_session_service: LabSessionService
    sms_service: SmsCommandService
    tag_service: TagService
    report_service: ReportService
    tag_bridge: TagBridge


def build_container(*, config: Mapping[str, Any], members_client=None) -> Container:
    if members_client is None:
        members_client = MembersClient(
            config["MEMBERS_URL"],
            cookie_name=config.get("MEMBERS_SESSION_COOKIE", "session"),
            timeout=float(config.get("MEMBERS_TIMEOUT_SECONDS", 5)),
        )

    students_repo = SQLAlchemyStudentRepository()
    mentors_repo = SQLAlchemyMentorRepository()
    lab_sessions_repo = SQLAlchemyLabSessionRepository()
    tags_repo = SQLAlchemyTagRepository()

    student_service = StudentService(students_repo)
    mentor_service = MentorService(mentors_repo)
    lab_session_service = LabSessionService(
        lab_sessions_repo,
        students_repo,
        ip_whitelist=config.get("SIGNIN_IP_WHITELIST") or (),
    )
    sms_service = SmsCommandService(mentor_service, students_repo, lab_session_service)
    tag_service = TagService(tags_repo, students_repo, mentors_repo)
    report_service = ReportService(
        students_repo,
        lab_sessions_repo,
        strike_start=config["STRIKE_REPORT_START"],
        min_hours=config.get("STRIKE_MIN_HOURS", 5),
    )
    tag_bridge = TagBridge(tag_service, lab_session_service)

    return Container(
        members_client=members_client,
        students_repo=students_repo,
        mentors_repo=mentors_repo,
        lab_sessions_repo=lab_sessions_repo,
        tags_repo=tags_repo,
        student_service=student_service,
        mentor_service=mentor_service,
        lab_session_service=lab_session_service,
        sms_service=sms_service,
        tag_service=tag_service,
        report_service=report_service,
        tag_bridge=tag_bridge,
    )
