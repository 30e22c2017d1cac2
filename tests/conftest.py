from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from lab_hours.auth.model import AuthUser
from lab_hours.lab_sessions.model import LabSession
from lab_hours.lab_sessions.service import LabSessionService
from lab_hours.mentors.model import Mentor
from lab_hours.mentors.service import MentorService
from lab_hours.students.model import Student
from lab_hours.tags.model import Tag
from lab_hours.tags.service import TagService


class InMemoryStudents:
    def __init__(self, students=()):
        self._by_id: dict[int, Student] = {s.id: s for s in students}

    def add(self, student: Student) -> Student:
        self._by_id[student.id] = student
        return student

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(student_id)

    def list_by_last_name(self):
        return sorted(self._by_id.values(), key=lambda s: (s.last_name, s.first_name))

    def replace_all(self, students) -> int:
        self._by_id = {s.id: s for s in students}
        return len(self._by_id)


class InMemoryLabSessions:
    def __init__(self):
        self._by_id: dict[int, LabSession] = {}
        self._id = 0

    def get_by_id(self, session_id: int) -> Optional[LabSession]:
        return self._by_id.get(session_id)

    def get_open_for_student(self, student_id: int) -> Optional[LabSession]:
        for s in self._by_id.values():
            if s.student_id == student_id and s.time_out is None:
                return s
        return None

    def get_last_for_student(self, student_id: int) -> Optional[LabSession]:
        items = [s for s in self._by_id.values() if s.student_id == student_id]
        return max(items, key=lambda s: s.id) if items else None

    def list_for_student(self, student_id: int):
        return [s for s in self._by_id.values() if s.student_id == student_id]

    def list_open(self, *, ordered: bool = False):
        return [s for s in self._by_id.values() if s.time_out is None]

    def list_closed(self):
        return [s for s in self._by_id.values() if s.time_out is not None]

    def create(self, *, student_id: int, time_in: datetime, time_out=None, notes=None, mentor_name=None) -> int:
        self._id += 1
        self._by_id[self._id] = LabSession(
            id=self._id,
            student_id=student_id,
            time_in=time_in,
            time_out=time_out,
            notes=notes,
            mentor_name=mentor_name,
        )
        return self._id

    def update(self, *, session_id: int, time_in, time_out, notes, mentor_name) -> bool:
        current = self._by_id.get(session_id)
        if current is None:
            return False
        self._by_id[session_id] = replace(
            current, time_in=time_in, time_out=time_out, notes=notes, mentor_name=mentor_name
        )
        return True

    def close(self, *, session_id: int, time_out: datetime, mentor_id=None, mentor_name=None) -> bool:
        current = self._by_id.get(session_id)
        if current is None:
            return False
        self._by_id[session_id] = replace(
            current,
            time_out=time_out,
            mentor_id=mentor_id if mentor_id is not None else current.mentor_id,
            mentor_name=mentor_name if mentor_name is not None else current.mentor_name,
        )
        return True

    def delete_by_id(self, session_id: int) -> bool:
        return self._by_id.pop(session_id, None) is not None


class InMemoryMentors:
    def __init__(self, mentors=()):
        self._by_id: dict[int, Mentor] = {m.id: m for m in mentors}

    def get_by_id(self, mentor_id: int) -> Optional[Mentor]:
        return self._by_id.get(mentor_id)

    def get_by_phone_number(self, phone_number: str) -> Optional[Mentor]:
        for m in self._by_id.values():
            if m.phone_number == phone_number:
                return m
        return None

    def list_all(self):
        return list(self._by_id.values())

    def create(self, *, first_name: str, last_name: str, phone_number: str) -> int:
        mentor_id = max(self._by_id, default=0) + 1
        self._by_id[mentor_id] = Mentor(
            id=mentor_id, first_name=first_name, last_name=last_name, phone_number=phone_number
        )
        return mentor_id

    def delete_by_id(self, mentor_id: int) -> bool:
        return self._by_id.pop(mentor_id, None) is not None


class InMemoryTags:
    def __init__(self, tags=()):
        self._by_tag_id: dict[str, Tag] = {t.tag_id: t for t in tags}

    def get_by_tag_id(self, tag_id: str) -> Optional[Tag]:
        return self._by_tag_id.get(tag_id)

    def list_all(self):
        return list(self._by_tag_id.values())

    def create(self, *, tag_id: str, student_id=None, mentor_id=None) -> int:
        new_id = len(self._by_tag_id) + 1
        self._by_tag_id[tag_id] = Tag(id=new_id, tag_id=tag_id, student_id=student_id, mentor_id=mentor_id)
        return new_id

    def reassign(self, *, tag_id: str, student_id, mentor_id) -> bool:
        current = self._by_tag_id.get(tag_id)
        if current is None:
            return False
        self._by_tag_id[tag_id] = replace(current, student_id=student_id, mentor_id=mentor_id)
        return True


class FakeMembers:
    """Stands in for the members service client."""

    def __init__(self, user: Optional[AuthUser] = None, directory=()):
        self.user = user
        self.directory = list(directory)
        self.permission_queries: list[str] = []

    def get_user(self, request) -> Optional[AuthUser]:
        return self.user

    def find_users_with_permission(self, permission: str):
        self.permission_queries.append(permission)
        return self.directory


ADA = Student(id=1001, first_name="Ada", last_name="Lovelace")
ALAN = Student(id=1002, first_name="Alan", last_name="Turing")
PAT = Mentor(id=1, first_name="Pat", last_name="Fairbank", phone_number="5551234567")


@pytest.fixture
def students_repo():
    return InMemoryStudents([ADA, ALAN])


@pytest.fixture
def sessions_repo():
    return InMemoryLabSessions()


@pytest.fixture
def mentors_repo():
    return InMemoryMentors([PAT])


@pytest.fixture
def tags_repo():
    return InMemoryTags(
        [
            Tag(id=1, tag_id="A1", student_id=ADA.id),
            Tag(id=2, tag_id="B2", student_id=ALAN.id),
            Tag(id=3, tag_id="M1", mentor_id=PAT.id),
            Tag(id=4, tag_id="X9"),
        ]
    )


@pytest.fixture
def lab_session_service(sessions_repo, students_repo):
    return LabSessionService(sessions_repo, students_repo)


@pytest.fixture
def mentor_service(mentors_repo):
    return MentorService(mentors_repo)


@pytest.fixture
def tag_service(tags_repo, students_repo, mentors_repo):
    return TagService(tags_repo, students_repo, mentors_repo)


@pytest.fixture
def members():
    return FakeMembers


@pytest.fixture
def admin_user():
    return AuthUser(
        id=7,
        name=("Hopper", "Grace"),
        permissions=frozenset({"HOURS_EDIT", "HOURS_VIEW_REPORT", "HOURS_MANAGE_TAGS"}),
    )


@pytest.fixture
def plain_user():
    return AuthUser(id=8, name=("Doe", "Jane"), permissions=frozenset({"HOURS_SIGN_IN"}))
