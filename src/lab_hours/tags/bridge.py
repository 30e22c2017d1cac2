from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import format_hours, now_local
from ..core.enums import OwnerKind, PresenceState
from ..lab_sessions.service import LabSessionService
from ..students.model import Student
from .model import TagOwner
from .service import TagService

logger = logging.getLogger(__name__)

Sender = Callable[[str, dict], None]


def presence_message(owner: TagOwner, state: PresenceState) -> dict[str, Any]:
    return {"user": owner.to_payload(), "state": state.value, "tag": owner.tag_id}


class TagBridge:
    """Live RFID presence shared by every request and socket handler.

    Owns the tag -> owner map, the ordered lists of present mentor and
    student tags, and the registry of connected live-view clients. Every
    public method runs under one lock; messages queued while it runs are
    flushed to all registered clients once its body has finished.

    A student scan means sign-in when no mentor tag is present and sign-out
    (attributed to the first present mentor) when one is.
    """

    def __init__(self, tags: TagService, lab_sessions: LabSessionService, *, send: Optional[Sender] = None):
        self._tags = tags
        self._lab_sessions = lab_sessions
        self._send = send

        self._lock = threading.Lock()
        self._owners: dict[str, TagOwner] = {}
        self._present_mentor_tags: list[str] = []
        self._present_student_tags: list[str] = []
        self._clients: list[str] = []
        self._outbox: list[dict[str, Any]] = []

    def attach_sender(self, send: Sender) -> None:
        self._send = send

    # ---- read-only snapshots -------------------------------------------

    @property
    def owners(self) -> dict[str, TagOwner]:
        with self._lock:
            return dict(self._owners)

    @property
    def present_mentor_tags(self) -> list[str]:
        with self._lock:
            return list(self._present_mentor_tags)

    @property
    def present_student_tags(self) -> list[str]:
        with self._lock:
            return list(self._present_student_tags)

    @property
    def clients(self) -> list[str]:
        with self._lock:
            return list(self._clients)

    # ---- socket lifecycle ----------------------------------------------

    def connect(self, client_id: str) -> None:
        with self._lock:
            self._deliver(client_id, {"status": "Connection Opened"})
            # Replay goes out as a broadcast, so existing clients see it again
            for owner in self._owners.values():
                self._queue(presence_message(owner, PresenceState.IN))
            self._clients.append(client_id)
            logger.info("Live view client %s connected (%d total)", client_id, len(self._clients))
            self._flush()

    def disconnect(self, client_id: str) -> None:
        with self._lock:
            self._deliver(client_id, {"status": "Connection Closed"})
            if client_id in self._clients:
                self._clients.remove(client_id)
            logger.info("Live view client %s disconnected", client_id)

    # ---- tag events ----------------------------------------------------

    def tag_in(self, tag_id: str, *, now: Optional[datetime] = None) -> TagOwner:
        now = now or now_local()
        with self._lock:
            owner = self._tags.resolve_owner(tag_id)
            self._owners[tag_id] = owner
            logger.info("Tag %s in (%s %s)", tag_id, owner.kind.value, owner.name or "-")

            if owner.kind is OwnerKind.MENTOR:
                self._present_mentor_tags.append(tag_id)
            elif owner.kind is OwnerKind.STUDENT:
                self._present_student_tags.append(tag_id)
                if self._present_mentor_tags:
                    self._sign_out(owner.student, now)
                else:
                    self._sign_in(owner.student, now)

            self._queue(presence_message(owner, PresenceState.IN))
            self._flush()
            return owner

    def tag_out(self, tag_id: str) -> Optional[str]:
        """Handle a tag leaving the reader; returns an error message, if any.

        The presence-out broadcast always goes out before the error is
        reported, the live tag wizard depends on seeing it.
        """
        with self._lock:
            self._owners.pop(tag_id, None)

            error = None
            tag = self._tags.get_tag(tag_id)
            if tag is None:
                error = "No such tag."
            elif tag.student_id is not None:
                self._present_student_tags = [t for t in self._present_student_tags if t != tag_id]
            elif tag.mentor_id is not None:
                self._present_mentor_tags = [t for t in self._present_mentor_tags if t != tag_id]
            else:
                error = "Tag does not reference a student or mentor."

            owner = self._tags.resolve_owner(tag_id)
            self._queue(presence_message(owner, PresenceState.OUT))
            self._flush()

            if error:
                logger.warning("Tag %s out: %s", tag_id, error)
            return error

    # ---- internals (lock held) -----------------------------------------

    def _sign_in(self, student: Student, now: datetime) -> None:
        if self._lab_sessions.find_open_session(student.id) is not None:
            self._queue({"signin": f"Error: {student.first_name} is already signed in."})
            return

        if self._lab_sessions.is_debounced(student, now=now):
            logger.info("Ignoring sign-in for %s inside debounce window", student.full_name)
            return

        self._lab_sessions.start_session(student, now=now)
        self._queue({"signin": f"Signed in {student.first_name} {student.last_name}!"})

    def _sign_out(self, student: Student, now: datetime) -> None:
        lab_session = self._lab_sessions.find_open_session(student.id)
        if lab_session is None:
            self._queue({"signin": f"Error: {student.full_name} is not signed in."})
            return

        mentor_tag = self._present_mentor_tags[0]
        mentor_owner = self._tags.resolve_owner(mentor_tag)
        if mentor_owner.kind is not OwnerKind.MENTOR:
            self._queue({"signin": f"Error: Tag {mentor_tag} no longer belongs to a mentor."})
            return

        mentor = mentor_owner.mentor
        closed = self._lab_sessions.sign_out(lab_session, mentor=mentor, now=now)
        self._queue(
            {
                "signin": f"{student.full_name} signed out after "
                f"{format_hours(closed.duration_hours)} hours by {mentor.full_name}"
            }
        )

    def _queue(self, message: dict[str, Any]) -> None:
        self._outbox.append(message)

    def _deliver(self, client_id: str, message: dict[str, Any]) -> bool:
        if self._send is None:
            return False
        try:
            self._send(client_id, message)
        except Exception as e:
            logger.warning("Dropping live view client %s after send failure: %s", client_id, e)
            if client_id in self._clients:
                self._clients.remove(client_id)
            return False
        return True

    def _flush(self) -> None:
        outbox, self._outbox = self._outbox, []
        for message in outbox:
            for client_id in list(self._clients):
                self._deliver(client_id, message)
