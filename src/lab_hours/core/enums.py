from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Permission names granted by the members service."""

    HOURS_EDIT = "HOURS_EDIT"
    HOURS_VIEW_REPORT = "HOURS_VIEW_REPORT"
    HOURS_MANAGE_TAGS = "HOURS_MANAGE_TAGS"
    HOURS_SIGN_IN = "HOURS_SIGN_IN"


class OwnerKind(str, Enum):
    """Who an RFID tag belongs to."""

    UNASSIGNED = "unassigned"
    STUDENT = "student"
    MENTOR = "mentor"


class PresenceState(str, Enum):
    IN = "in"
    OUT = "out"
