from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route guards."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database.

    A record holds a single status, so LATE wins over EARLY_LEAVE.
    """

    PRESENT = "PRESENT"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
