from __future__ import annotations

from enum import Enum


class Plan(str, Enum):
    """Subscription tier of the company."""

    FREE = "free"
    PRO = "pro"
    PRO_PLUS = "pro_plus"


class ConflictKind(str, Enum):
    """Reason a shift placement is refused, in evaluation order."""

    HOLIDAY = "Holiday"
    ABSENCE = "Absent"
    OVERLAP = "Overlap"


class ClockingStatus(str, Enum):
    FUTURE = "future"
    NOT_CLOCKED_IN = "not-clocked-in"
    PRESENT = "present"
    CLOSED = "closed"
    ABSENT = "absent"


class Coverage(str, Enum):
    ALL_DAY = "all-day"
    PARTIAL = "partial"


class MessageType(str, Enum):
    ABSENCE_REQUEST = "absence-request"
    COMPLAINT = "complaint"


class MessageStatus(str, Enum):
    """Inbox message workflow state."""

    PENDING = "pending"
    VALIDATED = "validated"
    REFUSED = "refused"
    FOLLOWED_UP = "followed-up"
