from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import MessageStatus, MessageType


@dataclass(frozen=True)
class InboxMessage:
    """An employee request (absence) or complaint waiting for an administrator."""

    id: str
    employee_id: str
    company_id: str
    type: MessageType
    subject: str
    body: str
    date: datetime
    status: MessageStatus = MessageStatus.PENDING
    absence_type_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    refusal_reason: Optional[str] = None
