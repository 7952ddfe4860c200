from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..absences.model import Absence
from ..common.datetime_utils import now_local
from ..common.intervals import as_date, overlaps, start_of_day
from ..common.validators import new_id, require_day_range, require_non_empty
from ..company.model import CompanyData, upsert
from ..company.repository import CompanyDataSource, ItemWriter
from ..core.enums import MessageStatus, MessageType
from ..core.exceptions import NotFoundError, ValidationError
from ..transaction import TransactionResult, run_optimistic
from .model import InboxMessage

logger = logging.getLogger(__name__)


def _pending(data: CompanyData, message_id: str, expected: MessageType) -> InboxMessage:
    msg = data.message(message_id)
    if msg is None:
        raise NotFoundError(f"Message {message_id} not found")
    if data.employee(msg.employee_id) is None:
        raise NotFoundError(f"Employee {msg.employee_id} of message {message_id} no longer exists")
    if msg.type != expected:
        raise ValidationError(f"Message {message_id} is not a {expected.value}")
    if msg.status != MessageStatus.PENDING:
        raise ValidationError(f"Message {message_id} was already handled ({msg.status.value})")
    return msg


def new_absence_request(
    data: CompanyData,
    *,
    employee_id: str,
    absence_type_id: str,
    start_date: date,
    end_date: date,
    body: str = "",
    now: datetime,
) -> InboxMessage:
    if data.employee(employee_id) is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    require_day_range(start_date, end_date, "Absence request")

    absence_type = data.absence_type(absence_type_id)
    return InboxMessage(
        id=new_id(),
        employee_id=employee_id,
        company_id=data.company_id,
        type=MessageType.ABSENCE_REQUEST,
        subject=f"Absence Request: {absence_type.name if absence_type else 'Unknown'}",
        body=body or "",
        date=now,
        absence_type_id=absence_type_id,
        start_date=as_date(start_date),
        end_date=as_date(end_date),
    )


def new_complaint(data: CompanyData, *, employee_id: str, body: str, now: datetime, subject: str = "Complaint") -> InboxMessage:
    if data.employee(employee_id) is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return InboxMessage(
        id=new_id(),
        employee_id=employee_id,
        company_id=data.company_id,
        type=MessageType.COMPLAINT,
        subject=subject,
        body=require_non_empty(body, "Complaint"),
        date=now,
    )


def validate_absence_request(
    data: CompanyData,
    message_id: str,
    *,
    absence_id: Optional[str] = None,
) -> tuple[Absence, InboxMessage]:
    """The absence to create and the validated message.

    Refused while the employee still has a shift inside the requested days.
    """
    msg = _pending(data, message_id, MessageType.ABSENCE_REQUEST)
    if not msg.start_date or not msg.end_date or not msg.absence_type_id:
        raise ValidationError(f"Message {message_id} is missing the requested dates or absence type")

    range_start = start_of_day(msg.start_date)
    range_end = start_of_day(msg.end_date) + timedelta(days=1)
    for shift in data.shifts:
        if shift.employee_id == msg.employee_id and overlaps(shift.start_time, shift.end_time, range_start, range_end):
            logger.info("Refused to validate request %s: shift %s overlaps", message_id, shift.id)
            raise ValidationError(
                f"Cannot approve absence: shift {shift.id} on {shift.start_time.date().isoformat()} conflicts"
            )

    absence = Absence(
        id=absence_id or new_id(),
        employee_id=msg.employee_id,
        absence_type_id=msg.absence_type_id,
        start_date=msg.start_date,
        end_date=msg.end_date,
        company_id=data.company_id,
    )
    return absence, replace(msg, status=MessageStatus.VALIDATED)


def refuse_absence_request(data: CompanyData, message_id: str, reason: str) -> InboxMessage:
    msg = _pending(data, message_id, MessageType.ABSENCE_REQUEST)
    return replace(msg, status=MessageStatus.REFUSED, refusal_reason=require_non_empty(reason, "Reason"))


def follow_up_complaint(data: CompanyData, message_id: str) -> InboxMessage:
    msg = _pending(data, message_id, MessageType.COMPLAINT)
    return replace(msg, status=MessageStatus.FOLLOWED_UP)


class RequestService:
    """Use cases: employee requests/complaints and their administrator handling."""

    def __init__(self, items: ItemWriter):
        self._items = items

    def _save_message(self, data: CompanyData, msg: InboxMessage, label: str) -> TransactionResult[CompanyData]:
        return run_optimistic(
            data,
            lambda d: d.with_changes(inbox_messages=upsert(d.inbox_messages, msg)),
            lambda _: self._items.save("inbox_messages", msg),
            label=label,
        )

    def submit_absence_request(
        self,
        data: CompanyData,
        *,
        employee_id: str,
        absence_type_id: str,
        start_date: date,
        end_date: date,
        body: str = "",
        now: Optional[datetime] = None,
    ) -> TransactionResult[CompanyData]:
        msg = new_absence_request(
            data,
            employee_id=employee_id,
            absence_type_id=absence_type_id,
            start_date=start_date,
            end_date=end_date,
            body=body,
            now=now or now_local(),
        )
        return self._save_message(data, msg, f"absence request {msg.id}")

    def submit_complaint(
        self,
        data: CompanyData,
        *,
        employee_id: str,
        body: str,
        now: Optional[datetime] = None,
    ) -> TransactionResult[CompanyData]:
        msg = new_complaint(data, employee_id=employee_id, body=body, now=now or now_local())
        return self._save_message(data, msg, f"complaint {msg.id}")

    def validate(self, data: CompanyData, message_id: str) -> TransactionResult[CompanyData]:
        absence, msg = validate_absence_request(data, message_id)

        def persist(_: CompanyData) -> bool:
            return self._items.save("absences", absence) and self._items.save("inbox_messages", msg)

        return run_optimistic(
            data,
            lambda d: d.with_changes(
                absences=d.absences + (absence,),
                inbox_messages=upsert(d.inbox_messages, msg),
            ),
            persist,
            label=f"validation of request {message_id}",
        )

    def refuse(self, data: CompanyData, message_id: str, reason: str) -> TransactionResult[CompanyData]:
        msg = refuse_absence_request(data, message_id, reason)
        return self._save_message(data, msg, f"refusal of request {message_id}")

    def follow_up(self, data: CompanyData, message_id: str) -> TransactionResult[CompanyData]:
        msg = follow_up_complaint(data, message_id)
        return self._save_message(data, msg, f"follow-up of complaint {message_id}")

    def refresh(self, data: CompanyData, source: CompanyDataSource) -> CompanyData:
        """Reload the inbox (used by the periodic poll)."""
        messages = source.list_inbox_messages(data.company_id)
        return data.with_changes(inbox_messages=messages)
