from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.intervals import as_date
from ..common.validators import new_id, require_non_empty
from ..company.model import CompanyData, upsert, without
from ..company.repository import ItemWriter
from ..core.exceptions import NotFoundError, ValidationError
from ..transaction import TransactionResult, UndoBuffer, run_optimistic
from .calendar import special_day_on
from .model import SpecialDay, SpecialDayType


class SpecialDayService:
    """Use cases: mark special days (holidays and others) on the calendar.

    A calendar day holds at most one special day.
    """

    def __init__(self, items: ItemWriter):
        self._items = items

    def save_special_day(
        self,
        data: CompanyData,
        special_day: SpecialDay,
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        if not any(t.id == special_day.type_id for t in data.special_day_types):
            raise NotFoundError(f"Special day type {special_day.type_id} not found")

        prepared = replace(
            special_day,
            id=special_day.id or new_id(),
            date=as_date(special_day.date),
            company_id=data.company_id,
        )
        other = special_day_on(prepared.date, data.special_days)
        if other is not None and other.id != prepared.id:
            raise ValidationError(f"{prepared.date.isoformat()} already has a special day")

        return run_optimistic(
            data,
            lambda d: d.with_changes(special_days=upsert(d.special_days, prepared)),
            lambda _: self._items.save("special_days", prepared),
            label=f"special day {prepared.id}",
            undo=undo,
        )

    def delete_special_day(self, data: CompanyData, special_day_id: str) -> TransactionResult[CompanyData]:
        return run_optimistic(
            data,
            lambda d: d.with_changes(special_days=without(d.special_days, special_day_id)),
            lambda _: self._items.delete("special_days", special_day_id),
            label=f"deletion of special day {special_day_id}",
        )

    def save_special_day_type(self, data: CompanyData, special_day_type: SpecialDayType) -> TransactionResult[CompanyData]:
        prepared = replace(
            special_day_type,
            id=special_day_type.id or new_id(),
            name=require_non_empty(special_day_type.name, "Name"),
            company_id=data.company_id,
        )
        return run_optimistic(
            data,
            lambda d: d.with_changes(special_day_types=upsert(d.special_day_types, prepared)),
            lambda _: self._items.save("special_day_types", prepared),
            label=f"special day type {prepared.id}",
        )

    def delete_special_day_type(self, data: CompanyData, special_day_type_id: str) -> TransactionResult[CompanyData]:
        return run_optimistic(
            data,
            lambda d: d.with_changes(special_day_types=without(d.special_day_types, special_day_type_id)),
            lambda _: self._items.delete("special_day_types", special_day_type_id),
            label=f"deletion of special day type {special_day_type_id}",
        )
