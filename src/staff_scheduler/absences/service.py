from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.intervals import as_date
from ..common.validators import new_id, require_day_range, require_non_empty
from ..company.model import CompanyData, upsert, without
from ..company.repository import ItemWriter
from ..core.capabilities import Capabilities
from ..core.exceptions import NotFoundError
from ..transaction import TransactionResult, UndoBuffer, run_optimistic
from .model import Absence, AbsenceType


def prepare_absence(data: CompanyData, absence: Absence) -> Absence:
    if data.employee(absence.employee_id) is None:
        raise NotFoundError(f"Employee {absence.employee_id} not found")
    if data.absence_types and data.absence_type(absence.absence_type_id) is None:
        raise NotFoundError(f"Absence type {absence.absence_type_id} not found")
    require_day_range(absence.start_date, absence.end_date, "Absence")
    return replace(
        absence,
        id=absence.id or new_id(),
        company_id=data.company_id,
        start_date=as_date(absence.start_date),
        end_date=as_date(absence.end_date),
    )


class AbsenceService:
    """Use cases: record absences and maintain absence types."""

    def __init__(self, items: ItemWriter, capabilities: Capabilities):
        self._items = items
        self._capabilities = capabilities

    def save_absence(
        self,
        data: CompanyData,
        absence: Absence,
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        self._capabilities.require("can_add_absence", "Absences")
        prepared = prepare_absence(data, absence)
        return run_optimistic(
            data,
            lambda d: d.with_changes(absences=upsert(d.absences, prepared)),
            lambda _: self._items.save("absences", prepared),
            label=f"absence {prepared.id}",
            undo=undo,
        )

    def delete_absence(self, data: CompanyData, absence_id: str) -> TransactionResult[CompanyData]:
        if not any(a.id == absence_id for a in data.absences):
            raise NotFoundError(f"Absence {absence_id} not found")
        return run_optimistic(
            data,
            lambda d: d.with_changes(absences=without(d.absences, absence_id)),
            lambda _: self._items.delete("absences", absence_id),
            label=f"deletion of absence {absence_id}",
        )

    def save_absence_type(self, data: CompanyData, absence_type: AbsenceType) -> TransactionResult[CompanyData]:
        prepared = replace(
            absence_type,
            id=absence_type.id or new_id(),
            name=require_non_empty(absence_type.name, "Name"),
            company_id=data.company_id,
        )
        return run_optimistic(
            data,
            lambda d: d.with_changes(absence_types=upsert(d.absence_types, prepared)),
            lambda _: self._items.save("absence_types", prepared),
            label=f"absence type {prepared.id}",
        )

    def delete_absence_type(self, data: CompanyData, absence_type_id: str) -> TransactionResult[CompanyData]:
        return run_optimistic(
            data,
            lambda d: d.with_changes(absence_types=without(d.absence_types, absence_type_id)),
            lambda _: self._items.delete("absence_types", absence_type_id),
            label=f"deletion of absence type {absence_type_id}",
        )
