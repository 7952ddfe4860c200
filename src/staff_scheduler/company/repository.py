from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..requests.model import InboxMessage
from .model import CompanyData


class CompanyDataSource(Protocol):
    """Read accessors: full in-memory collections scoped to one company."""

    def load(self, company_id: str) -> CompanyData:
        raise NotImplementedError

    def list_inbox_messages(self, company_id: str) -> Sequence[InboxMessage]:
        raise NotImplementedError


class ItemWriter(Protocol):
    """Generic write accessor for the non-shift collections.

    ``collection`` is one of ``employees``, ``absences``, ``absence_types``,
    ``special_days``, ``special_day_types`` or ``inbox_messages``.
    """

    def save(self, collection: str, item: Any) -> bool:
        raise NotImplementedError

    def delete(self, collection: str, item_id: str) -> bool:
        raise NotImplementedError

    def bulk_create(self, collection: str, items: Sequence[Any]) -> bool:
        raise NotImplementedError
