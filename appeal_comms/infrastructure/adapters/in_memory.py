"""
In-memory implementations of the directory, registry and audit store ports.

Used for local development and tests; production wiring uses the SQLAlchemy
adapters in ``infrastructure.persistence``.
"""

from collections.abc import Iterable
from dataclasses import replace
from itertools import count

import structlog

from ...domain.models import HistoryRecord, Recipient, ResourceRecord
from ...domain.ports import AuditStore, Directory, ResourceRegistry

logger = structlog.get_logger()


class InMemoryDirectory(Directory):
    """Donors and appeal links held in dictionaries."""

    def __init__(
        self,
        donors: Iterable[Recipient] = (),
        links: dict[int, list[int]] | None = None,
    ) -> None:
        self._donors: dict[int, Recipient] = {d.id: d for d in donors}
        self._links: dict[int, list[int]] = {k: list(v) for k, v in (links or {}).items()}

    def add(self, donor: Recipient, *resource_ids: int) -> None:
        self._donors[donor.id] = donor
        for resource_id in resource_ids:
            self._links.setdefault(resource_id, []).append(donor.id)

    async def find_by_ids(self, ids: Iterable[int]) -> list[Recipient]:
        return [self._donors[i] for i in ids if i in self._donors]

    async def find_all_for_resource(self, resource_id: int) -> list[Recipient]:
        return [
            self._donors[i] for i in self._links.get(resource_id, []) if i in self._donors
        ]

    async def search(self, keyword: str) -> list[Recipient]:
        needle = keyword.strip().lower()
        if not needle:
            return []
        return [
            d
            for d in self._donors.values()
            if needle in d.display_name.lower() or needle in (d.email or "").lower()
        ]


class InMemoryResourceRegistry(ResourceRegistry):
    def __init__(self, records: Iterable[ResourceRecord] = ()) -> None:
        self._records: dict[int, ResourceRecord] = {r.id: r for r in records}

    def add(self, record: ResourceRecord) -> None:
        self._records[record.id] = record

    async def get(self, resource_id: int) -> ResourceRecord | None:
        return self._records.get(resource_id)


class InMemoryAuditStore(AuditStore):
    """Append-only list of history records."""

    def __init__(self) -> None:
        self._records: list[HistoryRecord] = []
        self._ids = count(1)

    @property
    def records(self) -> list[HistoryRecord]:
        return list(self._records)

    async def append(self, record: HistoryRecord) -> HistoryRecord:
        stored = replace(record, id=next(self._ids))
        self._records.append(stored)
        logger.debug("History record stored", history_id=stored.id)
        return stored

    async def query_all(self) -> list[HistoryRecord]:
        return sorted(self._records, key=lambda r: (r.timestamp, r.id), reverse=True)

    async def query_by_resource(self, resource_id: int) -> list[HistoryRecord]:
        return [r for r in await self.query_all() if r.resource_id == resource_id]
