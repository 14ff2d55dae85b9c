from abc import ABC, abstractmethod

from ..models import HistoryRecord


class AuditStore(ABC):
    """
    Outbound port for communication history.

    Append-only: records are never updated once written.
    """

    @abstractmethod
    async def append(self, record: HistoryRecord) -> HistoryRecord:
        """Persist a record and return it with its assigned id."""
        ...

    @abstractmethod
    async def query_all(self) -> list[HistoryRecord]:
        """All records, newest first."""
        ...

    @abstractmethod
    async def query_by_resource(self, resource_id: int) -> list[HistoryRecord]:
        """Records for one appeal, newest first."""
        ...
