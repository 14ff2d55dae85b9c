from ...domain.ports import AuditStore, Directory
from ..dtos import DonorDTO, HistoryRecordDTO


class HistoryQueryService:
    """Read side of the communication history."""

    def __init__(self, store: AuditStore) -> None:
        self._store = store

    async def list_all(self) -> list[HistoryRecordDTO]:
        return [HistoryRecordDTO.from_record(r) for r in await self._store.query_all()]

    async def list_for_appeal(self, appeal_id: int) -> list[HistoryRecordDTO]:
        records = await self._store.query_by_resource(appeal_id)
        return [HistoryRecordDTO.from_record(r) for r in records]


class DonorQueryService:
    """Keyword search over the donor directory."""

    def __init__(self, directory: Directory) -> None:
        self._directory = directory

    async def search(self, keyword: str) -> list[DonorDTO]:
        if not keyword or not keyword.strip():
            return []
        return [DonorDTO.from_recipient(r) for r in await self._directory.search(keyword)]
