"""
SQLAlchemy implementations of the directory, registry and audit store ports.

Queries stay in this module so the application layer never sees SQL.
"""

from collections.abc import Iterable

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.models import HistoryRecord, Recipient, ResourceRecord
from ...domain.ports import AuditStore, Directory, ResourceRegistry
from .models import AppealModel, CommunicationHistoryModel, DonorAppealModel, DonorModel

logger = structlog.get_logger()


class SqlAlchemyDirectory(Directory):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_ids(self, ids: Iterable[int]) -> list[Recipient]:
        id_list = list(ids)
        if not id_list:
            return []
        result = await self._session.execute(
            select(DonorModel).where(DonorModel.id.in_(id_list)).order_by(DonorModel.id)
        )
        return [row.to_entity() for row in result.scalars().all()]

    async def find_all_for_resource(self, resource_id: int) -> list[Recipient]:
        result = await self._session.execute(
            select(DonorModel)
            .join(DonorAppealModel, DonorAppealModel.donor_id == DonorModel.id)
            .where(DonorAppealModel.appeal_id == resource_id)
            .order_by(DonorAppealModel.id)
        )
        return [row.to_entity() for row in result.scalars().all()]

    async def search(self, keyword: str) -> list[Recipient]:
        needle = keyword.strip().lower()
        if not needle:
            return []
        pattern = f"%{needle}%"
        result = await self._session.execute(
            select(DonorModel)
            .where(
                or_(
                    func.lower(DonorModel.name).like(pattern),
                    func.lower(DonorModel.email).like(pattern),
                )
            )
            .order_by(DonorModel.name)
        )
        return [row.to_entity() for row in result.scalars().all()]


class SqlAlchemyResourceRegistry(ResourceRegistry):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, resource_id: int) -> ResourceRecord | None:
        model = await self._session.get(AppealModel, resource_id)
        return model.to_entity() if model else None


class SqlAlchemyAuditStore(AuditStore):
    """Communication history table; one insert per batch."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, record: HistoryRecord) -> HistoryRecord:
        model = CommunicationHistoryModel.from_entity(record)
        self._session.add(model)
        await self._session.commit()
        await self._session.refresh(model)

        logger.info(
            "Communication history saved",
            history_id=model.id,
            appeal_id=record.resource_id,
            status=record.status.value,
        )
        return model.to_entity()

    async def query_all(self) -> list[HistoryRecord]:
        result = await self._session.execute(
            select(CommunicationHistoryModel).order_by(
                CommunicationHistoryModel.sent_date.desc(),
                CommunicationHistoryModel.id.desc(),
            )
        )
        return [row.to_entity() for row in result.scalars().all()]

    async def query_by_resource(self, resource_id: int) -> list[HistoryRecord]:
        result = await self._session.execute(
            select(CommunicationHistoryModel)
            .where(CommunicationHistoryModel.appeal_id == resource_id)
            .order_by(
                CommunicationHistoryModel.sent_date.desc(),
                CommunicationHistoryModel.id.desc(),
            )
        )
        return [row.to_entity() for row in result.scalars().all()]
