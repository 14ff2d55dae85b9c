from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...application.services import (
    AuditRecorder,
    CommunicationTriggers,
    DispatchService,
    DonorQueryService,
    HistoryQueryService,
    RecipientResolver,
)
from ...config import settings
from ...domain.ports import GatewayRegistry
from ...infrastructure.adapters import build_gateway_registry
from ...infrastructure.persistence import (
    Database,
    SqlAlchemyAuditStore,
    SqlAlchemyDirectory,
    SqlAlchemyResourceRegistry,
)

# Process-wide singletons
_database: Database | None = None
_gateways: GatewayRegistry | None = None


def get_database() -> Database:
    global _database
    if _database is None:
        _database = Database(settings.database_url)
    return _database


def get_gateways() -> GatewayRegistry:
    global _gateways
    if _gateways is None:
        _gateways = build_gateway_registry(settings)
    return _gateways


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    db = get_database()
    session = db.session()
    try:
        yield session
    finally:
        await session.close()


async def get_triggers(
    session: AsyncSession = Depends(get_session),
    gateways: GatewayRegistry = Depends(get_gateways),
) -> CommunicationTriggers:
    registry = SqlAlchemyResourceRegistry(session)
    dispatcher = DispatchService(
        resolver=RecipientResolver(SqlAlchemyDirectory(session), registry),
        gateways=gateways,
        recorder=AuditRecorder(
            SqlAlchemyAuditStore(session),
            summary_max_length=settings.audit_error_summary_max_length,
        ),
        registry=registry,
        max_concurrency=settings.dispatch_max_concurrency,
        send_timeout_seconds=settings.dispatch_send_timeout_seconds,
    )
    return CommunicationTriggers(dispatcher)


async def get_history_query(session: AsyncSession = Depends(get_session)) -> HistoryQueryService:
    return HistoryQueryService(SqlAlchemyAuditStore(session))


async def get_donor_query(session: AsyncSession = Depends(get_session)) -> DonorQueryService:
    return DonorQueryService(SqlAlchemyDirectory(session))
