import structlog

from ...domain.errors import AuditWriteError
from ...domain.models import ChannelType, DispatchResult, HistoryRecord, TriggerType
from ...domain.ports import AuditStore

logger = structlog.get_logger()

DEFAULT_SUMMARY_MAX_LENGTH = 1000


def summarize_failures(result: DispatchResult, max_length: int = DEFAULT_SUMMARY_MAX_LENGTH) -> str | None:
    """One-line summary of the failed recipients, or None if nothing failed."""
    failures = result.failures()
    if not failures:
        return None
    details = "; ".join(f"{o.recipient_id}: {o.error_detail or 'unknown error'}" for o in failures)
    summary = f"Failed for {len(failures)} of {result.requested} recipients: {details}"
    if len(summary) > max_length:
        summary = summary[: max_length - 3] + "..."
    return summary


class AuditRecorder:
    """
    Writes one history record per dispatch batch.

    A failed write is logged and reported as ``None``; it never turns a
    dispatch into a failure.
    """

    def __init__(self, store: AuditStore, summary_max_length: int = DEFAULT_SUMMARY_MAX_LENGTH) -> None:
        self._store = store
        self._summary_max_length = summary_max_length

    def build_record(
        self,
        resource_id: int,
        trigger_type: TriggerType,
        channel: ChannelType,
        result: DispatchResult,
        content: str,
        initiated_by: int | None = None,
    ) -> HistoryRecord:
        if result.status is None:
            raise ValueError("Cannot record a batch that contacted no recipients")
        return HistoryRecord(
            resource_id=resource_id,
            trigger_type=trigger_type,
            channel=channel,
            recipient_count=result.requested,
            delivered_count=result.delivered,
            status=result.status,
            content=content,
            initiated_by=initiated_by,
            error_summary=summarize_failures(result, self._summary_max_length),
        )

    async def record(
        self,
        resource_id: int,
        trigger_type: TriggerType,
        channel: ChannelType,
        result: DispatchResult,
        content: str,
        initiated_by: int | None = None,
    ) -> HistoryRecord | None:
        record = self.build_record(resource_id, trigger_type, channel, result, content, initiated_by)
        try:
            stored = await self._store.append(record)
        except Exception as e:
            error = AuditWriteError(f"Could not write history for appeal {resource_id}: {e}")
            logger.error(
                "Communication history write failed",
                appeal_id=resource_id,
                status=record.status.value,
                error=str(error),
                exc_info=e,
            )
            return None

        logger.info(
            "Communication history recorded",
            history_id=stored.id,
            appeal_id=resource_id,
            trigger_type=trigger_type.value,
            channel=channel.value,
            status=record.status.value,
            recipient_count=record.recipient_count,
            delivered_count=record.delivered_count,
        )
        return stored
