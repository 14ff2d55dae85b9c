"""
Application service for dispatching a notification batch.

Orchestrates recipient resolution, per-recipient channel sends and the single
history record written for the batch. It depends on ports, not on concrete
gateways or stores.
"""

import asyncio

import structlog

from ...domain.errors import DeliveryError, NoRecipients, RecipientError
from ...domain.models import (
    DispatchOutcome,
    DispatchRequest,
    DispatchResult,
    HistoryRecord,
    OutboundMessage,
    Recipient,
    ResourceRecord,
)
from ...domain.ports import ChannelGateway, GatewayRegistry, ResourceRegistry
from ...infrastructure.logging import Timer
from .audit_recorder import AuditRecorder
from .recipient_resolver import RecipientResolution, RecipientResolver

logger = structlog.get_logger()

DEFAULT_MAX_CONCURRENCY = 10
DEFAULT_SEND_TIMEOUT_SECONDS = 30.0


class DispatchService:
    """
    Sends one request to every resolved recipient and audits the batch.

    Per-recipient failures (unreachable donors, transport errors, timeouts) are
    folded into the result. Only structural problems raise: invalid request
    shape, unknown appeal, unsupported channel.
    """

    def __init__(
        self,
        resolver: RecipientResolver,
        gateways: GatewayRegistry,
        recorder: AuditRecorder,
        registry: ResourceRegistry,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        send_timeout_seconds: float = DEFAULT_SEND_TIMEOUT_SECONDS,
    ) -> None:
        """
        Args:
            resolver: Turns the request's selector into recipients
            gateways: Channel gateway lookup
            recorder: Writes the batch history record
            registry: Source of appeal context for email envelopes
            max_concurrency: Upper bound on in-flight sends per batch
            send_timeout_seconds: Per-send timeout; exceeding it is a delivery error
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._resolver = resolver
        self._gateways = gateways
        self._recorder = recorder
        self._registry = registry
        self._max_concurrency = max_concurrency
        self._send_timeout = send_timeout_seconds

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        """
        Dispatch a request.

        Returns:
            DispatchResult with outcomes in resolver order. ``requested == 0``
            means nothing resolved and no history was written.

        Raises:
            ValidationError: Request shape is invalid or channel unsupported
            ResourceNotFound: The appeal does not exist
        """
        request.validate()
        gateway = self._gateways.get(request.channel)

        log = logger.bind(
            appeal_id=request.resource_id,
            channel=request.channel.value,
            trigger_type=request.trigger_type.value,
        )

        try:
            resolution = await self._resolver.resolve(request.selector, request.resource_id)
        except NoRecipients as e:
            log.warning("No recipients resolved, nothing sent", unresolved_ids=e.unresolved_ids)
            return DispatchResult.empty(e.unresolved_ids)

        context = await self._load_context(request.resource_id)
        message = request.to_message(context)

        log.info("Dispatching communication", recipients=len(resolution))

        outcomes: list[DispatchOutcome | None] = [None] * len(resolution)
        with Timer() as t:
            try:
                await self._send_all(gateway, resolution, message, outcomes)
            except asyncio.CancelledError:
                completed = [o for o in outcomes if o is not None]
                log.warning(
                    "Dispatch cancelled",
                    completed=len(completed),
                    requested=len(outcomes),
                )
                if completed:
                    partial = DispatchResult.from_outcomes(completed, resolution.unresolved_ids)
                    await self._record(request, partial)
                raise

        result = DispatchResult.from_outcomes(outcomes, resolution.unresolved_ids)
        stored = await self._record(request, result)
        result = result.with_history(stored is not None)

        log.info(
            "Dispatch completed",
            status=result.status.value,
            requested=result.requested,
            delivered=result.delivered,
            failed=result.failed,
            unresolved=len(result.unresolved_ids),
            duration_ms=t.duration_ms,
        )
        return result

    async def _send_all(
        self,
        gateway: ChannelGateway,
        resolution: RecipientResolution,
        message: OutboundMessage,
        outcomes: list[DispatchOutcome | None],
    ) -> None:
        """Send to every recipient under the concurrency bound, filling ``outcomes`` by index."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def send_one(index: int, recipient: Recipient) -> None:
            async with semaphore:
                outcomes[index] = await self._send(gateway, recipient, message)

        await asyncio.gather(
            *(send_one(i, r) for i, r in enumerate(resolution.recipients))
        )

    async def _send(
        self,
        gateway: ChannelGateway,
        recipient: Recipient,
        message: OutboundMessage,
    ) -> DispatchOutcome:
        try:
            receipt = await asyncio.wait_for(
                gateway.send(recipient, message),
                timeout=self._send_timeout,
            )
        except RecipientError as e:
            return self._failed(e)
        except TimeoutError:
            return self._failed(
                DeliveryError(recipient.id, f"Send timed out after {self._send_timeout}s")
            )
        except Exception as e:
            return self._failed(DeliveryError(recipient.id, str(e) or type(e).__name__))

        return DispatchOutcome(
            recipient_id=recipient.id,
            delivered=True,
            external_id=receipt.external_id,
        )

    @staticmethod
    def _failed(error: RecipientError) -> DispatchOutcome:
        logger.warning(
            "Recipient send failed",
            recipient_id=error.recipient_id,
            error_kind=error.kind,
            retryable=error.retryable,
            error=error.detail,
        )
        return DispatchOutcome(
            recipient_id=error.recipient_id,
            delivered=False,
            error_detail=error.detail,
            error_kind=error.kind,
        )

    async def _load_context(self, resource_id: int) -> ResourceRecord | None:
        context = await self._registry.get(resource_id)
        if context is None:
            logger.debug("Dispatching without appeal context", appeal_id=resource_id)
        return context

    async def _record(self, request: DispatchRequest, result: DispatchResult) -> HistoryRecord | None:
        return await self._recorder.record(
            resource_id=request.resource_id,
            trigger_type=request.trigger_type,
            channel=request.channel,
            result=result,
            content=request.body,
            initiated_by=request.initiated_by,
        )
