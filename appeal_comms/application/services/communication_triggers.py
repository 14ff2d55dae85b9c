"""
Entry points that turn domain events into dispatch requests.

Approval and rejection notify every donor of the appeal by email; a manual
send passes a caller-supplied request through after validation.
"""

import structlog

from ...domain.errors import ValidationError
from ...domain.models import (
    AllForResource,
    ChannelType,
    DispatchRequest,
    DispatchResult,
    ExplicitIds,
    RecipientSelector,
    RecipientType,
    ResourceRecord,
    TriggerType,
)
from ..dtos import SendCommunicationRequest
from .dispatch_service import DispatchService
from .message_templates import (
    ApprovalBuilder,
    RejectionBuilder,
    build_approval_message,
    build_rejection_message,
)

logger = structlog.get_logger()


def selector_for(
    recipient_type: str,
    appeal_id: int,
    donor_ids: list[int] | None = None,
) -> RecipientSelector:
    """Map an inbound recipient type to a selector."""
    try:
        kind = RecipientType(recipient_type)
    except ValueError:
        raise ValidationError(
            "Invalid recipient type. Must be 'ALL_DONORS' or 'SELECTED_DONORS'"
        ) from None
    if kind == RecipientType.ALL_DONORS:
        return AllForResource(appeal_id)
    if not donor_ids:
        raise ValidationError("Please select at least one donor")
    return ExplicitIds(frozenset(donor_ids))


class CommunicationTriggers:
    """Builds dispatch requests for approval, rejection and manual sends."""

    def __init__(
        self,
        dispatcher: DispatchService,
        approval_builder: ApprovalBuilder = build_approval_message,
        rejection_builder: RejectionBuilder = build_rejection_message,
    ) -> None:
        self._dispatcher = dispatcher
        self._approval_builder = approval_builder
        self._rejection_builder = rejection_builder

    async def on_approval(
        self,
        resource: ResourceRecord,
        approver_id: int | None = None,
        approver_name: str | None = None,
    ) -> DispatchResult:
        """Email every donor of an approved appeal."""
        logger.info("Notifying donors of appeal approval", appeal_id=resource.id)
        rendered = self._approval_builder(resource, approver_name)
        return await self._dispatcher.dispatch(
            DispatchRequest(
                resource_id=resource.id,
                channel=ChannelType.EMAIL,
                subject=rendered.subject,
                body=rendered.body,
                selector=AllForResource(resource.id),
                trigger_type=TriggerType.APPROVAL,
                initiated_by=approver_id,
            )
        )

    async def on_rejection(
        self,
        resource: ResourceRecord,
        reason: str,
        rejector_id: int | None = None,
    ) -> DispatchResult:
        """Email every donor of a rejected appeal with the reason."""
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required")
        logger.info("Notifying donors of appeal rejection", appeal_id=resource.id)
        rendered = self._rejection_builder(resource, reason)
        return await self._dispatcher.dispatch(
            DispatchRequest(
                resource_id=resource.id,
                channel=ChannelType.EMAIL,
                subject=rendered.subject,
                body=rendered.body,
                selector=AllForResource(resource.id),
                trigger_type=TriggerType.REJECTION,
                initiated_by=rejector_id,
            )
        )

    async def on_manual_send(
        self,
        request: SendCommunicationRequest,
        initiated_by: int | None = None,
    ) -> DispatchResult:
        """Dispatch a caller-composed message to all or selected donors."""
        channel = ChannelType.parse(request.channel)
        if channel == ChannelType.EMAIL and not (request.subject and request.subject.strip()):
            raise ValidationError("Email subject is required for EMAIL channel")
        selector = selector_for(request.recipient_type, request.appeal_id, request.donor_ids)

        logger.info(
            "Manual communication requested",
            appeal_id=request.appeal_id,
            channel=channel.value,
            recipient_type=request.recipient_type,
            selected=len(request.donor_ids or []),
        )
        return await self._dispatcher.dispatch(
            DispatchRequest(
                resource_id=request.appeal_id,
                channel=channel,
                subject=request.subject,
                body=request.message or "",
                selector=selector,
                trigger_type=TriggerType.MANUAL,
                initiated_by=initiated_by,
            )
        )
