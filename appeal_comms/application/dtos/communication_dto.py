"""Communication DTOs for the HTTP boundary.

Inbound and outbound payloads use camelCase field names.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ...domain.models import (
    ChannelType,
    DispatchOutcome,
    DispatchResult,
    HistoryRecord,
    Recipient,
    RecipientType,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SendCommunicationRequest(CamelModel):
    """DTO for a manual send.

    Required: appealId, channel, message, recipientType. donorIds is required
    for SELECTED_DONORS; subject is required for EMAIL.
    """

    appeal_id: int | None = None
    channel: str | None = None
    subject: str | None = None
    message: str | None = Field(default=None, max_length=10_000)
    recipient_type: str | None = None
    donor_ids: list[int] | None = None

    @field_validator("channel", "subject", "message", "recipient_type", mode="after")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def check_shape(self) -> "SendCommunicationRequest":
        if (
            self.appeal_id is None
            or self.channel is None
            or self.message is None
            or self.recipient_type is None
        ):
            raise ValueError(
                "Invalid request: missing required fields (appealId, channel, message, recipientType)"
            )
        if self.recipient_type not in {t.value for t in RecipientType}:
            raise ValueError("Invalid recipient type. Must be 'ALL_DONORS' or 'SELECTED_DONORS'")
        if self.recipient_type == RecipientType.SELECTED_DONORS.value and not self.donor_ids:
            raise ValueError("Please select at least one donor")
        if self.channel_type == ChannelType.EMAIL and not self.subject:
            raise ValueError("Email subject is required for EMAIL channel")
        return self

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.parse(self.channel)


class ApiResponse(BaseModel):
    """Envelope for every communications endpoint response."""

    success: bool
    message: str
    data: Any = None


class DispatchOutcomeDTO(CamelModel):
    donor_id: int
    delivered: bool
    error: str | None = None
    error_kind: str | None = None

    @classmethod
    def from_outcome(cls, outcome: DispatchOutcome) -> "DispatchOutcomeDTO":
        return cls(
            donor_id=outcome.recipient_id,
            delivered=outcome.delivered,
            error=outcome.error_detail,
            error_kind=outcome.error_kind,
        )


class DispatchResultDTO(CamelModel):
    requested: int
    delivered: int
    failed: int
    status: str | None = None
    outcomes: list[DispatchOutcomeDTO] = []
    unresolved_donor_ids: list[int] = []
    history_recorded: bool = False

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResultDTO":
        return cls(
            requested=result.requested,
            delivered=result.delivered,
            failed=result.failed,
            status=result.status.value if result.status else None,
            outcomes=[DispatchOutcomeDTO.from_outcome(o) for o in result.outcomes],
            unresolved_donor_ids=list(result.unresolved_ids),
            history_recorded=result.history_recorded,
        )


class HistoryRecordDTO(CamelModel):
    """DTO for one communication history row."""

    id: int | None
    appeal_id: int
    trigger_type: str
    channel: str
    recipient_count: int
    delivered_count: int
    status: str
    content: str
    sent_by_user_id: int | None = None
    sent_date: datetime
    error_message: str | None = None

    @classmethod
    def from_record(cls, record: HistoryRecord) -> "HistoryRecordDTO":
        return cls(
            id=record.id,
            appeal_id=record.resource_id,
            trigger_type=record.trigger_type.value,
            channel=record.channel.value,
            recipient_count=record.recipient_count,
            delivered_count=record.delivered_count,
            status=record.status.value,
            content=record.content,
            sent_by_user_id=record.initiated_by,
            sent_date=record.timestamp,
            error_message=record.error_summary,
        )


class DonorDTO(CamelModel):
    id: int
    name: str
    email: str | None = None
    phone_number: str | None = None

    @classmethod
    def from_recipient(cls, recipient: Recipient) -> "DonorDTO":
        return cls(
            id=recipient.id,
            name=recipient.display_name,
            email=recipient.email,
            phone_number=recipient.phone,
        )
