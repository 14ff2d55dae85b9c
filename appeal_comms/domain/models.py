from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from .errors import ValidationError


class ChannelType(str, Enum):
    """Supported delivery channels."""

    EMAIL = "EMAIL"
    SMS = "SMS"
    CHAT = "CHAT"

    @classmethod
    def parse(cls, raw: "str | ChannelType | None") -> "ChannelType":
        """Parse an inbound channel name, failing fast on unknown values."""
        if isinstance(raw, ChannelType):
            return raw
        if raw is None or not str(raw).strip():
            raise ValidationError("Channel is required")
        name = str(raw).strip().upper()
        name = _CHANNEL_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(
                f"Unsupported channel '{raw}'. Must be one of: {allowed}"
            ) from None


_CHANNEL_ALIASES = {"WHATSAPP": "CHAT"}


class TriggerType(str, Enum):
    """Domain event that caused a dispatch."""

    MANUAL = "MANUAL"
    APPROVAL = "APPROVAL"
    REJECTION = "REJECTION"


class DispatchStatus(str, Enum):
    SENT = "SENT"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"


class RecipientType(str, Enum):
    """Inbound recipient selection literal."""

    ALL_DONORS = "ALL_DONORS"
    SELECTED_DONORS = "SELECTED_DONORS"


@dataclass(frozen=True)
class AllForResource:
    """Every donor linked to an appeal."""

    resource_id: int


@dataclass(frozen=True)
class ExplicitIds:
    """An explicit set of donor ids."""

    ids: frozenset[int]


RecipientSelector = AllForResource | ExplicitIds


@dataclass(frozen=True)
class Recipient:
    id: int
    display_name: str
    email: str | None = None
    phone: str | None = None

    def contact_for(self, channel: ChannelType) -> str | None:
        """Return the contact field the channel delivers to, if present."""
        value = self.email if channel == ChannelType.EMAIL else self.phone
        if value is None or not value.strip():
            return None
        return value.strip()


def format_amount(amount: Decimal | None) -> str:
    """Thousands-separated amount, or N/A when unknown."""
    if amount is None:
        return "N/A"
    return f"{amount:,}"


@dataclass(frozen=True)
class ResourceRecord:
    """Read-only view of an appeal."""

    id: int
    title: str
    description: str | None = None
    amount: Decimal | None = None


@dataclass(frozen=True)
class OutboundMessage:
    """What a channel gateway delivers to one recipient."""

    body: str
    subject: str | None = None
    context: ResourceRecord | None = None


@dataclass(frozen=True)
class DispatchRequest:
    """One notification batch for an appeal. Never persisted."""

    resource_id: int
    channel: ChannelType
    body: str
    selector: RecipientSelector
    trigger_type: TriggerType = TriggerType.MANUAL
    subject: str | None = None
    initiated_by: int | None = None

    def validate(self) -> None:
        """Check request shape; raises ValidationError."""
        if not isinstance(self.channel, ChannelType):
            raise ValidationError(f"Unrecognized channel: {self.channel!r}")
        if not isinstance(self.trigger_type, TriggerType):
            raise ValidationError(f"Unrecognized trigger type: {self.trigger_type!r}")
        if not self.body or not self.body.strip():
            raise ValidationError("Message body is required")
        if self.channel == ChannelType.EMAIL and (
            not self.subject or not self.subject.strip()
        ):
            raise ValidationError("Email subject is required for EMAIL channel")
        if isinstance(self.selector, ExplicitIds):
            if not self.selector.ids:
                raise ValidationError("Please select at least one donor")
        elif isinstance(self.selector, AllForResource):
            if self.selector.resource_id != self.resource_id:
                raise ValidationError(
                    f"Recipient selector targets appeal {self.selector.resource_id}, "
                    f"request is for appeal {self.resource_id}"
                )
        else:
            raise ValidationError(f"Unrecognized recipient selector: {self.selector!r}")

    def to_message(self, context: ResourceRecord | None = None) -> OutboundMessage:
        return OutboundMessage(body=self.body, subject=self.subject, context=context)


@dataclass(frozen=True)
class DispatchOutcome:
    """Result for a single recipient."""

    recipient_id: int
    delivered: bool
    error_detail: str | None = None
    error_kind: str | None = None
    external_id: str | None = None

    @property
    def retryable(self) -> bool:
        return self.error_kind == "delivery"


def derive_status(delivered: int, failed: int) -> DispatchStatus:
    """Aggregate per-recipient results into a batch status."""
    if failed == 0 and delivered > 0:
        return DispatchStatus.SENT
    if delivered == 0:
        return DispatchStatus.FAILED
    return DispatchStatus.PARTIAL


@dataclass(frozen=True)
class DispatchResult:
    """Aggregate over one dispatch request."""

    requested: int
    delivered: int
    failed: int
    outcomes: tuple[DispatchOutcome, ...] = ()
    status: DispatchStatus | None = None
    unresolved_ids: tuple[int, ...] = ()
    history_recorded: bool = False

    @classmethod
    def empty(cls, unresolved_ids: list | tuple = ()) -> "DispatchResult":
        """Zero-effect result for a batch that resolved no recipients."""
        return cls(requested=0, delivered=0, failed=0, unresolved_ids=tuple(unresolved_ids))

    @classmethod
    def from_outcomes(
        cls,
        outcomes: list[DispatchOutcome],
        unresolved_ids: list | tuple = (),
    ) -> "DispatchResult":
        delivered = sum(1 for o in outcomes if o.delivered)
        failed = len(outcomes) - delivered
        return cls(
            requested=len(outcomes),
            delivered=delivered,
            failed=failed,
            outcomes=tuple(outcomes),
            status=derive_status(delivered, failed) if outcomes else None,
            unresolved_ids=tuple(unresolved_ids),
        )

    @property
    def is_noop(self) -> bool:
        return self.requested == 0

    def with_history(self, recorded: bool) -> "DispatchResult":
        return replace(self, history_recorded=recorded)

    def failures(self) -> list[DispatchOutcome]:
        return [o for o in self.outcomes if not o.delivered]


@dataclass(frozen=True)
class HistoryRecord:
    """Audit row summarising one dispatch batch. Immutable once written."""

    resource_id: int
    trigger_type: TriggerType
    channel: ChannelType
    recipient_count: int
    delivered_count: int
    status: DispatchStatus
    content: str
    initiated_by: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    error_summary: str | None = None
    id: int | None = None
