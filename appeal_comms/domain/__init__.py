from .errors import (
    AuditWriteError,
    CommunicationError,
    DeliveryError,
    NoRecipients,
    RecipientError,
    ResourceNotFound,
    UnreachableRecipient,
    ValidationError,
)
from .models import (
    AllForResource,
    ChannelType,
    DispatchOutcome,
    DispatchRequest,
    DispatchResult,
    DispatchStatus,
    ExplicitIds,
    HistoryRecord,
    OutboundMessage,
    Recipient,
    RecipientSelector,
    RecipientType,
    ResourceRecord,
    TriggerType,
    derive_status,
    format_amount,
)

__all__ = [
    "AllForResource",
    "AuditWriteError",
    "ChannelType",
    "CommunicationError",
    "DeliveryError",
    "DispatchOutcome",
    "DispatchRequest",
    "DispatchResult",
    "DispatchStatus",
    "ExplicitIds",
    "HistoryRecord",
    "NoRecipients",
    "OutboundMessage",
    "Recipient",
    "RecipientError",
    "RecipientSelector",
    "RecipientType",
    "ResourceNotFound",
    "ResourceRecord",
    "TriggerType",
    "UnreachableRecipient",
    "ValidationError",
    "derive_status",
    "format_amount",
]
