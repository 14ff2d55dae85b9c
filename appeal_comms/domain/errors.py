"""
Error taxonomy for communication dispatch.

Structural errors (ValidationError, ResourceNotFound) propagate to the caller.
Per-recipient errors (RecipientError subclasses) are absorbed into the batch
aggregate by the dispatch engine and never abort a batch.
"""


class CommunicationError(Exception):
    """Base class for all communication errors."""


class ValidationError(CommunicationError, ValueError):
    """Request shape is invalid. Nothing is sent or recorded."""


class ResourceNotFound(CommunicationError):
    """Referenced appeal does not exist."""

    def __init__(self, resource_id: object) -> None:
        super().__init__(f"Appeal {resource_id} not found")
        self.resource_id = resource_id


class NoRecipients(CommunicationError):
    """Recipient resolution produced an empty set."""

    def __init__(self, resource_id: object, unresolved_ids: list | None = None) -> None:
        super().__init__(f"No donors found for appeal {resource_id}")
        self.resource_id = resource_id
        self.unresolved_ids = unresolved_ids or []


class RecipientError(CommunicationError):
    """Failure confined to a single recipient."""

    kind: str = "recipient"
    retryable: bool = False

    def __init__(self, recipient_id: object, detail: str) -> None:
        super().__init__(detail)
        self.recipient_id = recipient_id
        self.detail = detail


class UnreachableRecipient(RecipientError):
    """Recipient lacks the contact field the channel needs."""

    kind = "unreachable"
    retryable = False


class DeliveryError(RecipientError):
    """Transport-level failure while sending to a recipient."""

    kind = "delivery"
    retryable = True


class AuditWriteError(CommunicationError):
    """History record could not be persisted."""
