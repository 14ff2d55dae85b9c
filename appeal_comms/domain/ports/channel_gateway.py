"""
Outbound port for channel delivery.

This is the interface the dispatch engine uses to send a message to one
recipient. Infrastructure adapters implement it, one per channel.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..errors import UnreachableRecipient, ValidationError
from ..models import ChannelType, OutboundMessage, Recipient


@dataclass(frozen=True)
class DeliveryReceipt:
    """Proof of a successful channel send."""

    channel: ChannelType
    external_id: str | None = None


class ChannelGateway(ABC):
    """
    Outbound port for sending a message through a channel.

    Implementations must be safe for concurrent use: the dispatch engine calls
    ``send`` for many recipients at once.
    """

    @property
    @abstractmethod
    def channel_type(self) -> ChannelType:
        """Return the channel type this gateway handles."""
        ...

    @abstractmethod
    async def send(self, recipient: Recipient, message: OutboundMessage) -> DeliveryReceipt:
        """
        Send a message to a single recipient.

        Args:
            recipient: Target recipient
            message: Subject, body and optional appeal context

        Returns:
            DeliveryReceipt on success

        Raises:
            UnreachableRecipient: recipient lacks the contact field for this channel
            DeliveryError: the transport failed
        """
        ...

    def require_contact(self, recipient: Recipient) -> str:
        """Return the recipient's contact for this channel or raise UnreachableRecipient."""
        contact = recipient.contact_for(self.channel_type)
        if contact is None:
            field_name = "email" if self.channel_type == ChannelType.EMAIL else "phone"
            raise UnreachableRecipient(
                recipient.id,
                f"Donor {recipient.id} has no {field_name} for {self.channel_type.value}",
            )
        return contact


class GatewayRegistry:
    """
    Maps each channel type to the gateway that delivers it.

    The dispatch engine looks gateways up here; adding a channel means
    registering a gateway, never touching call sites.
    """

    def __init__(self, gateways: list[ChannelGateway] | None = None) -> None:
        self._gateways: dict[ChannelType, ChannelGateway] = {}
        for gateway in gateways or []:
            self.register(gateway)

    def register(self, gateway: ChannelGateway) -> None:
        """Register (or replace) the gateway for its channel."""
        self._gateways[gateway.channel_type] = gateway

    def get(self, channel_type: ChannelType) -> ChannelGateway:
        """
        Get the gateway for a channel.

        Raises:
            ValidationError: If no gateway is registered for the channel
        """
        try:
            return self._gateways[channel_type]
        except KeyError:
            raise ValidationError(f"Unsupported channel type: {channel_type}") from None

    def channels(self) -> list[ChannelType]:
        return list(self._gateways)
