import structlog

from ..domain.models import ChannelType, OutboundMessage, Recipient
from ..domain.ports import ChannelGateway, DeliveryReceipt
from ..infrastructure.logging import sanitize_for_logging

logger = structlog.get_logger()


class SmsGateway(ChannelGateway):
    """SMS gateway stub. Accepts every reachable recipient."""

    def __init__(self, sender_id: str = "") -> None:
        self._sender_id = sender_id

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.SMS

    async def send(self, recipient: Recipient, message: OutboundMessage) -> DeliveryReceipt:
        phone = self.require_contact(recipient)
        logger.info(
            "SMS integration pending, message accepted",
            recipient_id=recipient.id,
            recipient=sanitize_for_logging(phone),
            sender_id=self._sender_id or None,
            length=len(message.body),
        )
        return DeliveryReceipt(channel=ChannelType.SMS)
