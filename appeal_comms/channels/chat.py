import structlog

from ..domain.models import ChannelType, OutboundMessage, Recipient
from ..domain.ports import ChannelGateway, DeliveryReceipt
from ..infrastructure.logging import sanitize_for_logging

logger = structlog.get_logger()


class ChatGateway(ChannelGateway):
    """Chat-style messaging (WhatsApp and similar) gateway stub."""

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.CHAT

    async def send(self, recipient: Recipient, message: OutboundMessage) -> DeliveryReceipt:
        phone = self.require_contact(recipient)
        text = message.body
        if message.context is not None:
            text = f"{message.context.title}\n\n{text}"
        logger.info(
            "Chat integration pending, message accepted",
            recipient_id=recipient.id,
            recipient=sanitize_for_logging(phone),
            length=len(text),
        )
        return DeliveryReceipt(channel=ChannelType.CHAT)
