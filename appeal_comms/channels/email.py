import html

import structlog

from ..domain.errors import DeliveryError, ValidationError
from ..domain.models import ChannelType, OutboundMessage, Recipient, ResourceRecord, format_amount
from ..domain.ports import ChannelGateway, DeliveryReceipt, MailTransport
from ..infrastructure.logging import sanitize_for_logging

logger = structlog.get_logger()


def _paragraphs(body: str) -> list[str]:
    blocks = [b.strip() for b in body.split("\n\n") if b.strip()]
    return ["<p>" + html.escape(b).replace("\n", "<br/>") + "</p>" for b in blocks]


def render_email_html(subject: str, body: str, context: ResourceRecord | None = None) -> str:
    """Wrap a message body in the standard HTML envelope."""
    parts = [
        "<html><body>",
        f"<h2>{html.escape(subject)}</h2>",
        *_paragraphs(body),
    ]
    if context is not None:
        parts += [
            "<hr/>",
            "<p><strong>Appeal Details:</strong></p>",
            f"<p>Title: {html.escape(context.title)}</p>",
            f"<p>Description: {html.escape(context.description or 'N/A')}</p>",
            f"<p>Target Amount: {format_amount(context.amount)}</p>",
        ]
    parts.append("</body></html>")
    return "".join(parts)


def render_email_text(body: str, context: ResourceRecord | None = None) -> str:
    """Plain-text alternative of the HTML envelope."""
    lines = [body]
    if context is not None:
        lines += [
            "",
            "Appeal Details:",
            f"Title: {context.title}",
            f"Description: {context.description or 'N/A'}",
            f"Target Amount: {format_amount(context.amount)}",
        ]
    return "\n".join(lines)


class EmailGateway(ChannelGateway):
    """Email gateway over an injected mail transport."""

    def __init__(self, transport: MailTransport, sender_email: str) -> None:
        if not sender_email:
            raise ValueError("sender_email is required for the email gateway")
        self._transport = transport
        self._sender_email = sender_email

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.EMAIL

    async def send(self, recipient: Recipient, message: OutboundMessage) -> DeliveryReceipt:
        """Send an HTML email to one donor."""
        if not message.subject or not message.subject.strip():
            raise ValidationError("Email subject is required for EMAIL channel")
        address = self.require_contact(recipient)

        html_body = render_email_html(message.subject, message.body, message.context)
        text_body = render_email_text(message.body, message.context)

        try:
            message_id = await self._transport.send_email(
                sender=self._sender_email,
                recipient=address,
                subject=message.subject,
                html_body=html_body,
                text_body=text_body,
            )
        except Exception as e:
            logger.error(
                "Email delivery failed",
                error=str(e),
                recipient_id=recipient.id,
                recipient=sanitize_for_logging(address),
            )
            raise DeliveryError(recipient.id, str(e)) from e

        logger.info(
            "Email sent",
            message_id=message_id,
            recipient_id=recipient.id,
            recipient=sanitize_for_logging(address),
        )
        return DeliveryReceipt(channel=ChannelType.EMAIL, external_id=message_id)
