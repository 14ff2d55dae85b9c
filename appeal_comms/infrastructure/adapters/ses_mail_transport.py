import structlog
from aiobotocore.session import get_session

from ...domain.ports import MailTransport

logger = structlog.get_logger()


class SesMailTransport(MailTransport):
    """AWS SES mail transport."""

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        self._session = get_session()

    async def send_email(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send an email via SES. Provider errors propagate to the gateway."""
        # A client per call keeps the transport safe for concurrent sends
        async with self._session.create_client(
            "ses",
            region_name=self._region,
            endpoint_url=self._endpoint_url,
        ) as client:
            response = await client.send_email(
                Source=sender,
                Destination={"ToAddresses": [recipient]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {
                        "Html": {"Data": html_body, "Charset": "UTF-8"},
                        "Text": {"Data": text_body, "Charset": "UTF-8"},
                    },
                },
            )

        message_id = response.get("MessageId")
        logger.debug("SES accepted message", message_id=message_id)
        return message_id
