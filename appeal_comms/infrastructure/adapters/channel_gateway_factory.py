"""
Factory for the channel gateway registry.

Builds one gateway per supported channel from explicit settings so no gateway
reads configuration on its own.
"""

from ...channels import ChatGateway, EmailGateway, SmsGateway
from ...config import Settings
from ...domain.ports import GatewayRegistry, MailTransport
from .ses_mail_transport import SesMailTransport


def build_gateway_registry(
    settings: Settings,
    mail_transport: MailTransport | None = None,
) -> GatewayRegistry:
    """
    Create gateways for all supported channels.

    Args:
        settings: Service settings (sender address, AWS region, SMS sender id)
        mail_transport: Transport override; defaults to SES

    Returns:
        GatewayRegistry with EMAIL, SMS and CHAT gateways
    """
    transport = mail_transport or SesMailTransport(
        region=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )
    return GatewayRegistry(
        [
            EmailGateway(transport=transport, sender_email=settings.ses_sender_email),
            SmsGateway(sender_id=settings.sms_sender_id),
            ChatGateway(),
        ]
    )
