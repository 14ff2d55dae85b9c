from .audit_store import AuditStore
from .channel_gateway import ChannelGateway, DeliveryReceipt, GatewayRegistry
from .directory import Directory
from .mail_transport import MailTransport
from .resource_registry import ResourceRegistry

__all__ = [
    "AuditStore",
    "ChannelGateway",
    "DeliveryReceipt",
    "Directory",
    "GatewayRegistry",
    "MailTransport",
    "ResourceRegistry",
]
