from .channel_gateway_factory import build_gateway_registry
from .in_memory import InMemoryAuditStore, InMemoryDirectory, InMemoryResourceRegistry
from .ses_mail_transport import SesMailTransport

__all__ = [
    "InMemoryAuditStore",
    "InMemoryDirectory",
    "InMemoryResourceRegistry",
    "SesMailTransport",
    "build_gateway_registry",
]
