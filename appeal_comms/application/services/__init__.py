from .audit_recorder import AuditRecorder
from .communication_triggers import CommunicationTriggers
from .dispatch_service import DispatchService
from .history_query_service import DonorQueryService, HistoryQueryService
from .recipient_resolver import RecipientResolution, RecipientResolver

__all__ = [
    "AuditRecorder",
    "CommunicationTriggers",
    "DispatchService",
    "DonorQueryService",
    "HistoryQueryService",
    "RecipientResolution",
    "RecipientResolver",
]
