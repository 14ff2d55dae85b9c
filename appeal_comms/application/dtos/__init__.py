from .communication_dto import (
    ApiResponse,
    DispatchOutcomeDTO,
    DispatchResultDTO,
    DonorDTO,
    HistoryRecordDTO,
    SendCommunicationRequest,
)

__all__ = [
    "ApiResponse",
    "DispatchOutcomeDTO",
    "DispatchResultDTO",
    "DonorDTO",
    "HistoryRecordDTO",
    "SendCommunicationRequest",
]
