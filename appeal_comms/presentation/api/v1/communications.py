import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ....application.dtos import ApiResponse, DispatchResultDTO, SendCommunicationRequest
from ....application.services import CommunicationTriggers, HistoryQueryService
from ....domain.errors import ResourceNotFound, ValidationError
from ..dependencies import get_history_query, get_triggers

router = APIRouter(prefix="/communications", tags=["communications"])
logger = structlog.get_logger()


def _respond(status_code: int, success: bool, message: str, data=None) -> JSONResponse:
    body = ApiResponse(success=success, message=message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post(
    "/send",
    response_model=ApiResponse,
    summary="Send a communication",
    description="Send a message to all or selected donors of an appeal.",
)
async def send_communication(
    request: SendCommunicationRequest,
    triggers: CommunicationTriggers = Depends(get_triggers),
) -> JSONResponse:
    logger.info(
        "Received communication request",
        appeal_id=request.appeal_id,
        channel=request.channel,
        recipient_type=request.recipient_type,
    )
    try:
        result = await triggers.on_manual_send(request)
    except ValidationError as e:
        logger.warning("Communication request rejected", error=str(e))
        return _respond(status.HTTP_400_BAD_REQUEST, False, f"Validation error: {e}")
    except ResourceNotFound as e:
        logger.warning("Appeal not found", appeal_id=e.resource_id)
        return _respond(status.HTTP_404_NOT_FOUND, False, str(e))
    except Exception as e:
        logger.error("Error sending communication", error=str(e), exc_info=True)
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            False,
            f"Failed to send communication: {e}",
        )

    data = DispatchResultDTO.from_result(result).model_dump(mode="json", by_alias=True)
    if result.is_noop:
        return _respond(
            status.HTTP_200_OK,
            True,
            f"No donors found for appeal {request.appeal_id}; nothing was sent",
            data,
        )
    return _respond(
        status.HTTP_200_OK,
        True,
        f"Communication {result.status.value.lower()}: "
        f"{result.delivered} of {result.requested} delivered",
        data,
    )


@router.get(
    "/history",
    response_model=list,
    summary="List communication history",
)
async def list_history(query: HistoryQueryService = Depends(get_history_query)) -> list:
    return [r.model_dump(mode="json", by_alias=True) for r in await query.list_all()]


@router.get(
    "/history/appeal/{appeal_id}",
    response_model=list,
    summary="List communication history for an appeal",
)
async def list_appeal_history(
    appeal_id: int,
    query: HistoryQueryService = Depends(get_history_query),
) -> list:
    records = await query.list_for_appeal(appeal_id)
    return [r.model_dump(mode="json", by_alias=True) for r in records]
