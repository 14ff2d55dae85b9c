from fastapi import APIRouter, Depends, Query

from ....application.services import DonorQueryService
from ..dependencies import get_donor_query

router = APIRouter(prefix="/donors", tags=["donors"])


@router.get("/search", response_model=list, summary="Search donors by name or email")
async def search_donors(
    q: str = Query(..., min_length=1, max_length=255),
    query: DonorQueryService = Depends(get_donor_query),
) -> list:
    return [d.model_dump(mode="json", by_alias=True) for d in await query.search(q)]
