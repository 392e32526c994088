from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from staytrail.api.dependencies import ListingServiceDep
from staytrail.models.schemas.api import AccommodationCreate
from staytrail.services.listing_service import ListingResult

router = APIRouter(prefix="/host", tags=["listings"])


@router.post(
    "/accommodations",
    response_model=ListingResult,
    status_code=status.HTTP_201_CREATED,
)
async def create_accommodation(data: AccommodationCreate, service: ListingServiceDep):
    """Create an accommodation and its images.

    Image failures do not undo the accommodation: the response is still 201
    and carries a warning notice.
    """
    result = await service.create_accommodation(data)
    if result.accommodation_id is None:
        return JSONResponse(
            status_code=result.notice.status_code,
            content=result.model_dump(mode="json"),
        )
    return result
