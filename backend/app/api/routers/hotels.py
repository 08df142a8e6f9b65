from fastapi import APIRouter, Depends, HTTPException, status, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import DataStoreError, HotelSearchError
from app.models.filters import HotelFilters, NumericRange
from app.models.hotel import Hotel
from app.modules.hotels import HotelStrategy, get_hotel_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def get_hotel_filters(
    search: Optional[str] = Query(None, description="Free text search (not used for filtering yet)"),
    lat: Optional[float] = Query(None, description="Search point latitude"),
    lng: Optional[float] = Query(None, description="Search point longitude"),
    distance: Optional[float] = Query(None, description="Search radius in km"),
    price_min: Optional[float] = Query(None, description="Minimum room price"),
    price_max: Optional[float] = Query(None, description="Maximum room price"),
    surface_min: Optional[float] = Query(None, description="Minimum room surface"),
    surface_max: Optional[float] = Query(None, description="Maximum room surface"),
    rooms: Optional[int] = Query(None, description="Minimum bedroom count"),
    bathrooms: Optional[int] = Query(None, description="Minimum bathroom count"),
    types: List[str] = Query([], description="Allowed room types"),
) -> HotelFilters:
    try:
        return HotelFilters(
            search=search,
            lat=lat,
            lng=lng,
            distance=distance,
            price=NumericRange(min=price_min, max=price_max),
            surface=NumericRange(min=surface_min, max=surface_max),
            rooms=rooms,
            bathrooms=bathrooms,
            types=types,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )


@router.get("/", response_model=List[Hotel])
def list_hotels(
    strategy: Optional[HotelStrategy] = Query(None, description="Query strategy, defaults to HOTEL_STRATEGY"),
    filters: HotelFilters = Depends(get_hotel_filters),
    db: Session = Depends(get_db),
):
    """
    List hotels with their cheapest matching room.

    An empty list means no hotel matched. Infrastructure failures are reported
    as 503 and data inconsistencies as 500, never as an empty result.
    """
    service = get_hotel_service(strategy or HotelStrategy(settings.HOTEL_STRATEGY), db)
    try:
        return service.list(filters)
    except DataStoreError as e:
        logger.error(f"Failed to list hotels: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Hotel data store is unavailable"
        )
    except HotelSearchError as e:
        logger.error(f"Failed to list hotels: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve hotels"
        )
