import logging

from fastapi import APIRouter, HTTPException, Query

from backend.geocoder import GeocoderService
from backend.models import GeocodeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["geocode"])

geocoder = GeocoderService()


@router.get("/geocode", response_model=GeocodeResponse)
def geocode_location(query: str = Query(..., min_length=1)):
    """Resolve an address to the point the camera should focus on.

    Uses ``def`` (not ``async def``) so FastAPI runs it in a threadpool and
    the blocking geocoder HTTP call won't stall the event loop.
    """
    try:
        point = geocoder.locate(query)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return GeocodeResponse(**point)
