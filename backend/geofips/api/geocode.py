import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from geofips.errors import FipsDataError, GeocoderError, NoResultsError, PlaceNotFoundError
from geofips.models import (
    GeocodeRequest,
    GeocodeResult,
    MapConfig,
    PlaceRequest,
    PlaceResult,
    SuggestionsResponse,
)
from geofips.services.geocoder import Geocoder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocode"])


def get_geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder


def _parse_coordinate(value):
    """Parse a query coordinate; blank, non-numeric and non-finite values give None."""
    if not value:
        return None
    try:
        coordinate = float(value)
    except ValueError:
        return None
    return coordinate if math.isfinite(coordinate) else None


@router.post("/geocode", response_model=GeocodeResult)
async def geocode(req: GeocodeRequest, geocoder: Geocoder = Depends(get_geocoder)):
    if not req.address:
        raise HTTPException(status_code=400, detail="Valid address is required")

    try:
        return await geocoder.geocode_address(req.address)
    except NoResultsError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (GeocoderError, FipsDataError) as e:
        logger.error(f"Geocode failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/getplace", response_model=PlaceResult)
async def get_place(req: PlaceRequest, geocoder: Geocoder = Depends(get_geocoder)):
    if not req.placeId:
        raise HTTPException(status_code=400, detail="Valid placeId is required")

    try:
        return await geocoder.get_place(req.placeId)
    except PlaceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (GeocoderError, FipsDataError) as e:
        logger.error(f"Place lookup failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/api/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    partialAddress: str = Query(None),
    maxResults: int = Query(None, ge=1, le=15),
    biasLon: str = Query(None),
    biasLat: str = Query(None),
    geocoder: Geocoder = Depends(get_geocoder),
):
    if not partialAddress:
        raise HTTPException(status_code=400, detail="partialAddress is required")

    bias_lon = _parse_coordinate(biasLon)
    bias_lat = _parse_coordinate(biasLat)
    bias_position = None
    if bias_lon is not None and bias_lat is not None:
        bias_position = (bias_lon, bias_lat)

    try:
        results = await geocoder.get_suggestions(partialAddress, maxResults, bias_position)
    except GeocoderError as e:
        logger.error(f"Suggestions failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return {"suggestions": results}


@router.get("/api/map-config", response_model=MapConfig)
async def map_config(geocoder: Geocoder = Depends(get_geocoder)):
    return geocoder.get_map_config()
