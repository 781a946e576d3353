from typing import List, Optional, Union

from pydantic import BaseModel

from geofips.pipeline.fips_lookup import NOT_AVAILABLE


class GeocodeRequest(BaseModel):
    address: Optional[str] = None


class PlaceRequest(BaseModel):
    placeId: Optional[str] = None


class GeocodeResult(BaseModel):
    label: str = NOT_AVAILABLE
    country: str = NOT_AVAILABLE
    region: str = NOT_AVAILABLE
    subRegion: str = NOT_AVAILABLE
    municipality: str = NOT_AVAILABLE
    neighborhood: str = NOT_AVAILABLE
    postalCode: str = NOT_AVAILABLE
    # [longitude, latitude]
    coordinates: Union[List[float], str] = NOT_AVAILABLE
    stateFips: str = NOT_AVAILABLE
    countyFips: str = NOT_AVAILABLE


class StreetAddress(BaseModel):
    AddressNumber: str = ""
    Street: str = ""


class PlaceResult(GeocodeResult):
    address: StreetAddress = StreetAddress()


class Suggestion(BaseModel):
    text: str = ""
    placeId: str = ""


class SuggestionsResponse(BaseModel):
    suggestions: List[Suggestion]


class MapConfig(BaseModel):
    mapName: str
    region: str
    identityPoolId: str
