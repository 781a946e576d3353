"""
Geocoding façade.

Calls the place index and enriches each place with state / county FIPS codes.
The FIPS reference data is loaded once per Geocoder; every caller awaits the
same load.
"""
import asyncio
import logging
from typing import List, Optional, Tuple

from geofips.config import Settings
from geofips.errors import GeocoderError, NoResultsError, PlaceNotFoundError
from geofips.models import GeocodeResult, MapConfig, PlaceResult, StreetAddress, Suggestion
from geofips.pipeline.fips_lookup import NOT_AVAILABLE, FipsTables
from geofips.pipeline.sources.fips import load_fips_tables
from geofips.services.aws_location import AwsLocationClient

logger = logging.getLogger(__name__)


def _or_na(value):
    return NOT_AVAILABLE if value is None else value


def place_to_fields(place: dict, tables: FipsTables) -> dict:
    """Flatten a place index Place into GeocodeResult fields plus FIPS codes."""
    point = (place.get("Geometry") or {}).get("Point")
    fields = {
        "label": _or_na(place.get("Label")),
        "country": _or_na(place.get("Country")),
        "region": _or_na(place.get("Region")),
        "subRegion": _or_na(place.get("SubRegion")),
        "municipality": _or_na(place.get("Municipality")),
        "neighborhood": _or_na(place.get("Neighborhood")),
        "postalCode": _or_na(place.get("PostalCode")),
        "coordinates": _or_na(point),
    }
    fields.update(tables.enrich(place.get("Region") or "", place.get("SubRegion") or ""))
    return fields


class Geocoder:
    def __init__(
        self,
        client: AwsLocationClient,
        state_fips_path: str,
        county_fips_path: str,
        max_suggestions: int = 5,
        suggestion_countries: Tuple[str, ...] = ("USA", "CAN"),
        map_name: str = "GeoMap",
        identity_pool_id: str = "",
    ):
        self.client = client
        self.state_fips_path = state_fips_path
        self.county_fips_path = county_fips_path
        self.max_suggestions = max_suggestions
        self.suggestion_countries = tuple(suggestion_countries)
        self.map_name = map_name
        self.identity_pool_id = identity_pool_id
        self._fips_task: Optional[asyncio.Future] = None

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[AwsLocationClient] = None) -> "Geocoder":
        if client is None:
            client = AwsLocationClient(
                region=settings.AWS_REGION,
                index_name=settings.PLACE_INDEX_NAME,
                api_key=settings.AWS_LOCATION_API_KEY,
                timeout=settings.REQUEST_TIMEOUT,
            )
        return cls(
            client,
            settings.state_fips_path,
            settings.county_fips_path,
            max_suggestions=settings.DEFAULT_MAX_SUGGESTIONS,
            suggestion_countries=tuple(settings.SUGGESTION_COUNTRIES),
            map_name=settings.MAP_NAME,
            identity_pool_id=settings.IDENTITY_POOL_ID,
        )

    async def fips_tables(self) -> FipsTables:
        """
        Return the FIPS tables, starting the load on first use.

        A failed load is not retried: every later call raises the same
        FipsDataError.
        """
        if self._fips_task is None:
            self._fips_task = asyncio.ensure_future(
                asyncio.to_thread(load_fips_tables, self.state_fips_path, self.county_fips_path)
            )
        return await asyncio.shield(self._fips_task)

    async def aclose(self):
        await self.client.aclose()

    async def geocode_address(self, address: str) -> GeocodeResult:
        tables = await self.fips_tables()
        try:
            results = await self.client.search_text(address)
        except GeocoderError as e:
            logger.error(f"Error geocoding address: {e}")
            raise

        place = results[0].get("Place") if results else None
        if not place:
            logger.info(f"No results found for address: {address!r}")
            raise NoResultsError()
        return GeocodeResult(**place_to_fields(place, tables))

    async def get_suggestions(
        self,
        partial_address: str,
        max_results: Optional[int] = None,
        bias_position: Optional[Tuple[float, float]] = None,
    ) -> List[Suggestion]:
        try:
            results = await self.client.search_suggestions(
                partial_address,
                max_results=max_results or self.max_suggestions,
                filter_countries=self.suggestion_countries,
                bias_position=bias_position,
            )
        except GeocoderError as e:
            logger.error(f"Error getting suggestions: {e}")
            raise

        return [
            Suggestion(text=r.get("Text") or "", placeId=r.get("PlaceId") or "")
            for r in results
        ]

    async def get_place(self, place_id: str) -> PlaceResult:
        tables = await self.fips_tables()
        try:
            place = await self.client.get_place(place_id)
        except GeocoderError as e:
            logger.error(f"Error fetching place: {e}")
            raise

        if not place:
            raise PlaceNotFoundError()
        return PlaceResult(
            address=StreetAddress(
                AddressNumber=place.get("AddressNumber") or "",
                Street=place.get("Street") or "",
            ),
            **place_to_fields(place, tables),
        )

    def get_map_config(self) -> MapConfig:
        return MapConfig(
            mapName=self.map_name,
            region=self.client.region,
            identityPoolId=self.identity_pool_id,
        )
