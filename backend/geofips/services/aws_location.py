"""
Amazon Location Service place index client.

Talks to the Places REST API with httpx, authenticating with an API key.
"""
import logging
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from geofips.errors import UpstreamError

logger = logging.getLogger(__name__)

PLACES_URL = "https://places.geo.{region}.amazonaws.com/places/v0/indexes/{index}"


class AwsLocationClient:
    def __init__(
        self,
        region: str = "us-west-2",
        index_name: str = "GeoAddressIndex",
        api_key: str = "",
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.region = region
        self.index_name = index_name
        self.base_url = PLACES_URL.format(region=region, index=quote(index_name, safe=""))
        self._api_key = api_key
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        await self._http.aclose()

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Optional[dict]:
        params = {"key": self._api_key} if self._api_key else None
        try:
            resp = await self._http.request(method, self.base_url + path, params=params, json=payload)
            if method == "GET" and resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Place index request {method} {path} failed: {e}") from e

    async def search_text(self, text: str, max_results: int = 1) -> List[dict]:
        """SearchPlaceIndexForText. Returns the raw result entries."""
        data = await self._request("POST", "/search/text", {"Text": text, "MaxResults": max_results})
        return (data or {}).get("Results") or []

    async def search_suggestions(
        self,
        text: str,
        max_results: int = 5,
        filter_countries: Sequence[str] = ("USA", "CAN"),
        bias_position: Optional[Tuple[float, float]] = None,
    ) -> List[dict]:
        """SearchPlaceIndexForSuggestions. bias_position is (longitude, latitude)."""
        payload = {
            "Text": text,
            "MaxResults": max_results,
            "FilterCountries": list(filter_countries),
        }
        if bias_position:
            payload["BiasPosition"] = list(bias_position)
        data = await self._request("POST", "/search/suggestions", payload)
        return (data or {}).get("Results") or []

    async def get_place(self, place_id: str) -> Optional[dict]:
        """GetPlace. Returns the place, or None if the index does not know the ID."""
        data = await self._request("GET", f"/places/{quote(place_id, safe='')}")
        if not data:
            return None
        return data.get("Place")
