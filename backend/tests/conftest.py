"""
Shared fixtures: literal FIPS reference rows, reference files on disk, and a
fake place index served through httpx.MockTransport.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from geofips.main import app
from geofips.pipeline.fips_lookup import FipsTables
from geofips.pipeline.sources.fips import build_county_map, build_state_map
from geofips.services.aws_location import AwsLocationClient
from geofips.services.geocoder import Geocoder

INDEX_NAME = "GeoAddressIndex"

LA_PLACE = {
    "Label": "123 Main St, Anytown, CA 90210, USA",
    "AddressNumber": "123",
    "Street": "Main St",
    "Country": "USA",
    "Region": "California",
    "SubRegion": "Los Angeles County",
    "Municipality": "Anytown",
    "Neighborhood": "Downtown",
    "PostalCode": "90210",
    "Geometry": {"Point": [-118.2437, 34.0522]},
}


class FakePlaceIndex:
    """Callable MockTransport handler standing in for the Places API."""

    def __init__(self):
        self.text_results = []
        self.suggestion_results = []
        self.places = {}
        self.status_code = 200
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "Internal failure"})

        path = request.url.path
        if path.endswith("/search/text"):
            return httpx.Response(200, json={"Results": self.text_results})
        if path.endswith("/search/suggestions"):
            return httpx.Response(200, json={"Results": self.suggestion_results})

        place_prefix = f"/indexes/{INDEX_NAME}/places/"
        if place_prefix in path:
            place_id = path.split(place_prefix, 1)[1]
            if place_id in self.places:
                return httpx.Response(200, json={"Place": self.places[place_id]})
            return httpx.Response(404, json={"message": "Place not found"})

        return httpx.Response(400, json={"message": f"Unexpected path {path}"})

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def state_rows():
    return [["State", "FIPS"], ["California", "06"], ["New York", "36"]]


@pytest.fixture
def county_rows():
    return [
        ["County, State", "StateFIPS", "CountyFIPS"],
        ["Los Angeles County, California", "06", "037"],
        ["New York County, New York", "36", "061"],
    ]


@pytest.fixture
def fips_tables(state_rows, county_rows) -> FipsTables:
    return FipsTables.from_dicts(build_state_map(state_rows), build_county_map(county_rows))


@pytest.fixture
def fips_files(tmp_path, state_rows, county_rows):
    state_path = tmp_path / "us-state-fips.json"
    county_path = tmp_path / "us-county-fips.json"
    state_path.write_text(json.dumps(state_rows))
    county_path.write_text(json.dumps(county_rows))
    return str(state_path), str(county_path)


@pytest.fixture
def place_index() -> FakePlaceIndex:
    return FakePlaceIndex()


@pytest.fixture
def location_client(place_index) -> AwsLocationClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(place_index))
    return AwsLocationClient(index_name=INDEX_NAME, api_key="test-key", http_client=http_client)


@pytest.fixture
def geocoder(location_client, fips_files) -> Geocoder:
    state_path, county_path = fips_files
    return Geocoder(location_client, state_path, county_path, identity_pool_id="us-west-2:test-pool")


@pytest.fixture
def client(geocoder):
    app.state.geocoder = geocoder
    with TestClient(app) as test_client:
        yield test_client
    del app.state.geocoder


@pytest.fixture
def la_place() -> dict:
    return dict(LA_PLACE)
