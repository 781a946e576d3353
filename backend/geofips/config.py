import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


class Settings(BaseSettings):
    AWS_REGION: str = "us-west-2"
    PLACE_INDEX_NAME: str = "GeoAddressIndex"
    AWS_LOCATION_API_KEY: str = ""
    MAP_NAME: str = "GeoMap"
    IDENTITY_POOL_ID: str = "us-west-2:901dce01-7f6d-4bf0-a169-1ebdf37929a6"
    DATA_DIR: str = DEFAULT_DATA_DIR
    STATE_FIPS_FILE: str = "us-state-fips.json"
    COUNTY_FIPS_FILE: str = "us-county-fips.json"
    SUGGESTION_COUNTRIES: List[str] = ["USA", "CAN"]
    DEFAULT_MAX_SUGGESTIONS: int = 5
    REQUEST_TIMEOUT: float = 15.0  # seconds
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"

    @property
    def state_fips_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.STATE_FIPS_FILE)

    @property
    def county_fips_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.COUNTY_FIPS_FILE)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
