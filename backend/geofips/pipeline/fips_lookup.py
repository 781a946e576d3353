"""
State and county FIPS lookup tables.

The tables are built once from the reference data and are read-only
afterwards, so a single instance is shared by every request.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from geofips.pipeline.normalize import normalize_county_name, normalize_state_name

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class FipsTables:
    # normalized state name -> state FIPS
    state_map: Mapping[str, str]
    # state FIPS -> normalized county name -> county FIPS
    county_map: Mapping[str, Mapping[str, str]]

    @classmethod
    def from_dicts(cls, state_map: dict, county_map: dict) -> "FipsTables":
        return cls(
            state_map=MappingProxyType(dict(state_map)),
            county_map=MappingProxyType(
                {state: MappingProxyType(dict(counties)) for state, counties in county_map.items()}
            ),
        )

    def resolve(self, region, sub_region) -> Tuple[str, str]:
        """
        Return (state_fips, county_fips) for a region / subregion pair as
        reported by the place index. Unmatched names resolve to "N/A".
        """
        state_fips = self.state_map.get(normalize_state_name(region), NOT_AVAILABLE)
        if state_fips == NOT_AVAILABLE:
            return NOT_AVAILABLE, NOT_AVAILABLE

        counties = self.county_map.get(state_fips)
        if counties is None:
            return state_fips, NOT_AVAILABLE
        return state_fips, counties.get(normalize_county_name(sub_region), NOT_AVAILABLE)

    def enrich(self, region, sub_region) -> dict:
        state_fips, county_fips = self.resolve(region, sub_region)
        return {"stateFips": state_fips, "countyFips": county_fips}

    @property
    def county_count(self) -> int:
        return sum(len(counties) for counties in self.county_map.values())
