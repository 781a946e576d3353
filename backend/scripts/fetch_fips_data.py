#!/usr/bin/env python3
"""
Download the Census state and county code lists and write the FIPS
reference files read by the geocoder.
"""
import io
import os
import sys
import json
import logging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import httpx
import pandas as pd

from geofips.config import get_settings

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

CENSUS_CODES_URL = "https://www2.census.gov/geo/docs/reference/codes2020"
STATE_LIST_URL = f"{CENSUS_CODES_URL}/national_state2020.txt"
COUNTY_LIST_URL = f"{CENSUS_CODES_URL}/national_county2020.txt"

STATE_HEADER = ["State", "FIPS"]
COUNTY_HEADER = ["County, State", "State FIPS", "County FIPS"]


def fetch_table(client: httpx.Client, url: str) -> pd.DataFrame:
    """Fetch a pipe-delimited Census code list."""
    logger.info(f"Downloading {url}")
    resp = client.get(url)
    resp.raise_for_status()
    return pd.read_csv(io.StringIO(resp.text), sep="|", dtype=str, keep_default_na=False)


def build_rows(states: pd.DataFrame, counties: pd.DataFrame):
    state_names = dict(zip(states["STATEFP"], states["STATE_NAME"]))

    state_rows = [STATE_HEADER]
    for _, row in states.iterrows():
        state_rows.append([row["STATE_NAME"], row["STATEFP"]])

    county_rows = [COUNTY_HEADER]
    for _, row in counties.iterrows():
        state_name = state_names.get(row["STATEFP"])
        if not state_name:
            logger.warning(f"Skipping county {row['COUNTYNAME']}: unknown state {row['STATEFP']}")
            continue
        county_rows.append([f"{row['COUNTYNAME']}, {state_name}", row["STATEFP"], row["COUNTYFP"]])

    return state_rows, county_rows


def write_rows(path: str, rows: list):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=1)
    logger.info(f"Wrote {len(rows) - 1:,} rows to {path}")


def main():
    settings = get_settings()
    os.makedirs(settings.DATA_DIR, exist_ok=True)

    with httpx.Client(follow_redirects=True, timeout=settings.REQUEST_TIMEOUT * 4) as client:
        states = fetch_table(client, STATE_LIST_URL)
        counties = fetch_table(client, COUNTY_LIST_URL)

    state_rows, county_rows = build_rows(states, counties)
    write_rows(settings.state_fips_path, state_rows)
    write_rows(settings.county_fips_path, county_rows)


if __name__ == "__main__":
    main()
