"""
FIPS reference data source.
Reads the state and county FIPS tables used to enrich geocoding results.
"""
import os
import json
import logging

import pandas as pd

from geofips.errors import FipsDataError
from geofips.pipeline.fips_lookup import FipsTables
from geofips.pipeline.normalize import county_segment, normalize_county_name, normalize_state_name

logger = logging.getLogger(__name__)

STATE_COLUMNS = 2   # name, state FIPS
COUNTY_COLUMNS = 3  # "County, State", state FIPS, county FIPS


def read_fips_rows(path: str, width: int) -> list:
    """
    Read a reference table as a list of rows of strings, header included.

    JSON files hold an array of string arrays; CSV files are read with pandas.
    Every row must have exactly `width` string cells.
    """
    if not os.path.exists(path):
        raise FipsDataError(
            f"FIPS reference file not found: {path} "
            f"(generate it with backend/scripts/fetch_fips_data.py)"
        )

    try:
        if path.lower().endswith(".csv"):
            df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
        else:
            with open(path, encoding="utf-8") as f:
                rows = json.load(f)
            if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
                raise FipsDataError(f"{path} is not an array of rows")
            df = pd.DataFrame(rows)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError and the pandas parser errors are ValueErrors
        raise FipsDataError(f"Failed to read {path}: {e}") from e

    if df.empty or df.shape[1] != width:
        raise FipsDataError(f"{path}: expected rows of {width} columns, got shape {df.shape}")
    if not all(isinstance(cell, str) for cell in df.to_numpy().ravel()):
        raise FipsDataError(f"{path}: every cell must be a string")

    return df.values.tolist()


def build_state_map(rows: list) -> dict:
    """Map uppercased state name -> state FIPS. Row 0 is a header."""
    state_map = {}
    for name, fips in rows[1:]:
        state_map[normalize_state_name(name)] = fips
    return state_map


def build_county_map(rows: list) -> dict:
    """Map state FIPS -> normalized county name -> county FIPS. Row 0 is a header."""
    county_map = {}
    for full_name, state_fips, county_fips in rows[1:]:
        county = county_segment(full_name)
        if county is None:
            continue
        county_map.setdefault(state_fips, {})[normalize_county_name(county)] = county_fips
    return county_map


def load_fips_tables(state_path: str, county_path: str) -> FipsTables:
    """Load both reference files into an immutable FipsTables."""
    try:
        state_rows = read_fips_rows(state_path, STATE_COLUMNS)
        county_rows = read_fips_rows(county_path, COUNTY_COLUMNS)
    except FipsDataError as e:
        logger.error(f"FIPS reference data load failed: {e}")
        raise

    tables = FipsTables.from_dicts(build_state_map(state_rows), build_county_map(county_rows))
    logger.info(
        f"Loaded FIPS reference data: {len(tables.state_map)} states, "
        f"{tables.county_count} counties"
    )
    return tables
