"""
Name normalization shared by the FIPS loader and resolver.
"""

COUNTY_SUFFIX = " COUNTY"


def normalize_state_name(name) -> str:
    """Uppercase a state name. None is treated as an empty string."""
    return (name or "").upper()


def normalize_county_name(name) -> str:
    """Uppercase a county name and drop a trailing ' COUNTY'."""
    county = (name or "").upper()
    if county.endswith(COUNTY_SUFFIX):
        county = county[: -len(COUNTY_SUFFIX)]
    return county


def county_segment(full_name: str):
    """
    Return the county part of a 'County, State' full name, or None when the
    name has no usable segment.
    """
    parts = [part.strip() for part in full_name.split(",")]
    # str.split always yields at least one segment; the first may be blank
    if not parts or not parts[0]:
        return None
    return parts[0]
