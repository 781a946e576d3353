"""
Exceptions raised by the reference-data loader and the geocoding façade.
"""


class FipsDataError(Exception):
    """A FIPS reference dataset is missing or malformed."""


class GeocoderError(Exception):
    """Base class for geocoding failures."""


class UpstreamError(GeocoderError):
    """The place index call failed."""


class NoResultsError(GeocoderError):
    def __init__(self, message: str = "No results found for the address"):
        super().__init__(message)


class PlaceNotFoundError(GeocoderError):
    def __init__(self, message: str = "No place found for the given ID"):
        super().__init__(message)
