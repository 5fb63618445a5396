from .loader import EscapementDataLoader, split_sample_date
from .locations import (
    LocationPoint,
    extract_locations,
    sanitize_longitudes,
    location_points,
    to_geodataframe,
)

__all__ = [
    "EscapementDataLoader",
    "split_sample_date",
    "LocationPoint",
    "extract_locations",
    "sanitize_longitudes",
    "location_points",
    "to_geodataframe",
]
