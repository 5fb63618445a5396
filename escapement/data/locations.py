"""
Sampling locations for the escapement map.

Reduces records to one point per distinct location and repairs longitudes
that were entered with the wrong sign.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import Point

logger = logging.getLogger(__name__)

LOCATION_COLUMNS = ["location", "latitude", "longitude"]


@dataclass
class LocationPoint:
    """A sampling site with WGS84 coordinates"""
    location: str
    latitude: float
    longitude: float


def extract_locations(records: pd.DataFrame, lookup: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """
    Reduce records to one row per distinct location with complete coordinates.

    Coordinates missing on the records are filled from ``lookup`` (columns
    location, latitude, longitude) when given. Locations still lacking a
    latitude or longitude are dropped. When a location carries several
    coordinate pairs the first one in record order is kept.

    Args:
        records: Prepared escapement records
        lookup: Optional coordinates keyed by location

    Returns:
        DataFrame with columns location, latitude, longitude
    """
    points = pd.DataFrame({"location": records["location"]})
    for col in ("latitude", "longitude"):
        points[col] = pd.to_numeric(records[col], errors="coerce") if col in records.columns else np.nan

    if lookup is not None:
        points = _fill_from_lookup(points, lookup)
    elif "latitude" not in records.columns or "longitude" not in records.columns:
        logger.warning("Records carry no coordinate columns and no lookup was given; no locations to map")

    complete = points.dropna(subset=LOCATION_COLUMNS)
    distinct = complete.drop_duplicates(subset="location", keep="first").reset_index(drop=True)

    dropped = points["location"].nunique() - len(distinct)
    if dropped > 0:
        logger.warning(f"Dropped {dropped} location(s) without complete coordinates")
    logger.info(f"Extracted {len(distinct)} distinct locations")

    return distinct[LOCATION_COLUMNS]


def _fill_from_lookup(points: pd.DataFrame, lookup: pd.DataFrame) -> pd.DataFrame:
    """Fill missing coordinates from a location -> coordinates table."""
    missing = [col for col in LOCATION_COLUMNS if col not in lookup.columns]
    if missing:
        raise ValueError(f"Location lookup is missing columns: {missing}")

    table = (
        lookup[LOCATION_COLUMNS]
        .dropna(subset=["latitude", "longitude"])
        .drop_duplicates(subset="location", keep="first")
        .set_index("location")
    )
    filled = points.copy()
    for col in ("latitude", "longitude"):
        filled[col] = filled[col].fillna(filled["location"].map(table[col]))
    return filled


def sanitize_longitudes(points: pd.DataFrame) -> pd.DataFrame:
    """
    Force every longitude into the western hemisphere.

    Some sites in the escapement data were entered with a positive longitude,
    which plots them in Asia. All valid sites lie west of Greenwich, so the
    repair is ``-abs(longitude)``. Idempotent; returns a new frame.
    """
    fixed = points.copy()
    flipped = int((fixed["longitude"] > 0).sum())
    fixed["longitude"] = -np.abs(fixed["longitude"].astype(float))
    if flipped:
        logger.info(f"Corrected longitude sign for {flipped} location(s)")
    return fixed


def location_points(points: pd.DataFrame) -> List[LocationPoint]:
    """Convert a location table to LocationPoint instances."""
    return [
        LocationPoint(location=row.location, latitude=float(row.latitude), longitude=float(row.longitude))
        for row in points.itertuples(index=False)
    ]


def to_geodataframe(points: pd.DataFrame) -> gpd.GeoDataFrame:
    """
    Build a point GeoDataFrame in WGS84.

    Args:
        points: Location table with latitude/longitude columns

    Returns:
        GeoDataFrame with one Point geometry per location
    """
    geometry = [Point(lon, lat) for lat, lon in zip(points["latitude"], points["longitude"])]  # shapely is (x, y)
    return gpd.GeoDataFrame(points.reset_index(drop=True), geometry=geometry, crs="EPSG:4326")
