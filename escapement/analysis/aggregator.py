from dataclasses import dataclass
from typing import Iterable, List, Optional
import logging

import pandas as pd

from ..data.loader import split_sample_date
from ..errors import MalformedInputError

logger = logging.getLogger(__name__)

LOCATION_KEYS = ["species", "region", "year", "location"]
ANNUAL_KEYS = ["species", "region", "year"]


@dataclass
class SummaryRow:
    """Median escapement for one species"""
    species: str
    median_escapement: float


class EscapementAggregator:
    """Summarizes daily counts into escapement statistics"""

    def __init__(self, species: Optional[Iterable[str]] = None):
        """
        Args:
            species: Only aggregate these species. None keeps every species.
        """
        self.species = tuple(species) if species is not None else None

    def location_escapement(self, records: pd.DataFrame) -> pd.DataFrame:
        """Sum daily counts per species, region, year and location"""
        df = self._select(records, LOCATION_KEYS)
        escapement = (
            df.groupby(LOCATION_KEYS, dropna=False, sort=True)["daily_count"]
            .sum()
            .reset_index(name="escapement")
        )
        logger.debug(f"{len(escapement):,} species/region/year/location groups")
        return escapement

    def median_escapement(self, records: pd.DataFrame) -> pd.DataFrame:
        """
        Median across location-year escapements for each species.

        Counts are first summed within (species, region, year, location);
        the median of those sums is then taken per species. Even-sized
        groups use the mean of the two central values.

        Returns:
            DataFrame with columns species, median_escapement
        """
        by_location = self.location_escapement(records)
        summary = (
            by_location.groupby("species", dropna=False, sort=True)["escapement"]
            .median()
            .reset_index(name="median_escapement")
        )
        logger.info(f"Median escapement computed for {len(summary)} species")
        return summary

    def annual_escapement(self, records: pd.DataFrame) -> pd.DataFrame:
        """Total escapement per species, region and year"""
        df = self._select(records, ANNUAL_KEYS)
        return (
            df.groupby(ANNUAL_KEYS, dropna=False, sort=True)["daily_count"]
            .sum()
            .reset_index(name="escapement")
        )

    def _select(self, records: pd.DataFrame, keys: List[str]) -> pd.DataFrame:
        """Check required columns, derive the year if needed and apply the species filter"""
        if "year" in keys and "year" not in records.columns:
            records = split_sample_date(records)

        missing = [col for col in keys + ["daily_count"] if col not in records.columns]
        if missing:
            raise MalformedInputError("Records are missing columns needed for aggregation", missing)

        df = records[keys + ["daily_count"]]
        if self.species is not None:
            df = df[df["species"].isin(self.species)]
        return df


def summary_rows(summary: pd.DataFrame) -> List[SummaryRow]:
    """Convert a median escapement table to SummaryRow instances"""
    return [
        SummaryRow(species=row.species, median_escapement=float(row.median_escapement))
        for row in summary.itertuples(index=False)
    ]
