"""
Escapement data loader.

Reads the daily escapement CSV from a local cache, falling back to the
remote archive when the cache cannot be read, and prepares the records
for aggregation (column validation, renaming, date decomposition).
"""

import io
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import requests

from ..config import (
    COORDINATE_COLUMNS,
    DATE_FORMAT,
    DEFAULT_CACHE_PATH,
    DEFAULT_DATA_URL,
    DEFAULT_HTTP_TIMEOUT,
    REQUIRED_COLUMNS,
)
from ..errors import DataSourceUnavailableError, MalformedInputError

logger = logging.getLogger(__name__)

# Errors that mean "the cache is not usable", not "the data is bad"
_CACHE_READ_ERRORS = (
    FileNotFoundError,
    OSError,
    pd.errors.EmptyDataError,
    pd.errors.ParserError,
    UnicodeDecodeError,
)


class EscapementDataLoader:
    """Loads raw escapement records, preferring a local copy over the network"""

    def __init__(
        self,
        cache_path: Optional[Path] = None,
        source_url: str = DEFAULT_DATA_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        write_cache: bool = False
    ):
        """
        Args:
            cache_path: Local CSV tried first. Defaults to data/escapement.csv
            source_url: Remote CSV fetched when the local read fails
            timeout: Seconds to wait on the remote fetch
            write_cache: Save a successful remote fetch to cache_path
        """
        self.cache_path = Path(cache_path) if cache_path is not None else DEFAULT_CACHE_PATH
        self.source_url = source_url
        self.timeout = timeout
        self.write_cache = write_cache
        self.source_used: Optional[str] = None

    def load(self) -> pd.DataFrame:
        """Load and prepare records in one step."""
        return self.prepare(self.load_raw())

    def load_raw(self) -> pd.DataFrame:
        """
        Read the raw CSV, local cache first, remote source on failure.

        Returns:
            DataFrame with the source's column names

        Raises:
            DataSourceUnavailableError: if both sources fail
        """
        try:
            df = pd.read_csv(self.cache_path)
            self.source_used = str(self.cache_path)
            logger.info(f"Loaded {len(df):,} records from cache {self.cache_path}")
            return df
        except _CACHE_READ_ERRORS as e:
            logger.warning(f"Could not read cache {self.cache_path} ({e}); fetching {self.source_url}")

        df = self._fetch_remote()
        self.source_used = self.source_url
        logger.info(f"Fetched {len(df):,} records from {self.source_url}")

        if self.write_cache:
            self._save_cache(df)

        return df

    def _fetch_remote(self) -> pd.DataFrame:
        try:
            response = requests.get(self.source_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DataSourceUnavailableError(self.cache_path, self.source_url, str(e)) from e

        try:
            return pd.read_csv(io.StringIO(response.text))
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise DataSourceUnavailableError(
                self.cache_path, self.source_url, f"response is not a readable CSV ({e})"
            ) from e

    def _save_cache(self, df: pd.DataFrame):
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(self.cache_path, index=False)
        logger.info(f"Cached {len(df):,} records to {self.cache_path}")

    def prepare(self, raw: pd.DataFrame) -> pd.DataFrame:
        """
        Validate raw records and normalize them for analysis.

        Renames source columns to snake_case, parses ``sample_date`` and adds
        integer ``year``, ``month`` and ``day`` columns. The input frame is
        not modified.

        Args:
            raw: DataFrame as read from the CSV

        Returns:
            Prepared records

        Raises:
            MalformedInputError: on missing columns, unparseable dates or
                invalid counts
        """
        if raw.empty:
            raise MalformedInputError("Escapement data contains no records")

        missing = [col for col in REQUIRED_COLUMNS if col not in raw.columns]
        if missing:
            raise MalformedInputError("Escapement data is missing required columns", missing)

        rename = dict(REQUIRED_COLUMNS)
        rename.update({k: v for k, v in COORDINATE_COLUMNS.items() if k in raw.columns})
        df = raw[list(rename)].rename(columns=rename)

        df = split_sample_date(df)

        counts = pd.to_numeric(df["daily_count"], errors="coerce")
        invalid = counts.isna() | (counts < 0) | (counts % 1 != 0)
        if invalid.any():
            raise MalformedInputError(
                "DailyCount must be a non-negative whole number",
                df.loc[invalid, "daily_count"].tolist()
            )
        df["daily_count"] = counts.astype("int64")

        for col in COORDINATE_COLUMNS.values():
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")

        logger.debug(
            f"Prepared {len(df):,} records: {df['species'].nunique()} species, "
            f"{df['location'].nunique()} locations, years {df['year'].min()}-{df['year'].max()}"
        )
        return df


def split_sample_date(df: pd.DataFrame, column: str = "sample_date") -> pd.DataFrame:
    """
    Decompose a YYYY-MM-DD date column into year, month and day.

    Returns a copy with ``column`` parsed to datetime and integer
    ``year``/``month``/``day`` columns appended.

    Raises:
        MalformedInputError: if the column is absent or any value does not parse
    """
    if column not in df.columns:
        raise MalformedInputError(f"Records have no '{column}' column")

    df = df.copy()
    parsed = pd.to_datetime(df[column].astype("string").str.strip(), format=DATE_FORMAT, errors="coerce")
    bad = parsed.isna()
    if bad.any():
        raise MalformedInputError(
            f"Could not parse '{column}' as YYYY-MM-DD in {int(bad.sum())} record(s)",
            df.loc[bad, column].tolist()
        )

    df[column] = parsed
    df["year"] = parsed.dt.year.astype(int)
    df["month"] = parsed.dt.month.astype(int)
    df["day"] = parsed.dt.day.astype(int)
    return df
