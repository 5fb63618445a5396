"""
Configuration for the escapement pipeline.

Defaults point at the ADF&G daily escapement dataset archived on the KNB.
Each default can be overridden from the environment (a .env file is loaded
by the command line script).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

# Alaska Department of Fish and Game daily salmon escapement counts (KNB archive)
DEFAULT_DATA_URL = (
    "https://knb.ecoinformatics.org/knb/d1/mn/v2/object/"
    "urn%3Auuid%3Af119a05b-bbe7-4aea-93c6-85434dcb1c5e"
)
DEFAULT_CACHE_PATH = Path("data/escapement.csv")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_HTTP_TIMEOUT = 60.0

# Source column name -> internal column name
REQUIRED_COLUMNS: Dict[str, str] = {
    "sampleDate": "sample_date",
    "Species": "species",
    "SASAP.Region": "region",
    "Location": "location",
    "DailyCount": "daily_count",
}
COORDINATE_COLUMNS: Dict[str, str] = {
    "Latitude": "latitude",
    "Longitude": "longitude",
}

DATE_FORMAT = "%Y-%m-%d"

# Pacific salmon species charted in the lessons
SALMON_SPECIES: Tuple[str, ...] = ("Chinook", "Sockeye", "Chum", "Coho", "Pink")


@dataclass
class PipelineConfig:
    """Settings for a single pipeline run"""
    data_url: str = DEFAULT_DATA_URL
    cache_path: Path = DEFAULT_CACHE_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    write_cache: bool = False
    species: Optional[Tuple[str, ...]] = None
    location_lookup: Optional[Path] = None

    def __post_init__(self):
        self.cache_path = Path(self.cache_path)
        self.output_dir = Path(self.output_dir)
        if self.location_lookup is not None:
            self.location_lookup = Path(self.location_lookup)
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Build a config from ESCAPEMENT_* environment variables.

        Keyword overrides win over the environment; ``None`` overrides are ignored.
        """
        values = {
            "data_url": os.getenv("ESCAPEMENT_DATA_URL", DEFAULT_DATA_URL),
            "cache_path": Path(os.getenv("ESCAPEMENT_CACHE_PATH", str(DEFAULT_CACHE_PATH))),
            "output_dir": Path(os.getenv("ESCAPEMENT_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
            "http_timeout": float(os.getenv("ESCAPEMENT_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
