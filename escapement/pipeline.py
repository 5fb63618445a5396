"""
Batch pipeline: load escapement records once, then derive the species
summary and the corrected location table from the same snapshot.
"""

from dataclasses import dataclass
from typing import Optional
import logging

import pandas as pd

from .analysis.aggregator import EscapementAggregator
from .config import PipelineConfig
from .data.loader import EscapementDataLoader
from .data.locations import extract_locations, sanitize_longitudes

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outputs of one pipeline run"""
    records: pd.DataFrame
    summary: pd.DataFrame  # species, median_escapement
    annual: pd.DataFrame  # species, region, year, escapement
    locations: pd.DataFrame  # location, latitude, longitude (sanitized)


class EscapementPipeline:
    """Runs loading, aggregation and location extraction"""

    def __init__(self, config: Optional[PipelineConfig] = None,
                 loader: Optional[EscapementDataLoader] = None):
        """
        Args:
            config: Run settings. Defaults to PipelineConfig.from_env()
            loader: Loader override, mainly for tests
        """
        self.config = config or PipelineConfig.from_env()
        self.loader = loader or EscapementDataLoader(
            cache_path=self.config.cache_path,
            source_url=self.config.data_url,
            timeout=self.config.http_timeout,
            write_cache=self.config.write_cache
        )
        self.aggregator = EscapementAggregator(species=self.config.species)

    def run(self) -> PipelineResult:
        """Execute the pipeline. Any error aborts the run."""
        records = self.loader.load()
        return self.process(records)

    def process(self, records: pd.DataFrame) -> PipelineResult:
        """Derive both outputs from already prepared records"""
        summary = self.aggregator.median_escapement(records)
        annual = self.aggregator.annual_escapement(records)

        lookup = self._load_lookup()
        locations = sanitize_longitudes(extract_locations(records, lookup=lookup))

        logger.info(
            f"Pipeline complete: {len(summary)} species summarized, "
            f"{len(locations)} locations mapped"
        )
        return PipelineResult(records=records, summary=summary, annual=annual, locations=locations)

    def _load_lookup(self) -> Optional[pd.DataFrame]:
        if self.config.location_lookup is None:
            return None
        lookup = pd.read_csv(self.config.location_lookup)
        lookup.columns = [c.lower() for c in lookup.columns]
        logger.info(f"Loaded {len(lookup)} location coordinates from {self.config.location_lookup}")
        return lookup
