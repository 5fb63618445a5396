#!/usr/bin/env python3
"""
Run the salmon escapement pipeline and write its outputs.

Steps:
1. Load daily escapement counts (local cache first, KNB archive on failure)
2. Sum counts per species/region/year/location, then take the median per species
3. Extract distinct sampling locations and correct longitude signs
4. Write tables (CSV/GeoJSON) and figures (PNG bar chart, HTML table and map)

Configuration is read from ESCAPEMENT_* environment variables (a .env file in
the working directory is honoured); command line flags take precedence.

Usage:
    python scripts/run_escapement_pipeline.py [--cache PATH] [--url URL] [--output-dir PATH]
        [--salmon-only] [--region NAME] [--write-cache] [--location-lookup PATH] [--verbose]

Examples:
    # Default run, writing to output/
    python scripts/run_escapement_pipeline.py

    # Five Pacific salmon species only, with a time series for Kodiak
    python scripts/run_escapement_pipeline.py --salmon-only --region Kodiak

    # Keep a local copy of the download for later runs
    python scripts/run_escapement_pipeline.py --write-cache
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from escapement.config import SALMON_SPECIES, PipelineConfig
from escapement.data.locations import to_geodataframe
from escapement.errors import EscapementError
from escapement.pipeline import EscapementPipeline, PipelineResult
from escapement.visualization import (
    escapement_table,
    figure_html,
    location_map,
    plot_annual_escapement,
    plot_median_escapement,
)

logger = logging.getLogger("run_escapement_pipeline")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize salmon escapement and map sampling locations")
    parser.add_argument("--cache", type=Path, default=None, help="Local escapement CSV tried before the download")
    parser.add_argument("--url", default=None, help="Remote escapement CSV used when the cache cannot be read")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for tables and figures")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--write-cache", action="store_true", help="Save a downloaded CSV to the cache path")
    parser.add_argument("--salmon-only", action="store_true",
                        help=f"Only summarize {', '.join(SALMON_SPECIES)}")
    parser.add_argument("--region", default=None, help="Also plot annual escapement for this region")
    parser.add_argument("--location-lookup", type=Path, default=None,
                        help="CSV of Location, Latitude, Longitude used to fill missing coordinates")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def write_outputs(result: PipelineResult, output_dir: Path, region: Optional[str] = None) -> List[Path]:
    """Write tables and figures for a pipeline result, returning the written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    summary_csv = output_dir / "median_escapement.csv"
    result.summary.to_csv(summary_csv, index=False)
    written.append(summary_csv)

    annual_csv = output_dir / "annual_escapement.csv"
    result.annual.to_csv(annual_csv, index=False)
    written.append(annual_csv)

    locations_csv = output_dir / "locations.csv"
    result.locations.to_csv(locations_csv, index=False)
    written.append(locations_csv)

    bar_png = output_dir / "median_escapement.png"
    plot_median_escapement(result.summary).savefig(bar_png, dpi=150)
    written.append(bar_png)

    table_html = output_dir / "median_escapement_table.html"
    table_html.write_text(figure_html(escapement_table(result.summary)), encoding="utf-8")
    written.append(table_html)

    if result.locations.empty:
        logger.warning("No locations with coordinates; skipping map and GeoJSON")
    else:
        geojson = output_dir / "locations.geojson"
        to_geodataframe(result.locations).to_file(geojson, driver="GeoJSON")
        written.append(geojson)

        map_html = output_dir / "locations_map.html"
        map_html.write_text(figure_html(location_map(result.locations)), encoding="utf-8")
        written.append(map_html)

    if region:
        region_png = output_dir / f"annual_escapement_{region.replace(' ', '_').lower()}.png"
        plot_annual_escapement(result.annual, region).savefig(region_png, dpi=150)
        written.append(region_png)

    return written


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    load_dotenv()
    config = PipelineConfig.from_env(
        data_url=args.url,
        cache_path=args.cache,
        output_dir=args.output_dir,
        http_timeout=args.timeout,
        write_cache=args.write_cache,
        species=SALMON_SPECIES if args.salmon_only else None,
        location_lookup=args.location_lookup,
    )

    try:
        result = EscapementPipeline(config).run()
    except EscapementError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    if args.region and args.region not in set(result.annual["region"]):
        logger.error(f"No annual escapement for region '{args.region}'")
        return 1

    try:
        written = write_outputs(result, config.output_dir, region=args.region)
    except EscapementError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    logger.info(f"Wrote {len(written)} files to {config.output_dir}")
    for path in written:
        logger.info(f"  ✓ {path.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
