"""
Static matplotlib charts of escapement summaries.

Figures are built with the object-oriented API so nothing depends on an
interactive backend; callers save them with ``fig.savefig``.
"""

from typing import Optional
import logging

import pandas as pd
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

BAR_COLOR = "#2c7fb8"


def plot_median_escapement(summary: pd.DataFrame, title: str = "Median annual escapement by species") -> Figure:
    """
    Bar chart with one bar per species.

    Args:
        summary: Table with species and median_escapement columns
        title: Axes title
    """
    fig = Figure(figsize=(8, 5))
    ax = fig.subplots()

    ordered = summary.sort_values("median_escapement", ascending=False)
    ax.bar(ordered["species"].astype(str), ordered["median_escapement"], color=BAR_COLOR)
    ax.set_xlabel("Species")
    ax.set_ylabel("Median escapement (fish)")
    ax.set_title(title)
    ax.tick_params(axis="x", labelrotation=45)
    fig.tight_layout()
    return fig


def plot_annual_escapement(annual: pd.DataFrame, region: str, title: Optional[str] = None) -> Figure:
    """
    Yearly escapement per species for a single region.

    Args:
        annual: Table with species, region, year and escapement columns
        region: Region to plot
        title: Axes title. Defaults to "Escapement in <region>"

    Raises:
        ValueError: if the region has no rows
    """
    subset = annual[annual["region"] == region]
    if subset.empty:
        raise ValueError(f"No annual escapement for region '{region}'")

    fig = Figure(figsize=(9, 5))
    ax = fig.subplots()
    for species, rows in subset.groupby("species", sort=True):
        rows = rows.sort_values("year")
        ax.plot(rows["year"], rows["escapement"], marker="o", label=str(species))

    ax.set_xlabel("Year")
    ax.set_ylabel("Escapement (fish)")
    ax.set_title(title or f"Escapement in {region}")
    ax.legend(title="Species")
    fig.tight_layout()
    logger.debug(f"Plotted {subset['species'].nunique()} species for {region}")
    return fig
