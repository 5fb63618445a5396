"""
Tests for static and interactive figures.
"""
import pytest
import pandas as pd
from matplotlib.figure import Figure
import plotly.graph_objects as go

from escapement.analysis.aggregator import EscapementAggregator
from escapement.data.locations import extract_locations, sanitize_longitudes
from escapement.visualization import (
    escapement_table,
    figure_html,
    location_map,
    plot_annual_escapement,
    plot_median_escapement,
)


@pytest.fixture
def summary(records):
    return EscapementAggregator().median_escapement(records)


@pytest.fixture
def locations(records):
    return sanitize_longitudes(extract_locations(records))


class TestStaticPlots:

    @pytest.mark.unit
    def test_bar_chart_one_bar_per_species(self, summary):
        fig = plot_median_escapement(summary)

        assert isinstance(fig, Figure)
        ax = fig.axes[0]
        assert len(ax.patches) == 3
        # bars sorted by descending median
        heights = [p.get_height() for p in ax.patches]
        assert heights == sorted(heights, reverse=True)
        assert ax.get_ylabel() == "Median escapement (fish)"

    @pytest.mark.unit
    def test_bar_chart_saves(self, summary, tmp_path):
        path = tmp_path / "bar.png"
        plot_median_escapement(summary).savefig(path)
        assert path.stat().st_size > 0

    @pytest.mark.unit
    def test_annual_chart(self, records):
        annual = EscapementAggregator().annual_escapement(records)

        fig = plot_annual_escapement(annual, "Kodiak")

        ax = fig.axes[0]
        assert len(ax.get_lines()) == 2  # Chinook, Coho
        assert ax.get_title() == "Escapement in Kodiak"

    @pytest.mark.unit
    def test_annual_chart_unknown_region(self, records):
        annual = EscapementAggregator().annual_escapement(records)

        with pytest.raises(ValueError, match="Yukon"):
            plot_annual_escapement(annual, "Yukon")


class TestInteractive:

    @pytest.mark.unit
    def test_table(self, summary):
        fig = escapement_table(summary)

        table = fig.data[0]
        assert isinstance(table, go.Table)
        assert list(table.cells.values[0]) == ["Chinook", "Coho", "Sockeye"]

    @pytest.mark.unit
    def test_map_marker_per_location(self, locations):
        fig = location_map(locations)

        trace = fig.data[0]
        assert len(trace.lat) == len(locations)
        assert list(trace.text) == list(locations["location"])
        assert max(trace.lon) <= 0

    @pytest.mark.unit
    def test_figure_html(self, summary):
        html = figure_html(escapement_table(summary))

        assert "<html>" in html
        assert "cdn.plot.ly" in html
