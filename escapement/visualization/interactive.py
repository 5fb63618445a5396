"""
Interactive plotly views: a sortable table of the summary and a marker
map of sampling locations. Both export to standalone HTML.
"""

import plotly.express as px
import plotly.graph_objects as go
import plotly.io as pio
import pandas as pd

TEMPLATE = "plotly_white"


def escapement_table(summary: pd.DataFrame) -> go.Figure:
    """Table of median escapement with one row per species"""
    ordered = summary.sort_values("species")
    fig = go.Figure(
        data=[
            go.Table(
                header=dict(values=["Species", "Median escapement"], align="left"),
                cells=dict(
                    values=[ordered["species"], ordered["median_escapement"].round(1)],
                    align="left",
                ),
            )
        ]
    )
    fig.update_layout(template=TEMPLATE, title="Median escapement by species")
    return fig


def location_map(points: pd.DataFrame) -> go.Figure:
    """
    One marker per sampling location, labelled with the location name.

    Args:
        points: Table with location, latitude and longitude columns
    """
    fig = px.scatter_geo(
        points,
        lat="latitude",
        lon="longitude",
        hover_name="location",
        text="location",
        template=TEMPLATE,
    )
    fig.update_traces(textposition="top center", marker=dict(size=8))
    fig.update_geos(fitbounds="locations", showland=True, showcountries=True)
    fig.update_layout(title="Escapement sampling locations", margin=dict(l=0, r=0, t=40, b=0))
    return fig


def figure_html(fig: go.Figure) -> str:
    """Standalone HTML page for a figure, loading plotly.js from the CDN."""
    return pio.to_html(fig, full_html=True, include_plotlyjs="cdn", config={"responsive": True})
