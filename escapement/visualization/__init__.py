from .plots import plot_median_escapement, plot_annual_escapement
from .interactive import escapement_table, location_map, figure_html

__all__ = [
    "plot_median_escapement",
    "plot_annual_escapement",
    "escapement_table",
    "location_map",
    "figure_html",
]
