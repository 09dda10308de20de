"""
Reporting for the fish community analysis: PNG figures and console tables.
"""

from .plots import ellipse_params, plot_nmds, plot_shepard, plot_cpue_facets, save_figure
from .tables import (
    format_nmds, format_permanova, format_anosim, format_group_test, tests_frame, print_report,
)

__all__ = [
    # Figures
    "ellipse_params", "plot_nmds", "plot_shepard", "plot_cpue_facets", "save_figure",

    # Tables
    "format_nmds", "format_permanova", "format_anosim", "format_group_test",
    "tests_frame", "print_report",
]
