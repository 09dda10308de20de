"""
fishcomm - Fish community ordination for the Yolo Bypass beach seine survey

This package compares fish-community composition between river regions (Above
and Below Lisbon) and water-year types using NMDS, PERMANOVA and ANOSIM on
Bray-Curtis dissimilarities of fourth-root transformed CPUE.

Subpackages:
- ordination: distances, NMDS, group-separation tests, pluggable backend
- reporting: PNG figures and console tables

The data preparation (loading, cleaning, aggregation, community matrix) lives
in the companion package `seinedata`.
"""

# Import from subpackages for convenience
from .ordination import (
    community_distances, metamds, NMDSResult,
    permanova_test, anosim_test, GroupTestResult,
    CommunityStatsBackend, DefaultStatsBackend,
)
from .reporting import plot_nmds, plot_shepard, plot_cpue_facets, save_figure, print_report
from .workflow import run_analysis, AnalysisResult

__all__ = [
    # Ordination
    "community_distances", "metamds", "NMDSResult",
    "permanova_test", "anosim_test", "GroupTestResult",
    "CommunityStatsBackend", "DefaultStatsBackend",

    # Reporting
    "plot_nmds", "plot_shepard", "plot_cpue_facets", "save_figure", "print_report",

    # Workflow
    "run_analysis", "AnalysisResult",
]

# Package metadata
__version__ = "0.1.0"
__description__ = "Fish community ordination for the Yolo Bypass beach seine survey"
