"""
Ordination and group-separation statistics for fish community matrices.

This subpackage contains Bray-Curtis dissimilarities, NMDS, PERMANOVA and
ANOSIM, and the backend interface the workflow calls them through.
"""

from .distance import prepare_abundance_matrix, community_distances
from .nmds import NMDSResult, kruskal_stress, metamds
from .group_tests import (
    GroupTestResult,
    align_groups,
    adonis_table,
    anosim_distance,
    anosim_test,
    permanova_distance,
    permanova_test,
)
from .backend import CommunityStatsBackend, DefaultStatsBackend

__all__ = [
    # Distances
    "prepare_abundance_matrix",
    "community_distances",

    # NMDS
    "NMDSResult",
    "kruskal_stress",
    "metamds",

    # Group tests
    "GroupTestResult",
    "align_groups",
    "adonis_table",
    "anosim_distance",
    "anosim_test",
    "permanova_distance",
    "permanova_test",

    # Backend
    "CommunityStatsBackend",
    "DefaultStatsBackend",
]
