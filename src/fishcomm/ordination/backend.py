"""
Pluggable ordination/statistics backend.

A backend turns a non-negative sites x taxa matrix into an NMDS embedding with
its stress and tests whether groups of sites differ in composition. The
workflow only talks to this interface, so another implementation (e.g. one
calling R's vegan) can be dropped in without touching preparation or reporting.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import pandas as pd

from seinedata.config import (
    ANOSIM_PERMUTATIONS, DISTANCE_METRIC, NMDS_DIMENSIONS, NMDS_TRYMAX, PERMANOVA_PERMUTATIONS, SEED,
)

from .group_tests import GroupTestResult, anosim_test, permanova_test
from .nmds import NMDSResult, metamds


class CommunityStatsBackend(Protocol):
    def ordinate(self, community: pd.DataFrame, *, metric: str, k: int) -> NMDSResult:
        ...

    def test_groups(self, community: pd.DataFrame, groups: pd.Series, *,
                    metric: str) -> list[GroupTestResult]:
        ...


@dataclass
class DefaultStatsBackend:
    """NMDS via scikit-learn SMACOF; PERMANOVA and ANOSIM by label permutation."""
    trymax: int = NMDS_TRYMAX
    max_iter: int = 300
    permanova_permutations: int = PERMANOVA_PERMUTATIONS
    anosim_permutations: int = ANOSIM_PERMUTATIONS
    seed: Optional[int] = SEED

    def ordinate(self, community: pd.DataFrame, *, metric: str = DISTANCE_METRIC,
                 k: int = NMDS_DIMENSIONS) -> NMDSResult:
        return metamds(community, k=k, metric=metric, trymax=self.trymax,
                       max_iter=self.max_iter, seed=self.seed)

    def test_groups(self, community: pd.DataFrame, groups: pd.Series, *,
                    metric: str = DISTANCE_METRIC) -> list[GroupTestResult]:
        return [
            permanova_test(community, groups, metric=metric,
                           permutations=self.permanova_permutations, seed=self.seed),
            anosim_test(community, groups, metric=metric,
                        permutations=self.anosim_permutations, seed=self.seed),
        ]
