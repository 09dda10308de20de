"""Console summaries of the ordination and group tests, laid out like vegan's printouts."""
from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from ..ordination.group_tests import GroupTestResult
from ..ordination.nmds import NMDSResult


def _fmt(v) -> str:
    if isinstance(v, float) and np.isnan(v):
        return ""
    if isinstance(v, (int, np.integer)):
        return str(v)
    return f"{v:.4g}"


def format_nmds(result: NMDSResult) -> str:
    status = "converged" if result.converged else "no convergent solutions"
    return (
        f"NMDS ({result.metric}), k = {result.k}\n"
        f"Stress: {result.stress:.4f} ({status}, {result.n_tries} tries)"
    )


def format_permanova(result: GroupTestResult) -> str:
    table = result.table
    if table is None:
        raise ValueError("PERMANOVA result has no table")
    body = table.astype(object).map(_fmt)
    return "\n".join([
        "Permutation test for adonis under reduced model",
        "Permutation: free",
        f"Number of permutations: {result.permutations}",
        "",
        f"adonis2(formula = community ~ {result.grouping}, method = \"{result.metric}\")",
        body.to_string(),
    ])


def format_anosim(result: GroupTestResult) -> str:
    sizes = ", ".join(f"{k}: {v}" for k, v in result.group_sizes.items())
    return "\n".join([
        f"ANOSIM by {result.grouping} ({sizes})",
        f"ANOSIM statistic R: {result.statistic:.4f}",
        f"      Significance: {result.p_value:.4g}",
        "",
        "Permutation: free",
        f"Number of permutations: {result.permutations}",
    ])


def format_group_test(result: GroupTestResult) -> str:
    if result.method == "PERMANOVA":
        return format_permanova(result)
    if result.method == "ANOSIM":
        return format_anosim(result)
    raise ValueError(f"Unknown test method: {result.method}")


def tests_frame(results: Iterable[GroupTestResult]) -> pd.DataFrame:
    """One row per test: grouping, method, statistic and p-value."""
    return pd.DataFrame([
        {
            "grouping": r.grouping,
            "method": r.method,
            "statistic_name": r.statistic_name,
            "statistic": r.statistic,
            "p_value": r.p_value,
            "permutations": r.permutations,
            "n": r.sample_size,
        }
        for r in results
    ])


def print_report(nmds: NMDSResult, results: Iterable[GroupTestResult]) -> None:
    print(format_nmds(nmds))
    for r in results:
        print()
        print(format_group_test(r))
