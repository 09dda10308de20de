"""
End-to-end beach seine community analysis.

load -> clean -> yearly mean CPUE (4th root) -> cyprinids/centrarchids ->
sites x taxa matrix -> NMDS + PERMANOVA/ANOSIM per grouping -> figures and tables.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pandas as pd

from seinedata.cleaning import DEFAULT_PROFILE, CleaningProfile
from seinedata.config import (
    DISTANCE_METRIC, FACET_FIG_HEIGHT_IN, FACET_FIG_WIDTH_IN, FAMILIES_OF_INTEREST, GROUPINGS,
    NMDS_DIMENSIONS, NMDS_TITLE, OUTPUT, RAW_SEINE_CSV, REQUIRED_GROUPING,
)
from seinedata.data_io import save_table
from seinedata.dataframe_ops import join_site_scores, site_metadata
from seinedata.pipeline import PreparedData, prepare_community, write_prepared_tables

from .ordination.backend import CommunityStatsBackend, DefaultStatsBackend
from .ordination.group_tests import GroupTestResult
from .ordination.nmds import NMDSResult
from .reporting.plots import plot_cpue_facets, plot_nmds, plot_shepard, save_figure
from .reporting.tables import print_report, tests_frame

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    prepared: PreparedData
    nmds: NMDSResult
    scores: pd.DataFrame                  # NMDS scores joined with site metadata
    tests: list[GroupTestResult]
    figures: list[Path] = field(default_factory=list)
    tables: list[Path] = field(default_factory=list)


def _nmds_filename(grouping: str) -> str:
    return "NMDS-CC-only.png" if grouping == REQUIRED_GROUPING else f"NMDS-CC-only-{grouping}.png"


def _untestable_reason(labels: pd.Series) -> Optional[str]:
    if labels.isna().any():
        return f"{int(labels.isna().sum())} sites without a label"
    n_groups = labels.nunique()
    if n_groups < 2:
        return "fewer than 2 groups"
    if n_groups == len(labels):
        return "every group is a single site"
    return None


def run_analysis(input_path: str | Path | None = None,
                 output_dir: str | Path | None = None,
                 *,
                 profile: str | CleaningProfile = DEFAULT_PROFILE,
                 families=FAMILIES_OF_INTEREST,
                 groupings=GROUPINGS,
                 metric: str = DISTANCE_METRIC,
                 k: int = NMDS_DIMENSIONS,
                 backend: Optional[CommunityStatsBackend] = None,
                 write_tables: bool = False,
                 show_report: bool = True) -> AnalysisResult:
    """
    Run the full analysis and write figures to `output_dir`.

    Parameters
    ----------
    input_path : raw seine CSV (default: config.RAW_SEINE_CSV)
    output_dir : directory for PNGs and tables (default: config.OUTPUT)
    profile : cleaning profile name or CleaningProfile
    families : families kept for the community matrix
    groupings : site-key columns to colour NMDS plots by and to test. Groupings
        other than REQUIRED_GROUPING are skipped with a warning when they have
        missing labels, a single level, or only single-site levels.
    backend : ordination/statistics implementation (default: DefaultStatsBackend())
    write_tables : also write intermediate tables and test summaries
    show_report : print the NMDS/PERMANOVA/ANOSIM summaries
    """
    input_path = Path(input_path or RAW_SEINE_CSV)
    output_dir = Path(output_dir or OUTPUT)
    backend = backend or DefaultStatsBackend()

    prepared = prepare_community(input_path, profile=profile, families=families)
    community = prepared.community

    # ---- Ordination ----
    nmds = backend.ordinate(community, metric=metric, k=k)
    scores = join_site_scores(nmds.points, community)

    # ---- Group tests ----
    meta = site_metadata(community, as_str=None)
    tests: list[GroupTestResult] = []
    tested = []
    for grouping in groupings:
        if grouping not in meta.columns:
            raise KeyError(f"Grouping {grouping!r} is not a site key: {list(meta.columns)}")
        reason = _untestable_reason(meta[grouping])
        if reason is not None and grouping != REQUIRED_GROUPING:
            logger.warning("Skipping grouping %s: %s", grouping, reason)
            continue
        tests.extend(backend.test_groups(community, meta[grouping], metric=metric))
        tested.append(grouping)

    if show_report:
        print_report(nmds, tests)

    # ---- Figures ----
    figures = []
    for grouping in tested:
        fig, _ = plot_nmds(scores, group_col=grouping, title=NMDS_TITLE)
        figures.append(save_figure(fig, output_dir, _nmds_filename(grouping)))
    fig, _ = plot_shepard(nmds.shepard(), stress=nmds.stress)
    figures.append(save_figure(fig, output_dir, "Shepard-CC-only.png"))
    for facet in ("WaterYear", "WaterYearType"):
        if prepared.aggregated[facet].isna().all():
            logger.warning("Skipping CPUE facets by %s: no values", facet)
            continue
        fig = plot_cpue_facets(prepared.aggregated, facet_col=facet)
        figures.append(save_figure(fig, output_dir, f"CPUE-by-{facet}.png",
                                   width=FACET_FIG_WIDTH_IN, height=FACET_FIG_HEIGHT_IN))

    # ---- Tables ----
    tables = []
    if write_tables:
        tables.extend(write_prepared_tables(prepared, output_dir))
        tables.append(save_table(scores, "nmds_scores.csv", output_dir))
        tables.append(save_table(tests_frame(tests), "group_tests.csv", output_dir))

    logger.info("wrote %d figures and %d tables to %s", len(figures), len(tables), output_dir)
    return AnalysisResult(prepared=prepared, nmds=nmds, scores=scores, tests=tests,
                          figures=figures, tables=tables)
