from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from .cleaning import (
    DEFAULT_PROFILE, CleaningProfile, clean_seine_records, get_profile,
)
from .config import FAMILIES_OF_INTEREST
from .corrections import corrections_frame
from .data_io import save_table
from .ingest import read_seine_raw
from .transform import aggregate_cpue, pivot_community, subset_families
from .validators import assert_aggregated, assert_clean

logger = logging.getLogger(__name__)


@dataclass
class PreparedData:
    raw: pd.DataFrame
    cleaned: pd.DataFrame
    duplicates: pd.DataFrame  # duplicated sampling events among the filtered records
    aggregated: pd.DataFrame  # all families
    subset: pd.DataFrame      # families of interest only
    community: pd.DataFrame   # sites x taxa, CPUE4th
    profile: CleaningProfile


def prepare_community(input_path: str | Path | None = None,
                      *,
                      profile: str | CleaningProfile = DEFAULT_PROFILE,
                      families=FAMILIES_OF_INTEREST) -> PreparedData:
    # ---- Load ----
    raw = read_seine_raw(input_path)

    # ---- Clean ----
    prof = get_profile(profile)
    cleaned, duplicates = clean_seine_records(raw, prof, with_duplicates=True)
    assert_clean(cleaned)

    # ---- Yearly averages by region, 4th root ----
    aggregated = aggregate_cpue(cleaned)
    assert_aggregated(aggregated)

    # ---- Cyprinids and centrarchids only ----
    subset = subset_families(aggregated, families)
    if subset.empty:
        raise ValueError(f"No aggregated records for families {list(families)}")

    # ---- Sites x taxa ----
    community = pivot_community(subset)
    logger.info("community matrix: %d sites x %d taxa", *community.shape)

    return PreparedData(raw=raw, cleaned=cleaned, duplicates=duplicates, aggregated=aggregated,
                        subset=subset, community=community, profile=prof)


def write_prepared_tables(prepared: PreparedData, output_dir: str | Path) -> list[Path]:
    """Write the intermediate tables and the duplicate/correction reports."""
    paths = [
        save_table(prepared.cleaned, "seine_clean.parquet", output_dir),
        save_table(prepared.aggregated, "cpue_yearly_avg.parquet", output_dir),
        save_table(prepared.community, "community_matrix.parquet", output_dir),
        save_table(prepared.duplicates, "duplicate_samples.csv", output_dir),
    ]
    if prepared.profile.corrections_version is not None:
        paths.append(save_table(corrections_frame(prepared.profile.corrections_version),
                                "corrections_applied.csv", output_dir))
    return paths
