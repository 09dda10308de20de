from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field

import pandas as pd

from .config import (
    DUPLICATE_KEYS, MIN_WATER_YEAR, NON_FISH_TAXA, REGIONS, TAXON_RENAMES,
)
from .corrections import DEFAULT_VERSION, get_corrections

logger = logging.getLogger(__name__)


def _big_camel(name) -> str:
    s = str(name).strip()
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", s)
    words = [w for w in re.split(r"[^0-9A-Za-z]+", s) if w]
    return "".join(w[:1].upper() + w[1:].lower() for w in words)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize column names to BigCamel case.

    Whitespace, underscores and punctuation split words, as do camel-case
    boundaries. An all-caps name is treated as a single word, so "CPUE"
    becomes "Cpue" and "sample_date" becomes "SampleDate".

    Args:
        df: Input DataFrame

    Returns:
        DataFrame with normalized column names
    """
    df = df.copy()
    df.columns = [_big_camel(c) for c in df.columns]
    return df


def cast_types(df: pd.DataFrame, spec: dict[str, str]) -> pd.DataFrame:
    """
    Cast columns to specified data types based on a specification dictionary.

    Unparseable datetimes become NaT and are caught later by schema validation.

    Args:
        df: Input DataFrame
        spec: Dictionary mapping column names to target data types

    Returns:
        DataFrame with columns cast to specified types
    """
    df = df.copy()
    for col, t in spec.items():
        if col not in df.columns:
            continue
        if t.startswith("datetime"):
            df[col] = pd.to_datetime(df[col], errors="coerce")
        else:
            df[col] = df[col].astype(t)
    return df


def ensure_nonnegative(df: pd.DataFrame, col: str = "CPUE") -> pd.DataFrame:
    """
    Validate that a numeric column contains only non-negative values.

    Raises:
        ValueError: If negative values are found
    """
    if (df[col] < 0).any():
        raise ValueError(f"Negative values found in {col} column.")
    return df


# -------------------------------
# Cleaning profiles
# -------------------------------

@dataclass(frozen=True)
class CleaningProfile:
    name: str
    excluded_taxa: tuple[str, ...]
    renames: dict[str, str] = field(default_factory=dict)
    min_water_year: int | None = None
    drop_zero_cpue: bool = True
    corrections_version: str | None = None
    regions: tuple[str, ...] = REGIONS


PROFILES: dict[str, CleaningProfile] = {
    # Bseine_Raw.csv, processing script of 2023-01-19
    "bseine-raw-2023": CleaningProfile(
        name="bseine-raw-2023",
        excluded_taxa=NON_FISH_TAXA,
        renames=dict(TAXON_RENAMES),
        min_water_year=MIN_WATER_YEAR,
        drop_zero_cpue=True,
        corrections_version=DEFAULT_VERSION,
    ),
    # "Beach Seine CPUE All_R_2.csv", 2019 analysis
    "cpue-all-2019": CleaningProfile(
        name="cpue-all-2019",
        excluded_taxa=("Siberian Prawn", "NoCatch", "Mississippi Grass Shrimp"),
        drop_zero_cpue=False,
    ),
}

DEFAULT_PROFILE = "bseine-raw-2023"


def get_profile(profile: str | CleaningProfile = DEFAULT_PROFILE) -> CleaningProfile:
    if isinstance(profile, CleaningProfile):
        return profile
    if profile not in PROFILES:
        raise ValueError(f"Unknown cleaning profile: {profile}. Available: {sorted(PROFILES)}")
    return PROFILES[profile]


# -------------------------------
# Individual rules
# -------------------------------

def rename_taxa(df: pd.DataFrame, renames: dict[str, str]) -> pd.DataFrame:
    """Replace taxon names in CommonName (substring replacement, like str_replace)."""
    df = df.copy()
    for old, new in renames.items():
        df["CommonName"] = df["CommonName"].str.replace(old, new, regex=False)
    return df


def drop_missing_cpue(df: pd.DataFrame, *, drop_zero: bool = True) -> pd.DataFrame:
    keep = df["CPUE"].notna()
    if drop_zero:
        keep &= df["CPUE"] != 0
    return df.loc[keep]


def drop_before_water_year(df: pd.DataFrame, min_year: int) -> pd.DataFrame:
    return df.loc[df["WaterYear"] >= min_year]


def drop_taxa(df: pd.DataFrame, taxa) -> pd.DataFrame:
    return df.loc[~df["CommonName"].isin(list(taxa))]


def keep_regions(df: pd.DataFrame, regions) -> pd.DataFrame:
    return df.loc[df["Region"].isin(list(regions))]


def correction_mask(df: pd.DataFrame, version: str = DEFAULT_VERSION) -> pd.Series:
    """
    Boolean mask of rows that exactly match an entry of the correction table.

    A row matches on (SampleDate, CommonName, StationCode, Count); the date is
    compared at day resolution.
    """
    dates = pd.to_datetime(df["SampleDate"]).dt.normalize()
    mask = pd.Series(False, index=df.index)
    for c in get_corrections(version):
        mask |= (
            (dates == pd.Timestamp(c.sample_date))
            & (df["CommonName"] == c.common_name)
            & (df["StationCode"] == c.station_code)
            & (df["Count"] == c.count)
        )
    return mask


def drop_corrections(df: pd.DataFrame, version: str = DEFAULT_VERSION) -> pd.DataFrame:
    return df.loc[~correction_mask(df, version)]


def drop_exact_duplicates(df: pd.DataFrame) -> pd.DataFrame:
    """Remove rows that are equal to an earlier row on every column."""
    return df.drop_duplicates()


def find_duplicate_samples(df: pd.DataFrame, keys: list[str] | None = None) -> pd.DataFrame:
    """
    Sampling events with more than one entry for the same taxon.

    Returns one row per duplicated key combination with its count in column "n".
    """
    keys = list(keys or DUPLICATE_KEYS)
    missing = [k for k in keys if k not in df.columns]
    if missing:
        raise KeyError(f"Duplicate keys not found: {missing}")
    counts = df.groupby(keys, dropna=False).size().rename("n").reset_index()
    return counts.loc[counts["n"] > 1].reset_index(drop=True)


# -------------------------------
# Full cleaning pass
# -------------------------------

def _log_step(step: str, before: int, after: pd.DataFrame) -> pd.DataFrame:
    logger.info("%-28s %6d -> %6d rows", step, before, len(after))
    return after


def clean_seine_records(df: pd.DataFrame,
                        profile: str | CleaningProfile = DEFAULT_PROFILE,
                        *,
                        with_duplicates: bool = False):
    """
    Apply the cleaning rules of a profile to normalized seine records.

    Taxon renames run first so that later rules (including the correction table)
    see corrected names. Exact duplicates are removed last.

    Args:
        df: Records with normalized column names (see ingest.read_seine_raw)
        profile: Profile name or CleaningProfile
        with_duplicates: Also return the duplicate-sample report

    Returns:
        Cleaned DataFrame with a fresh RangeIndex. With `with_duplicates`, a
        tuple (cleaned, duplicates) where duplicates is find_duplicate_samples
        of the filtered records, before corrections and exact-duplicate removal.
    """
    prof = get_profile(profile)
    ensure_nonnegative(df, "CPUE")

    out = _log_step("rename taxa", len(df), rename_taxa(df, prof.renames))
    out = _log_step("drop missing/zero CPUE", len(out),
                    drop_missing_cpue(out, drop_zero=prof.drop_zero_cpue))
    if prof.min_water_year is not None:
        out = _log_step(f"water year >= {prof.min_water_year}", len(out),
                        drop_before_water_year(out, prof.min_water_year))
    out = _log_step("drop non-fish taxa", len(out), drop_taxa(out, prof.excluded_taxa))
    out = _log_step("keep regions", len(out), keep_regions(out, prof.regions))

    dups = find_duplicate_samples(out)
    if len(dups):
        logger.warning("%d sampling events have more than one entry for a taxon", len(dups))

    if prof.corrections_version is not None:
        out = _log_step(f"corrections {prof.corrections_version}", len(out),
                        drop_corrections(out, prof.corrections_version))
    out = _log_step("drop exact duplicates", len(out), drop_exact_duplicates(out))

    if out.empty:
        raise ValueError(f"No records left after cleaning with profile {prof.name!r}")
    out = out.reset_index(drop=True)
    if with_duplicates:
        return out, dups
    return out
