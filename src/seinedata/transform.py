from __future__ import annotations
import numpy as np
import pandas as pd

from .config import AGG_KEYS, FAMILIES_OF_INTEREST, SITE_KEYS


def fourth_root(values) -> np.ndarray:
    """
    Fourth-root transform for nonnegative abundance values.
    Down-weights dominant taxa before computing Bray-Curtis dissimilarities.
    """
    X = np.asarray(values, dtype=float)
    if np.any(X < 0):
        raise ValueError("fourth_root requires nonnegative inputs.")
    return np.power(X, 0.25)


def aggregate_cpue(df: pd.DataFrame, keys: list[str] | None = None) -> pd.DataFrame:
    """
    Mean CPUE per (WaterYear, WaterYearType, Region, Family, CommonName).

    Returns one row per observed key combination with columns MeanCPUE and
    CPUE4th (= MeanCPUE ** 0.25). No zero rows are added for unobserved taxa.
    """
    keys = list(keys or AGG_KEYS)
    out = (
        df.groupby(keys, dropna=False, sort=True)["CPUE"]
        .mean()
        .rename("MeanCPUE")
        .reset_index()
    )
    out["CPUE4th"] = fourth_root(out["MeanCPUE"])
    return out


def subset_families(df: pd.DataFrame, families=FAMILIES_OF_INTEREST) -> pd.DataFrame:
    """Keep rows whose Family is one of `families`."""
    return df.loc[df["Family"].isin(list(families))].reset_index(drop=True)


def pivot_community(df: pd.DataFrame,
                    keys: list[str] | None = None,
                    taxon_col: str = "CommonName",
                    value_col: str = "CPUE4th") -> pd.DataFrame:
    """
    Pivot a long taxon table into a sites x taxa community matrix.

    - Index: the site keys (default WaterYear, WaterYearType, Region), sorted.
    - Columns: taxa in the order they first appear in `df`.
    - Cells: `value_col`, 0.0 where a taxon was not observed at a site.

    Duplicate (site, taxon) pairs are a data error and raise ValueError.
    """
    keys = list(keys or SITE_KEYS)
    if df.empty:
        raise ValueError("Cannot build a community matrix from an empty table")
    taxa = pd.unique(df[taxon_col])
    wide = df.pivot(index=keys, columns=taxon_col, values=value_col)
    wide = wide.reindex(columns=taxa).fillna(0.0).sort_index()
    wide.columns.name = taxon_col
    return wide.astype(float)


def community_to_long(wide: pd.DataFrame,
                      taxon_col: str = "CommonName",
                      value_col: str = "CPUE4th") -> pd.DataFrame:
    """
    Inverse of pivot_community: melt the matrix and drop zero-filled cells.
    """
    long = wide.rename_axis(columns=taxon_col).stack().rename(value_col).reset_index()
    return long.loc[long[value_col] != 0].reset_index(drop=True)
