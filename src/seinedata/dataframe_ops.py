from __future__ import annotations
from typing import Iterable, Optional

import pandas as pd

from .config import SITE_KEYS

# -------------------------------
# Site-key helpers
# -------------------------------

def site_labels(index: pd.Index, sep: str = "|") -> list[str]:
    """
    Flatten a (Multi)Index of site keys to strings like '2012|Wet|AL'.
    Used as ids where a library needs one string per site.
    """
    if isinstance(index, pd.MultiIndex):
        return [sep.join(str(x) for x in tup) for tup in index.to_flat_index()]
    return [str(x) for x in index]


def site_metadata(community: pd.DataFrame, as_str: Optional[Iterable[str]] = ("WaterYear",)) -> pd.DataFrame:
    """
    Site-key columns of a community matrix as a frame sharing its index.

    Columns named in `as_str` are converted to strings so plots treat them as
    categories rather than a gradient.
    """
    meta = community.index.to_frame(index=True)
    for col in as_str or ():
        if col in meta.columns:
            meta[col] = meta[col].astype(str)
    return meta


def join_site_scores(scores: pd.DataFrame, community: pd.DataFrame) -> pd.DataFrame:
    """
    Attach site metadata to per-site scores by the site-key index.

    Both frames must carry the same index (same keys, same order). Row position
    alone is never used to pair a score with its site.
    """
    _assert_same_index(community, scores)
    assert_unique_index(scores, "scores")
    meta = site_metadata(community)
    overlap = meta.columns.intersection(scores.columns)
    if len(overlap) > 0:
        raise ValueError(f"Columns already exist in scores: {list(overlap)}")
    return meta.join(scores).reset_index(drop=True)


# -------------------------------
# Validation / Safety
# -------------------------------

def _assert_same_index(a: pd.DataFrame, b: pd.DataFrame) -> None:
    if not a.index.equals(b.index):
        # Helpful message for common causes
        raise ValueError(
            "Index mismatch between frames. "
            f"Check that both are indexed by the same key(s) (e.g., {SITE_KEYS}), "
            "sorted, and have identical dtype/normalization."
        )


def assert_unique_index(df: pd.DataFrame, name: str = "frame") -> None:
    if not df.index.is_unique:
        dups = df.index[df.index.duplicated()].unique()
        raise ValueError(f"{name} has duplicate index values (first 10): {dups[:10].tolist()}")
