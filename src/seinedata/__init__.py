from .cleaning import clean_seine_records, find_duplicate_samples, normalize_columns
from .transform import aggregate_cpue, subset_families, pivot_community, community_to_long
from .dataframe_ops import join_site_scores, site_metadata
from .pipeline import prepare_community, PreparedData

__all__ = [
    "clean_seine_records",
    "find_duplicate_samples",
    "normalize_columns",
    "aggregate_cpue",
    "subset_families",
    "pivot_community",
    "community_to_long",
    "join_site_scores",
    "site_metadata",
    "prepare_community",
    "PreparedData",
]
