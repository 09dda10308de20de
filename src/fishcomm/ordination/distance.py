"""
Community matrix preparation and pairwise dissimilarities.

The matrix handed to ordination and group tests must be numeric, free of
missing values and non-negative. For Bray-Curtis every site also needs at least
one non-zero taxon, otherwise its dissimilarity to an empty site is 0/0.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.spatial.distance import pdist, squareform

from seinedata.dataframe_ops import assert_unique_index, site_labels

__all__ = ["prepare_abundance_matrix", "community_distances"]


def prepare_abundance_matrix(community: pd.DataFrame) -> np.ndarray:
    """
    Validate a sites x taxa frame and return it as a float array.

    Raises ValueError on non-numeric columns, missing values, negative
    abundances, sites with no taxa, or duplicated site keys.
    """
    if community.shape[0] == 0 or community.shape[1] == 0:
        raise ValueError("Community matrix is empty")
    assert_unique_index(community, "community")
    non_numeric = [c for c in community.columns if not pd.api.types.is_numeric_dtype(community[c])]
    if non_numeric:
        raise ValueError(f"Community matrix has non-numeric columns: {non_numeric[:10]}")
    X = community.to_numpy(dtype=float)
    if np.isnan(X).any():
        raise ValueError("Community matrix contains missing values")
    if np.any(X < 0):
        raise ValueError("Community matrix must be non-negative")
    empty = X.sum(axis=1) == 0
    if empty.any():
        raise ValueError(f"Sites without any taxa: {community.index[empty].tolist()[:10]}")
    return X


def community_distances(community: pd.DataFrame, metric: str = "braycurtis") -> pd.DataFrame:
    """
    Square matrix of pairwise dissimilarities between sites.

    `metric` is any scipy.spatial.distance.pdist metric name. Rows and columns
    are labelled with the site keys joined by '|' (e.g. '2012|Wet|AL').
    """
    X = prepare_abundance_matrix(community)
    D = squareform(pdist(X, metric=metric))
    ids = site_labels(community.index)
    return pd.DataFrame(D, index=ids, columns=ids)
