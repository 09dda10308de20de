"""
Non-metric multidimensional scaling with repeated random starts.

The search follows the usual metaMDS recipe:
- up to `trymax` random starts of non-metric SMACOF (scikit-learn MDS),
- the search stops once the best solution has been found twice, i.e. a new
  solution with (nearly) the same stress is also Procrustes-similar to it,
- the final configuration is centred and rotated to its principal axes.

Stress is reported as Kruskal's stress-1 against the monotone (isotonic)
regression of ordination distances on dissimilarities, so it is comparable
between tries and independent of how the MDS implementation scales its output.
Rule of thumb: stress < 0.05 excellent, < 0.1 great, < 0.2 good/ok, > 0.3 poor.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from scipy.spatial import procrustes
from scipy.spatial.distance import pdist, squareform
from sklearn.decomposition import PCA
from sklearn.isotonic import IsotonicRegression
from sklearn.manifold import MDS

from .distance import community_distances

logger = logging.getLogger(__name__)

__all__ = ["NMDSResult", "kruskal_stress", "metamds"]


@dataclass
class NMDSResult:
    points: pd.DataFrame        # sites x NMDS1..NMDSk, indexed by site keys
    stress: float
    distances: pd.DataFrame     # square dissimilarity matrix
    n_tries: int
    converged: bool
    metric: str = "braycurtis"
    stress_by_try: list = field(default_factory=list)

    @property
    def k(self) -> int:
        return self.points.shape[1]

    def shepard(self) -> pd.DataFrame:
        """
        Data for a Shepard diagram: one row per site pair with the original
        dissimilarity, the ordination distance and the monotone fit.
        """
        d = squareform(self.distances.to_numpy(), checks=False)
        e = pdist(self.points.to_numpy())
        _, fitted = kruskal_stress(d, e)
        out = pd.DataFrame({"dissimilarity": d, "distance": e, "fitted": fitted})
        return out.sort_values("dissimilarity", kind="stable").reset_index(drop=True)


def kruskal_stress(dissimilarities: np.ndarray, distances: np.ndarray) -> Tuple[float, np.ndarray]:
    """
    Kruskal stress-1 of ordination distances against condensed dissimilarities.

    Returns (stress, fitted) where fitted are the isotonic-regression disparities.
    """
    d = np.asarray(dissimilarities, dtype=float)
    e = np.asarray(distances, dtype=float)
    if d.shape != e.shape:
        raise ValueError("dissimilarities and distances must have the same length")
    fitted = IsotonicRegression(increasing=True).fit_transform(d, e)
    denom = float(np.sum(e * e))
    if denom == 0:
        return 1.0, fitted
    return float(np.sqrt(np.sum((e - fitted) ** 2) / denom)), fitted


def _nonmetric_mds(k: int, seed: int, max_iter: int) -> MDS:
    return MDS(n_components=k, metric_mds=False, metric="precomputed", init="random",
               n_init=1, max_iter=max_iter, random_state=seed)


def _same_solution(a: np.ndarray, b: np.ndarray, rmse_max: float, resid_max: float) -> bool:
    m1, m2, disparity = procrustes(a, b)
    n = a.shape[0]
    rmse = np.sqrt(disparity / n)
    resid = np.sqrt(np.sum((m1 - m2) ** 2, axis=1))
    return bool(rmse < rmse_max and resid.max() < resid_max)


def _rotate_to_principal_axes(points: np.ndarray) -> np.ndarray:
    k = points.shape[1]
    centred = points - points.mean(axis=0, keepdims=True)
    return PCA(n_components=k).fit_transform(centred)


def metamds(community: pd.DataFrame,
            *,
            k: int = 3,
            metric: str = "braycurtis",
            trymax: int = 200,
            max_iter: int = 300,
            stress_tol: float = 1e-4,
            rmse_max: float = 0.01,
            resid_max: float = 0.03,
            seed: Optional[int] = 0) -> NMDSResult:
    """
    NMDS of a sites x taxa community matrix.

    Parameters
    ----------
    community : DataFrame, non-negative abundances, indexed by site keys
    k : number of ordination dimensions
    metric : pairwise dissimilarity (scipy pdist name), Bray-Curtis by default
    trymax : maximum number of random starts
    max_iter : SMACOF iterations per start
    stress_tol : stress difference under which two solutions count as equal
    rmse_max, resid_max : Procrustes limits for two solutions to be the same
    seed : base seed; start t uses seed + t

    Returns
    -------
    NMDSResult with points indexed like `community`
    """
    n = community.shape[0]
    if n <= k + 1:
        raise ValueError(f"NMDS with k={k} needs more than {k + 1} sites, got {n}")
    if trymax < 1:
        raise ValueError("trymax must be at least 1")

    dist = community_distances(community, metric=metric)
    D = dist.to_numpy()
    d_condensed = squareform(D, checks=False)
    base_seed = 0 if seed is None else int(seed)

    best = None
    best_stress = np.inf
    stresses = []
    converged = False
    tries = 0
    for t in range(trymax):
        emb = _nonmetric_mds(k, base_seed + t, max_iter).fit_transform(D)
        stress, _ = kruskal_stress(d_condensed, pdist(emb))
        stresses.append(stress)
        tries = t + 1
        logger.debug("Run %d stress %.6f", t, stress)

        if best is None:
            best, best_stress = emb, stress
            continue
        if abs(stress - best_stress) <= stress_tol and _same_solution(best, emb, rmse_max, resid_max):
            converged = True
            if stress < best_stress:
                best, best_stress = emb, stress
            logger.info("Run %d stress %.6f ... Solution reached", t, stress)
            break
        if stress < best_stress:
            best, best_stress = emb, stress
            logger.info("Run %d stress %.6f ... New best solution", t, stress)

    if not converged:
        logger.warning("No convergent solutions - best solution after %d tries", tries)

    points = pd.DataFrame(
        _rotate_to_principal_axes(best),
        index=community.index,
        columns=[f"NMDS{i + 1}" for i in range(k)],
    )
    logger.info("NMDS k=%d stress %.4f (%d tries)", k, best_stress, tries)
    return NMDSResult(points=points, stress=float(best_stress), distances=dist,
                      n_tries=tries, converged=converged, metric=metric,
                      stress_by_try=stresses)
