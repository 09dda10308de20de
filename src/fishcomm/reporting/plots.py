"""
Figures for the fish community analysis.

- NMDS site scores coloured by a grouping factor with confidence ellipses
- Shepard diagram of the NMDS fit
- Boxplots with jittered points of yearly mean CPUE, faceted by a factor

Every plotting function returns (fig, ax) or fig; `save_figure` writes a PNG of
fixed size and closes the figure.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.patches import Ellipse
from scipy.stats import f as f_dist

from seinedata.config import ELLIPSE_LEVEL, FIG_DPI, FIG_HEIGHT_IN, FIG_WIDTH_IN

logger = logging.getLogger(__name__)

__all__ = [
    "ellipse_params",
    "plot_nmds",
    "plot_shepard",
    "plot_cpue_facets",
    "save_figure",
]


def ellipse_params(x, y, level: float = ELLIPSE_LEVEL) -> Optional[Tuple[Tuple[float, float], float, float, float]]:
    """
    Normal-theory confidence ellipse for a 2-D point cloud.

    The radius is sqrt(2 * F(level; 2, n - 1)) on the scale of the sample
    covariance, as ggplot2's stat_ellipse(type = "norm") draws it.

    Returns (center, width, height, angle_degrees), or None for fewer than 3 points.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = x.size
    if n < 3:
        return None
    cov = np.cov(x, y)
    vals, vecs = np.linalg.eigh(cov)
    order = vals.argsort()[::-1]
    vals = np.clip(vals[order], 0.0, None)
    vecs = vecs[:, order]
    radius = math.sqrt(2.0 * f_dist.ppf(level, 2, n - 1))
    width = 2.0 * radius * math.sqrt(vals[0])
    height = 2.0 * radius * math.sqrt(vals[1])
    angle = math.degrees(math.atan2(vecs[1, 0], vecs[0, 0]))
    return (float(x.mean()), float(y.mean())), width, height, angle


def plot_nmds(scores: pd.DataFrame,
              group_col: str = "Region",
              *,
              x: str = "NMDS1",
              y: str = "NMDS2",
              level: float = ELLIPSE_LEVEL,
              title: Optional[str] = None,
              hide_axes: bool = True,
              ax=None):
    """
    Scatter of NMDS site scores coloured by `group_col`, one ellipse per group.

    Parameters
    ----------
    scores : frame with score columns and metadata (see seinedata.join_site_scores)
    group_col : column used for colours and ellipses
    level : ellipse confidence level
    hide_axes : drop axis labels, tick labels and grid lines

    Returns
    -------
    (fig, ax)
    """
    missing = [c for c in (x, y, group_col) if c not in scores.columns]
    if missing:
        raise KeyError(f"Columns not found in scores: {missing}")

    created_fig = False
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(FIG_WIDTH_IN, FIG_HEIGHT_IN))
        created_fig = True
    else:
        fig = ax.figure

    groups = sorted(scores[group_col].astype(str).unique())
    palette = dict(zip(groups, sns.color_palette(n_colors=len(groups))))
    for g in groups:
        sub = scores.loc[scores[group_col].astype(str) == g]
        color = palette[g]
        ax.scatter(sub[x], sub[y], s=25, color=color, label=g)
        params = ellipse_params(sub[x], sub[y], level=level)
        if params is None:
            logger.warning("Too few points to draw an ellipse for %s=%s", group_col, g)
            continue
        center, width, height, angle = params
        ax.add_patch(Ellipse(center, width, height, angle=angle,
                             fill=False, edgecolor=color, lw=1))

    ax.legend(title=group_col, frameon=False, fontsize=7, title_fontsize=8)
    if title:
        ax.set_title(title, fontsize=8)
    if hide_axes:
        ax.set_xlabel("")
        ax.set_ylabel("")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.grid(False)
    else:
        ax.set_xlabel(x)
        ax.set_ylabel(y)

    if created_fig:
        fig.tight_layout()
    return fig, ax


def plot_shepard(shepard: pd.DataFrame, *, stress: Optional[float] = None, ax=None):
    """
    Shepard diagram: ordination distance against observed dissimilarity with the
    monotone step fit. `shepard` is NMDSResult.shepard().
    """
    created_fig = False
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(FIG_WIDTH_IN, FIG_HEIGHT_IN))
        created_fig = True
    else:
        fig = ax.figure

    ax.scatter(shepard["dissimilarity"], shepard["distance"], s=6, color="#1f77b4", alpha=0.6)
    ax.step(shepard["dissimilarity"], shepard["fitted"], where="post", color="#d62728", lw=1)
    ax.set_xlabel("Observed dissimilarity", fontsize=8)
    ax.set_ylabel("Ordination distance", fontsize=8)
    ax.tick_params(labelsize=7)
    if stress is not None:
        ax.text(0.02, 0.95, f"Non-metric fit, R2 = {1 - stress ** 2:.3f}",
                transform=ax.transAxes, va="top", fontsize=7)

    if created_fig:
        fig.tight_layout()
    return fig, ax


def plot_cpue_facets(aggregated: pd.DataFrame,
                     facet_col: str = "WaterYear",
                     *,
                     x: str = "Region",
                     value_col: str = "MeanCPUE",
                     ncols: int = 4,
                     seed: Optional[int] = 0):
    """
    Boxplots of `value_col` by `x` with jittered points, one panel per `facet_col` level.
    """
    missing = [c for c in (facet_col, x, value_col) if c not in aggregated.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")
    levels = sorted(aggregated[facet_col].dropna().unique())
    if not levels:
        raise ValueError(f"No values to facet by {facet_col}")

    ncols = max(1, min(ncols, len(levels)))
    nrows = math.ceil(len(levels) / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(2.2 * ncols, 2.0 * nrows),
                             sharey=True, squeeze=False)
    order = sorted(aggregated[x].dropna().astype(str).unique())
    # stripplot jitter draws from numpy's global generator; restore it afterwards
    state = np.random.get_state()
    np.random.seed(seed)
    try:
        for ax, level in zip(axes.flat, levels):
            sub = aggregated.loc[aggregated[facet_col] == level].copy()
            sub[x] = sub[x].astype(str)
            sns.boxplot(data=sub, x=x, y=value_col, order=order, ax=ax,
                        color="white", fliersize=0, linewidth=0.8)
            sns.stripplot(data=sub, x=x, y=value_col, order=order, ax=ax,
                          color="black", size=2.5, alpha=0.6, jitter=0.2)
            ax.set_title(f"{facet_col} {level}", fontsize=8)
            ax.set_xlabel("")
            ax.tick_params(labelsize=7)
    finally:
        np.random.set_state(state)
    for ax in list(axes.flat)[len(levels):]:
        ax.set_visible(False)
    fig.tight_layout()
    return fig


def save_figure(fig, output_dir: str | Path, filename: str,
                *,
                width: float = FIG_WIDTH_IN,
                height: float = FIG_HEIGHT_IN,
                dpi: int = FIG_DPI) -> Path:
    """Write `fig` as a PNG of width x height inches and close it."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    fig.set_size_inches(width, height)
    fig.savefig(path, format="png", dpi=dpi)
    plt.close(fig)
    logger.info("saved %s", path)
    return path
