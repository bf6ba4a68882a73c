"""Histogram chart of a sample set with quantile markers (matplotlib)."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from src.common.constants import (  # noqa: E402
    FILL_ALPHA,
    HISTOGRAM_BINS,
    HISTOGRAM_COLOR,
    QUANTILE_COLOR,
)
from src.stats.values import ValueSlice  # noqa: E402


def histogram_counts(
    values: ValueSlice, bins: int = HISTOGRAM_BINS
) -> tuple[np.ndarray, np.ndarray]:
    """Bin the finite samples.  Returns ``(counts, edges)``; empty arrays if none."""
    data = np.asarray(values.to_list(), dtype=float)
    data = data[np.isfinite(data)]
    if data.size == 0:
        return np.array([], dtype=int), np.array([], dtype=float)
    return np.histogram(data, bins=bins)


def plot_histogram(
    values: ValueSlice,
    out_path: Path,
    *,
    title: str,
    quantiles: dict[str, float] | None = None,
    bins: int = HISTOGRAM_BINS,
) -> Path:
    """Write a PNG histogram of *values* to *out_path* and return the path.

    *quantiles* (label → value, e.g. a ``TimerSummary.quantiles``) are
    drawn as vertical markers.
    """
    counts, edges = histogram_counts(values, bins)

    fig, ax = plt.subplots(figsize=(10, 5))
    if counts.size:
        ax.stairs(counts, edges, fill=True, color=HISTOGRAM_COLOR, alpha=FILL_ALPHA)
        for label, value in (quantiles or {}).items():
            if np.isfinite(value):
                ax.axvline(value, color=QUANTILE_COLOR, linestyle="--", linewidth=1)
                ax.annotate(
                    f"p{label.replace('_', '.')}",
                    xy=(value, counts.max()),
                    xytext=(3, 0),
                    textcoords="offset points",
                    fontsize=8,
                    color=QUANTILE_COLOR,
                )
    else:
        ax.text(0.5, 0.5, "no samples", ha="center", va="center", transform=ax.transAxes)

    ax.set_title(title, fontsize=13, fontweight="bold")
    ax.set_xlabel("Value")
    ax.set_ylabel("Samples")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
