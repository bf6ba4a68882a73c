"""Error taxonomy for sample statistics.

Misuse errors (bad index, bad quantile) are raised.  Input-quality
errors (NaN present, nothing to scan) are *returned* next to a
best-effort result so the caller can decide whether to keep the data.
"""

from __future__ import annotations


class StatsError(Exception):
    """Base class for every error this package raises or returns."""


class SampleIndexError(StatsError, IndexError):
    """Index outside ``[0, len(values))``."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for {length} samples")
        self.index = index
        self.length = length


class QuantileRangeError(StatsError, ValueError):
    """Quantile requested outside ``[0, 1]``."""

    def __init__(self, quantile: float) -> None:
        super().__init__(f"quantile must be within [0, 1], got {quantile}")
        self.quantile = quantile


class NaNValueError(StatsError):
    """One or more NaN samples were skipped during a scan."""

    def __init__(self, count: int) -> None:
        super().__init__(f"NaN value found in samples ({count} skipped)")
        self.count = count


class EmptySampleError(StatsError):
    """The collection had no samples to scan."""

    def __init__(self) -> None:
        super().__init__("no samples")


class SampleSourceError(StatsError):
    """A sample source (file, stdin, Redis) could not be read."""


class DuplicateQuantileError(StatsError, ValueError):
    """Two requested quantiles would report under the same field label."""

    def __init__(self, label: str, quantiles: tuple[float, ...]) -> None:
        super().__init__(f"quantiles {quantiles} all map to label {label!r}")
        self.label = label
        self.quantiles = quantiles
