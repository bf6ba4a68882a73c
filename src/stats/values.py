"""Sample collection with on-demand order statistics.

``ValueSlice`` holds the raw float observations of one flush interval.
Every statistic is computed from the current contents when asked; no
result is cached.  ``median``, ``quantile`` and ``unique_count`` sort
the backing store in place, so the stored order after one of those
calls is ascending.  Call ``copy()`` first if the original order
matters.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from src.stats.errors import (
    EmptySampleError,
    NaNValueError,
    QuantileRangeError,
    SampleIndexError,
    StatsError,
)


class MinMax(NamedTuple):
    min: float
    max: float
    error: StatsError | None


# ── Sample collection ───────────────────────────────────────────────────────


class ValueSlice:
    """Mutable, sortable sequence of float samples.

    Usage::

        values = ValueSlice([123, 234, 345])
        values.append(456)
        values.median()       # 289.5, and values is now sorted
        values.quantile(0.9)
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._values: list[float] = [float(v) for v in values]

    # container protocol

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self._check_index(index)
        self._values[index] = float(value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueSlice):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"ValueSlice({self._values!r})"

    def append(self, value: float) -> None:
        self._values.append(float(value))

    def extend(self, values: Iterable[float]) -> None:
        self._values.extend(float(v) for v in values)

    def copy(self) -> ValueSlice:
        """Independent snapshot; sorting the copy leaves this one alone."""
        clone = ValueSlice()
        clone._values = list(self._values)
        return clone

    def to_list(self) -> list[float]:
        return list(self._values)

    # ordering contract

    def len(self) -> int:
        return len(self._values)

    def get(self, index: int) -> float:
        """Return the sample at *index*; negative indices are rejected."""
        self._check_index(index)
        return self._values[index]

    def less(self, i: int, j: int) -> bool:
        return self._values[i] < self._values[j]

    def swap(self, i: int, j: int) -> None:
        self._values[i], self._values[j] = self._values[j], self._values[i]

    def sort(self) -> None:
        """Sort the backing store ascending, in place."""
        self._values.sort()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise SampleIndexError(index, len(self._values))

    # statistics

    def unique_count(self) -> int:
        """Number of distinct values.  Sorts in place."""
        self.sort()
        count = 0
        previous = math.nan
        for i, value in enumerate(self._values):
            if i == 0 or value != previous:
                count += 1
            previous = value
        return count

    def minmax(self) -> MinMax:
        """Smallest and largest non-NaN sample in one pass.

        The error slot carries ``NaNValueError`` when NaN samples were
        skipped and ``EmptySampleError`` when there was nothing to scan.
        It is returned, never raised.
        """
        if not self._values:
            return MinMax(0.0, 0.0, EmptySampleError())

        lower: float | None = None
        upper: float | None = None
        nan_count = 0
        for value in self._values:
            if math.isnan(value):
                nan_count += 1
                continue
            if lower is None or value < lower:
                lower = value
            if upper is None or value > upper:
                upper = value

        error = NaNValueError(nan_count) if nan_count else None
        if lower is None or upper is None:
            return MinMax(0.0, 0.0, error)
        return MinMax(lower, upper, error)

    def median(self) -> float:
        """Middle value, or the mean of the two middle values.  Sorts in place."""
        n = len(self._values)
        if n == 0:
            return 0.0
        self.sort()
        mid = n // 2
        if n % 2 == 1:
            return self._values[mid]
        return (self._values[mid - 1] + self._values[mid]) / 2.0

    def mean(self) -> float:
        n = len(self._values)
        return self.sum() / n if n else 0.0

    def quantile(self, quantile: float) -> float:
        """Linearly interpolated quantile for *quantile* in ``[0, 1]``.

        Sorts in place.  Raises ``QuantileRangeError`` for anything
        outside ``[0, 1]``, including NaN.
        """
        if not 0.0 <= quantile <= 1.0:
            raise QuantileRangeError(quantile)
        n = len(self._values)
        if n == 0:
            return 0.0

        self.sort()
        rank = quantile * (n - 1)
        lo = math.floor(rank)
        hi = math.ceil(rank)
        if lo == hi:
            return self._values[lo]
        frac = rank - lo
        return (1.0 - frac) * self._values[lo] + frac * self._values[hi]

    def sum(self) -> float:
        """Left-to-right total over the current stored order."""
        # builtin sum() compensates float rounding since 3.12
        total = 0.0
        for value in self._values:
            total += value
        return total
