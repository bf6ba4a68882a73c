"""Shared constants for sample summaries and reporting."""

# ── Flush summary ────────────────────────────────────────────────────────────
# Quantiles reported as ``upper_<pct>`` for every timer (statsd convention).
DEFAULT_QUANTILES: tuple[float, ...] = (0.5, 0.9, 0.99)

# Separator between the metric name and its field in flattened output.
FIELD_SEPARATOR = "."

# ── Sample sources ───────────────────────────────────────────────────────────
STDIN_SOURCE = "-"
COMMENT_PREFIX = "#"
# statsd timer lines may carry a type suffix: ``12.5|ms``
VALUE_SUFFIX_SEPARATOR = "|"

# Redis list holding raw samples for a timer: ``samples:<name>``
REDIS_SAMPLES_PREFIX = "samples:"

# ── Charts ───────────────────────────────────────────────────────────────────
HISTOGRAM_BINS = 30
HISTOGRAM_COLOR = "#2980b9"
QUANTILE_COLOR = "#e74c3c"
FILL_ALPHA = 0.75
