"""
vitals_bounds.py - Calibration constants for Web Vitals validation and scoring.

Every threshold used by the validator, the invalidity detector, the rating
classifier and the scorer lives here. Recalibrate in this file only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Literal, Tuple

MetricName = Literal["lcp", "fcp", "cls", "ttfb"]

METRIC_NAMES: Tuple[str, ...] = ("lcp", "fcp", "cls", "ttfb")
TIMING_METRICS: FrozenSet[str] = frozenset({"lcp", "fcp", "ttfb"})


@dataclass(frozen=True)
class RatingThresholds:
    good: float
    needs_improvement: float


@dataclass(frozen=True)
class PlausibilityBounds:
    """Values above `unrealistic_above` are replaced with `cap_to`."""

    unrealistic_above: float
    cap_to: float


# ----------------------------------------------------------------------
# Plausibility (validator)
# ----------------------------------------------------------------------
PLAUSIBILITY: Dict[str, PlausibilityBounds] = {
    "ttfb": PlausibilityBounds(unrealistic_above=10000, cap_to=5000),
    "fcp": PlausibilityBounds(unrealistic_above=15000, cap_to=10000),
    "lcp": PlausibilityBounds(unrealistic_above=60000, cap_to=15000),
    "cls": PlausibilityBounds(unrealistic_above=5, cap_to=2),
}

# LCP above this with a fast FCP is a tool timeout, not a real paint
LCP_TIMEOUT_ABOVE = 30000
LCP_TIMEOUT_FCP_BELOW = 5000
LCP_TIMEOUT_CAP = 10000

CLS_FLOOR = 0

# ----------------------------------------------------------------------
# Failed-measurement detection
# ----------------------------------------------------------------------
SENTINEL_LCP_VALUES: FrozenSet[float] = frozenset({0, 30000, 60000, 90000})
IMPLAUSIBLE_LCP_ABOVE = 25000
FAST_TTFB_BELOW = 1000
FAST_FCP_BELOW = 3000

# ----------------------------------------------------------------------
# Ratings (Core Web Vitals buckets)
# ----------------------------------------------------------------------
RATING_THRESHOLDS: Dict[str, RatingThresholds] = {
    "lcp": RatingThresholds(good=2500, needs_improvement=4000),
    "fcp": RatingThresholds(good=1800, needs_improvement=3000),
    "cls": RatingThresholds(good=0.1, needs_improvement=0.25),
    "ttfb": RatingThresholds(good=800, needs_improvement=1800),
}

RATING_LABELS: Dict[str, str] = {
    "good": "Good",
    "needs-improvement": "Needs Improvement",
    "poor": "Poor",
}

# ----------------------------------------------------------------------
# Composite score
# ----------------------------------------------------------------------
MAX_SCORE = 100
MIN_SCORE = 0

# Full penalty when a metric is rated poor; weights sum to MAX_SCORE
SCORE_WEIGHTS: Dict[str, int] = {
    "lcp": 40,
    "fcp": 30,
    "cls": 20,
    "ttfb": 10,
}

# Needs-improvement costs a flat 40% of the weight (step, not interpolated)
PARTIAL_PENALTY_NUMERATOR = 2
PARTIAL_PENALTY_DENOMINATOR = 5


def partial_penalty(metric: str) -> int:
    return SCORE_WEIGHTS[metric] * PARTIAL_PENALTY_NUMERATOR // PARTIAL_PENALTY_DENOMINATOR
