"""
vitals_score.py - Composite 0-100 performance score from validated metrics.

Weights: LCP 40, FCP 30, CLS 20, TTFB 10. A metric in the needs-improvement
band costs 40% of its weight, a poor metric costs all of it. Missing metrics
cost nothing, so partial data degrades gracefully instead of scoring low.
"""

from __future__ import annotations

from typing import Any

from vitals_bounds import (
    MAX_SCORE,
    METRIC_NAMES,
    MIN_SCORE,
    RATING_THRESHOLDS,
    SCORE_WEIGHTS,
    MetricName,
    partial_penalty,
)


def metric_penalty(metric: MetricName, value: float) -> int:
    thresholds = RATING_THRESHOLDS[metric]
    if value <= thresholds.good:
        return 0
    if value <= thresholds.needs_improvement:
        return partial_penalty(metric)
    return SCORE_WEIGHTS[metric]


def score(validated: Any) -> int:
    total = MAX_SCORE
    for metric in METRIC_NAMES:
        value = getattr(validated, metric)
        if value is None:
            continue
        total -= metric_penalty(metric, value)

    return max(MIN_SCORE, min(MAX_SCORE, round(total)))
