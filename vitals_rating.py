from __future__ import annotations

from typing import NamedTuple

from vitals_bounds import RATING_LABELS, RATING_THRESHOLDS, MetricName


class MetricRating(NamedTuple):
    rating: str  # good / needs-improvement / poor
    label: str


def classify(metric: MetricName, value: float) -> MetricRating:
    """
    Core Web Vitals bucket for one metric value. Boundaries are inclusive:
    an LCP of exactly 2500ms is still "good".
    """
    thresholds = RATING_THRESHOLDS.get(metric)
    if thresholds is None:
        raise ValueError(f"Unknown metric: {metric}")

    if value <= thresholds.good:
        rating = "good"
    elif value <= thresholds.needs_improvement:
        rating = "needs-improvement"
    else:
        rating = "poor"
    return MetricRating(rating=rating, label=RATING_LABELS[rating])
