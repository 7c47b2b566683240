import itertools

import pytest

from vitals_bags import RawMetricBag, ValidatedMetricBag
from vitals_bounds import RATING_THRESHOLDS
from vitals_score import metric_penalty, score
from vitals_validator import validate


def test_empty_bag_scores_full():
    assert score(ValidatedMetricBag()) == 100
    assert score(validate(RawMetricBag())) == 100


def test_good_metrics_score_full():
    assert score(validate(RawMetricBag(lcp=2000, fcp=1500, cls=0.05, ttfb=500))) == 100


@pytest.mark.parametrize(
    "metric,partial,full",
    [("lcp", 16, 40), ("fcp", 12, 30), ("cls", 8, 20), ("ttfb", 4, 10)],
)
def test_penalty_tiers(metric, partial, full):
    t = RATING_THRESHOLDS[metric]
    assert metric_penalty(metric, t.good) == 0
    assert metric_penalty(metric, t.needs_improvement) == partial
    assert metric_penalty(metric, t.needs_improvement * 2) == full


def test_partial_penalty_is_a_step():
    # Just past "good" and right at the upper edge cost the same
    assert metric_penalty("lcp", 2501) == metric_penalty("lcp", 4000) == 16


def test_all_poor_scores_zero():
    bag = ValidatedMetricBag(lcp=9000, fcp=9000, cls=1.0, ttfb=4000)
    assert score(bag) == 0


def test_mixed_scores():
    # lcp NI (-16), fcp poor (-30), cls good, ttfb NI (-4)
    bag = ValidatedMetricBag(lcp=3000, fcp=3500, cls=0.01, ttfb=1000)
    assert score(bag) == 50


def test_missing_metrics_cost_nothing():
    assert score(ValidatedMetricBag(lcp=5000)) == 60
    assert score(ValidatedMetricBag(cls=0.2)) == 92


def test_score_is_int():
    assert isinstance(score(ValidatedMetricBag(cls=0.2)), int)


def test_score_bounded_over_grid():
    values = {
        "lcp": [None, 1000, 3000, 20000],
        "fcp": [None, 1000, 2000, 8000],
        "cls": [None, 0.0, 0.2, 1.5],
        "ttfb": [None, 100, 1000, 3000],
    }
    for combo in itertools.product(*values.values()):
        s = score(validate(RawMetricBag(**dict(zip(values, combo)))))
        assert 0 <= s <= 100
