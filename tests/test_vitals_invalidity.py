import pytest

from vitals_bags import RawMetricBag
from vitals_invalidity import is_likely_invalid
from vitals_validator import validate


def test_nothing_measured_is_invalid():
    assert is_likely_invalid(RawMetricBag()) is True


def test_cls_alone_is_still_nothing_measured():
    assert is_likely_invalid(RawMetricBag(cls=0.02)) is True


@pytest.mark.parametrize("lcp", [0, 30000, 60000, 90000])
def test_sentinel_lcp_is_invalid(lcp):
    assert is_likely_invalid(RawMetricBag(lcp=lcp)) is True
    assert is_likely_invalid(RawMetricBag(lcp=lcp, fcp=12000, ttfb=4000, cls=0.01)) is True


def test_sentinel_as_float_matches():
    assert is_likely_invalid(RawMetricBag(lcp=30000.0, fcp=8000)) is True


def test_slow_lcp_with_fast_ttfb():
    assert is_likely_invalid(RawMetricBag(lcp=26000, ttfb=500)) is True
    assert is_likely_invalid(RawMetricBag(lcp=26000, ttfb=1000)) is False


def test_slow_lcp_with_fast_fcp():
    assert is_likely_invalid(RawMetricBag(lcp=26000, fcp=2999)) is True
    assert is_likely_invalid(RawMetricBag(lcp=26000, fcp=3000)) is False


def test_lcp_at_threshold_is_not_slow():
    assert is_likely_invalid(RawMetricBag(lcp=25000, fcp=1000, ttfb=100)) is False


def test_zero_ttfb_counts_as_fast():
    assert is_likely_invalid(RawMetricBag(lcp=40000, ttfb=0)) is True


def test_plausible_measurement_is_valid():
    assert is_likely_invalid(RawMetricBag(lcp=2000, fcp=1500, cls=0.05, ttfb=500)) is False
    assert is_likely_invalid(RawMetricBag(ttfb=300)) is False


def test_timeout_artifact_flagged_on_raw_input():
    raw = RawMetricBag(lcp=32000, fcp=2200, ttfb=400)
    assert is_likely_invalid(raw) is True
    # Validation already repaired the value, so the validated bag looks plausible
    assert is_likely_invalid(validate(raw)) is False


def test_accepts_validated_bags():
    assert is_likely_invalid(validate(RawMetricBag())) is True
