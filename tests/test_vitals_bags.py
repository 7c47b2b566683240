import pytest

from vitals_bags import RawMetricBag, ValidatedMetricBag


def test_from_dict_picks_known_fields():
    bag = RawMetricBag.from_dict({"lcp": 2400, "fcp": None, "inp": 120, "opportunities": []})
    assert bag == RawMetricBag(lcp=2400)


def test_from_dict_accepts_none():
    assert RawMetricBag.from_dict(None) == RawMetricBag()


def test_from_pagespeed_selects_strategy():
    payload = {
        "mobile": {"lcp": 3100, "fcp": 1900, "cls": 0.12, "ttfb": 700, "inp": 200},
        "desktop": {"lcp": 1500, "fcp": 900, "cls": 0.01, "ttfb": 300, "inp": 80},
    }
    assert RawMetricBag.from_pagespeed(payload).lcp == 3100
    assert RawMetricBag.from_pagespeed(payload, strategy="desktop") == RawMetricBag(
        lcp=1500, fcp=900, cls=0.01, ttfb=300
    )


def test_from_pagespeed_missing_strategy_is_empty():
    assert RawMetricBag.from_pagespeed({"desktop": {"lcp": 1}}, strategy="mobile") == RawMetricBag()


def test_from_pagespeed_unknown_strategy():
    with pytest.raises(ValueError):
        RawMetricBag.from_pagespeed({}, strategy="tablet")


def test_validated_bag_round_trip_to_raw():
    v = ValidatedMetricBag(lcp=2500, fcp=1200, cls=0.0, ttfb=None, warnings=("x",))
    assert v.as_raw() == RawMetricBag(lcp=2500, fcp=1200, cls=0.0)
    d = v.to_dict()
    assert d["warnings"] == ["x"]
    assert d["validated"] is True
    assert d["ttfb"] is None


@pytest.mark.parametrize("payload", [{"lcp": "2500"}, {"cls": True}, {"ttfb": [300]}])
def test_from_dict_rejects_non_numeric_values(payload):
    with pytest.raises(ValueError) as exc:
        RawMetricBag.from_dict(payload)
    assert "must be a number" in str(exc.value)


def test_from_dict_rejects_non_mapping():
    with pytest.raises(ValueError):
        RawMetricBag.from_dict([1, 2])


def test_from_pagespeed_rejects_non_object_strategy():
    with pytest.raises(ValueError):
        RawMetricBag.from_pagespeed({"mobile": [1, 2]})
    with pytest.raises(ValueError):
        RawMetricBag.from_pagespeed([1, 2])
