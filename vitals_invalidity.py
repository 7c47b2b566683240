"""
vitals_invalidity.py - Detects measurements that are most likely a failed run.

Works on raw or validated bags (anything with lcp/fcp/ttfb attributes).
Run it on the raw bag when possible: validation caps sentinel values away.
"""

from __future__ import annotations

from typing import Any, Callable, Tuple

from vitals_bounds import (
    FAST_FCP_BELOW,
    FAST_TTFB_BELOW,
    IMPLAUSIBLE_LCP_ABOVE,
    SENTINEL_LCP_VALUES,
)


def _nothing_measured(bag: Any) -> bool:
    return bag.lcp is None and bag.fcp is None and bag.ttfb is None


def _sentinel_lcp(bag: Any) -> bool:
    # Tool defaults for "gave up": 0, 30s, 60s, 90s
    return bag.lcp is not None and bag.lcp in SENTINEL_LCP_VALUES


def _slow_lcp_fast_ttfb(bag: Any) -> bool:
    return (
        bag.lcp is not None and bag.lcp > IMPLAUSIBLE_LCP_ABOVE
        and bag.ttfb is not None and bag.ttfb < FAST_TTFB_BELOW
    )


def _slow_lcp_fast_fcp(bag: Any) -> bool:
    return (
        bag.lcp is not None and bag.lcp > IMPLAUSIBLE_LCP_ABOVE
        and bag.fcp is not None and bag.fcp < FAST_FCP_BELOW
    )


RULES: Tuple[Callable[[Any], bool], ...] = (
    _nothing_measured,
    _sentinel_lcp,
    _slow_lcp_fast_ttfb,
    _slow_lcp_fast_fcp,
)


def is_likely_invalid(bag: Any) -> bool:
    return any(rule(bag) for rule in RULES)
