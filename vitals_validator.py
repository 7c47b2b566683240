"""
vitals_validator.py - Sanitizes raw Web Vitals before they are scored.

PageSpeed-style tools occasionally report timeouts as real numbers (an LCP of
30s next to an FCP of 2.5s) or produce impossible orderings (LCP before FCP).
validate() clamps each metric against plausibility bounds and repairs the
ordering TTFB <= FCP <= LCP, recording every correction as a warning.

Stages run in page-load order. Each stage sees the values already corrected
by the stages before it.

Usage:
    validated = validate(RawMetricBag(lcp=32000, fcp=2200, ttfb=400))
    validated.lcp       # 10000
    validated.warnings  # ("Suspicious LCP: 32000ms with FCP 2200ms - ...",)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from vitals_bags import RawMetricBag, ValidatedMetricBag
from vitals_bounds import (
    CLS_FLOOR,
    LCP_TIMEOUT_ABOVE,
    LCP_TIMEOUT_CAP,
    LCP_TIMEOUT_FCP_BELOW,
    PLAUSIBILITY,
)


@dataclass(frozen=True)
class _Pass:
    """Accumulator threaded through the stages."""

    lcp: Optional[float]
    fcp: Optional[float]
    cls: Optional[float]
    ttfb: Optional[float]
    warnings: Tuple[str, ...] = ()

    def warn(self, message: str, **changes) -> "_Pass":
        return replace(self, warnings=self.warnings + (message,), **changes)


def _num(x: float) -> str:
    # 12000.0 -> "12000", 0.35 -> "0.35"
    if float(x).is_integer():
        return str(int(x))
    return str(x)


def _check_ttfb(p: _Pass) -> _Pass:
    if p.ttfb is None:
        return p
    bounds = PLAUSIBILITY["ttfb"]
    if p.ttfb < 0:
        return p.warn(f"Invalid TTFB: {_num(p.ttfb)}ms (negative) - setting to undefined", ttfb=None)
    if p.ttfb > bounds.unrealistic_above:
        return p.warn(
            f"Unrealistic TTFB: {_num(p.ttfb)}ms (>{_num(bounds.unrealistic_above / 1000)}s) "
            f"- capping to {_num(bounds.cap_to / 1000)}s",
            ttfb=bounds.cap_to,
        )
    return p


def _check_fcp(p: _Pass) -> _Pass:
    if p.fcp is None:
        return p
    bounds = PLAUSIBILITY["fcp"]
    if p.fcp < 0:
        return p.warn(f"Invalid FCP: {_num(p.fcp)}ms (negative) - setting to undefined", fcp=None)
    if p.fcp > bounds.unrealistic_above:
        p = p.warn(
            f"Unrealistic FCP: {_num(p.fcp)}ms (>{_num(bounds.unrealistic_above / 1000)}s) "
            f"- capping to {_num(bounds.cap_to / 1000)}s",
            fcp=bounds.cap_to,
        )

    # First paint cannot precede the first byte
    if p.ttfb is not None and p.fcp < p.ttfb:
        p = p.warn(
            f"Invalid FCP < TTFB: {_num(p.fcp)}ms < {_num(p.ttfb)}ms - adjusting FCP to TTFB",
            fcp=p.ttfb,
        )
    return p


def _check_lcp(p: _Pass) -> _Pass:
    if p.lcp is None:
        return p
    if p.lcp < 0:
        return p.warn(f"Invalid LCP: {_num(p.lcp)}ms (negative) - setting to undefined", lcp=None)

    if p.fcp is not None and p.lcp < p.fcp:
        p = p.warn(
            f"Invalid LCP < FCP: {_num(p.lcp)}ms < {_num(p.fcp)}ms - adjusting LCP to FCP",
            lcp=p.fcp,
        )
    elif p.lcp > LCP_TIMEOUT_ABOVE and p.fcp is not None and p.fcp < LCP_TIMEOUT_FCP_BELOW:
        p = p.warn(
            f"Suspicious LCP: {_num(p.lcp)}ms with FCP {_num(p.fcp)}ms "
            f"- likely timeout/error, capping to {_num(LCP_TIMEOUT_CAP / 1000)}s",
            lcp=LCP_TIMEOUT_CAP,
        )

    bounds = PLAUSIBILITY["lcp"]
    if p.lcp > bounds.unrealistic_above:
        p = p.warn(
            f"Unrealistic LCP: {_num(p.lcp)}ms (>{_num(bounds.unrealistic_above / 1000)}s) "
            f"- capping to {_num(bounds.cap_to / 1000)}s",
            lcp=bounds.cap_to,
        )
    return p


def _check_cls(p: _Pass) -> _Pass:
    if p.cls is None:
        return p
    bounds = PLAUSIBILITY["cls"]
    if p.cls < 0:
        return p.warn(f"Invalid CLS: {_num(p.cls)} (negative) - setting to {CLS_FLOOR}", cls=CLS_FLOOR)
    if p.cls > bounds.unrealistic_above:
        return p.warn(
            f"Unrealistic CLS: {_num(p.cls)} (>{_num(bounds.unrealistic_above)}) - capping to {_num(bounds.cap_to)}",
            cls=bounds.cap_to,
        )
    return p


def _check_paint_metrics(p: _Pass) -> _Pass:
    if p.lcp is None and p.fcp is None:
        return p.warn("No paint metrics (LCP/FCP) available - performance scoring will be limited")
    return p


def _check_order(p: _Pass) -> _Pass:
    if p.ttfb is None or p.fcp is None or p.lcp is None:
        return p
    if not (p.ttfb <= p.fcp <= p.lcp):
        return p.warn("Metric order inconsistency detected - expected TTFB <= FCP <= LCP")
    return p


STAGES: Tuple[Callable[[_Pass], _Pass], ...] = (
    _check_ttfb,
    _check_fcp,
    _check_lcp,
    _check_cls,
    _check_paint_metrics,
    _check_order,
)


def validate(raw: RawMetricBag) -> ValidatedMetricBag:
    """
    Never raises. Returns a new bag; `raw` is left untouched.
    """
    p = _Pass(lcp=raw.lcp, fcp=raw.fcp, cls=raw.cls, ttfb=raw.ttfb)
    for stage in STAGES:
        p = stage(p)

    return ValidatedMetricBag(
        lcp=p.lcp,
        fcp=p.fcp,
        cls=p.cls,
        ttfb=p.ttfb,
        validated=True,
        warnings=p.warnings,
    )
