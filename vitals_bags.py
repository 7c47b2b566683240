"""
vitals_bags.py - Metric bag records passed between the vitals modules.

Usage:
    raw = RawMetricBag.from_dict({"lcp": 2400, "fcp": 1800})
    raw = RawMetricBag.from_pagespeed(psi_payload, strategy="mobile")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from vitals_bounds import METRIC_NAMES

STRATEGIES = ("mobile", "desktop")


@dataclass(frozen=True)
class RawMetricBag:
    """Unvalidated measurements. None means "not measured"."""

    lcp: Optional[float] = None
    fcp: Optional[float] = None
    cls: Optional[float] = None
    ttfb: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RawMetricBag":
        """
        Raises ValueError for payloads that are not objects or carry
        non-numeric metric values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a mapping of metrics, got {type(data).__name__}")

        values: Dict[str, Optional[float]] = {}
        for name in METRIC_NAMES:
            value = data.get(name)
            # bool is an int subclass but never a measurement
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise ValueError(f"Metric '{name}' must be a number, got {value!r}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_pagespeed(cls, payload: Optional[Mapping[str, Any]], strategy: str = "mobile") -> "RawMetricBag":
        """
        Pick one strategy out of a {"mobile": {...}, "desktop": {...}} payload.
        A missing strategy gives an empty bag.
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}")
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected a PageSpeed payload object, got {type(payload).__name__}")
        return cls.from_dict(payload.get(strategy))

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {name: getattr(self, name) for name in METRIC_NAMES}


@dataclass(frozen=True)
class ValidatedMetricBag:
    lcp: Optional[float] = None
    fcp: Optional[float] = None
    cls: Optional[float] = None
    ttfb: Optional[float] = None
    validated: bool = True
    warnings: Tuple[str, ...] = ()

    def as_raw(self) -> RawMetricBag:
        return RawMetricBag(lcp=self.lcp, fcp=self.fcp, cls=self.cls, ttfb=self.ttfb)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {name: getattr(self, name) for name in METRIC_NAMES}
        out["validated"] = self.validated
        out["warnings"] = list(self.warnings)
        return out
