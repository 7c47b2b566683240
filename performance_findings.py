# performance_findings.py
"""
Turns a page's raw Web Vitals into a validated, scored assessment and
agency-style Findings.

Findings never claim more certainty than the measurement supports:
a FAIL needs a trustworthy, uncorrected value behind it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vitals_bags import RawMetricBag, ValidatedMetricBag
from vitals_bounds import METRIC_NAMES, RATING_THRESHOLDS
from vitals_format import format_metric_value
from vitals_invalidity import is_likely_invalid
from vitals_rating import classify
from vitals_score import score
from vitals_validator import validate

logger = logging.getLogger(__name__)

CATEGORY = "performance"

METRIC_TITLES = {
    "lcp": "Largest Contentful Paint (LCP)",
    "fcp": "First Contentful Paint (FCP)",
    "cls": "Cumulative Layout Shift (CLS)",
    "ttfb": "Time to First Byte (TTFB)",
}

METRIC_IMPACT = {
    "lcp": "The main content takes too long to appear. This affects user experience and search rankings.",
    "fcp": "Visitors wait too long before seeing any content.",
    "cls": "Layout shifts move content while the page loads and hurt user experience.",
    "ttfb": "The server is slow to start responding.",
}

METRIC_RECOMMENDATIONS = {
    "lcp": "Optimize the largest images, reduce server response time, and eliminate render-blocking resources.",
    "fcp": "Optimize server response time and eliminate render-blocking CSS and JavaScript.",
    "cls": "Add size attributes to images and videos, and avoid inserting content above existing content.",
    "ttfb": "Optimize server response time, use a CDN, and host closer to your visitors.",
}


@dataclass(frozen=True)
class MetricAssessment:
    value: float
    display: str
    rating: str
    label: str
    corrected: bool


@dataclass(frozen=True)
class PerformanceAssessment:
    raw: RawMetricBag
    validated: ValidatedMetricBag
    likely_invalid: bool
    score: int
    metrics: Dict[str, MetricAssessment] = field(default_factory=dict)
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "raw": self.raw.to_dict(),
            "validated": self.validated.to_dict(),
            "likely_invalid": self.likely_invalid,
            "score": self.score,
            "metrics": {
                name: {
                    "value": m.value,
                    "display": m.display,
                    "rating": m.rating,
                    "label": m.label,
                    "corrected": m.corrected,
                }
                for name, m in self.metrics.items()
            },
        }


def assess_performance(raw: RawMetricBag, url: Optional[str] = None) -> PerformanceAssessment:
    validated = validate(raw)
    if validated.warnings:
        logger.warning(f"[Performance] Validation warnings for {url or '<unknown>'}: {list(validated.warnings)}")

    metrics: Dict[str, MetricAssessment] = {}
    for name in METRIC_NAMES:
        value = getattr(validated, name)
        if value is None:
            continue
        rating = classify(name, value)
        metrics[name] = MetricAssessment(
            value=value,
            display=format_metric_value(name, value),
            rating=rating.rating,
            label=rating.label,
            corrected=getattr(raw, name) != value,
        )

    return PerformanceAssessment(
        raw=raw,
        validated=validated,
        # Sentinels are only visible before validation caps them
        likely_invalid=is_likely_invalid(raw),
        score=score(validated),
        metrics=metrics,
        url=url,
    )


def _metric_finding(name: str, m: MetricAssessment, assessment: PerformanceAssessment) -> Dict[str, Any]:
    thresholds = RATING_THRESHOLDS[name]
    good = format_metric_value(name, thresholds.good)
    poor = format_metric_value(name, thresholds.needs_improvement)
    title = METRIC_TITLES[name]

    if m.rating == "poor":
        suffix = "POOR"
        severity = "fail"
        title_en = f"Slow {title}" if name != "cls" else f"High {title}"
        target = f"target: <={good}, poor: >{poor}"
    else:
        suffix = "NEEDS_IMPROVEMENT"
        severity = "warning"
        title_en = f"{title} needs improvement"
        target = f"target: <={good}"

    trusted = not (assessment.likely_invalid or m.corrected)
    return {
        "id": f"PERF_{name.upper()}_{suffix}",
        "category": CATEGORY,
        "severity": severity,
        "title_en": title_en,
        "description_en": f"{name.upper()} is {m.display} ({target}). {METRIC_IMPACT[name]}",
        "recommendation_en": METRIC_RECOMMENDATIONS[name],
        "confidence_level": "high" if trusted else "low",
        "evidence": {
            "metric": name,
            "value": m.value,
            "display": m.display,
            "rating": m.rating,
            "good_threshold": thresholds.good,
            "poor_threshold": thresholds.needs_improvement,
            "corrected": m.corrected,
            "url": assessment.url,
        },
    }


def enforce_confidence_policy(finding: Dict[str, Any]) -> Dict[str, Any]:
    """
    FAIL is allowed only with high confidence; anything else is clamped to WARNING.
    Returns a new dict.
    """
    finding = dict(finding)
    finding["policy_notes"] = list(finding.get("policy_notes") or [])
    finding["policy_actions"] = list(finding.get("policy_actions") or [])

    confidence = finding.get("confidence_level") or "medium"
    finding["confidence_level"] = confidence

    if finding.get("severity") == "fail" and confidence != "high":
        finding["severity"] = "warning"
        finding["policy_notes"].append(
            "Severity downgraded from 'fail' to 'warning' by policy: "
            "FAIL requires a high-confidence measurement."
        )
        finding["policy_actions"].append({
            "type": "severity_clamp",
            "from": "fail",
            "to": "warning",
            "reason": "measurement_confidence_gate",
            "confidence_level": confidence,
        })
    return finding


def changed_metrics(assessment: PerformanceAssessment) -> List[str]:
    """Metrics whose value was clamped, repaired or discarded by validation."""
    return [
        name for name in METRIC_NAMES
        if getattr(assessment.raw, name) != getattr(assessment.validated, name)
    ]


def build_performance_findings(assessment: PerformanceAssessment) -> List[Dict[str, Any]]:
    findings: List[Dict[str, Any]] = []

    if assessment.likely_invalid:
        findings.append({
            "id": "PERF_MEASUREMENT_LIKELY_INVALID",
            "category": CATEGORY,
            "severity": "warning",
            "title_en": "Performance measurement looks unreliable",
            "description_en": (
                "The measured values match a known failure pattern (missing metrics, "
                "a timeout placeholder, or an implausible combination). Treat the "
                "performance results below with caution."
            ),
            "recommendation_en": "Re-run the performance measurement before acting on these numbers.",
            "confidence_level": "high",
            "evidence": {"raw": assessment.raw.to_dict(), "url": assessment.url},
        })

    for name in METRIC_NAMES:
        m = assessment.metrics.get(name)
        if m is None or m.rating == "good":
            continue
        findings.append(_metric_finding(name, m, assessment))

    warnings = list(assessment.validated.warnings)
    changed = changed_metrics(assessment)
    if changed:
        findings.append({
            "id": "PERF_METRICS_CORRECTED",
            "category": CATEGORY,
            "severity": "info",
            "title_en": "Some performance values were corrected",
            "description_en": (
                f"{', '.join(n.upper() for n in changed)} differed from the raw measurement "
                f"after validation ({len(warnings)} validation note(s))."
            ),
            "recommendation_en": "No action needed. Corrections keep the score consistent.",
            "confidence_level": "high",
            "evidence": {"changed_metrics": changed, "warnings": warnings, "url": assessment.url},
        })
    elif warnings:
        # Advisory notes only: nothing was changed
        findings.append({
            "id": "PERF_METRICS_INCOMPLETE",
            "category": CATEGORY,
            "severity": "info",
            "title_en": "Performance data is incomplete or inconsistent",
            "description_en": f"{len(warnings)} validation note(s) were recorded. No values were changed.",
            "recommendation_en": "Re-run the measurement if paint metrics are needed for this page.",
            "confidence_level": "high",
            "evidence": {"warnings": warnings, "url": assessment.url},
        })

    return [enforce_confidence_policy(f) for f in findings]
