# vitals_cli.py
"""
Validate and score Web Vitals measurements from a JSON file.

Usage:
    vitals-check metrics.json
    vitals-check psi.json --strategy desktop --findings --out report.json
    cat metrics.json | vitals-check -
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import config
from performance_findings import assess_performance, build_performance_findings
from vitals_bags import STRATEGIES, RawMetricBag

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Validate and score Web Vitals (LCP, FCP, CLS, TTFB).")
    p.add_argument("input", help="JSON file with a metric bag, a PageSpeed payload or a target list ('-' for stdin)")
    p.add_argument("--strategy", choices=list(STRATEGIES), default=config.DEFAULT_STRATEGY,
                   help="Which strategy to read from {mobile, desktop} payloads")
    p.add_argument("--findings", action="store_true", help="Include performance findings per result")
    p.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    args = p.parse_args(argv)
    # argparse does not check defaults against choices
    if args.strategy not in STRATEGIES:
        p.error(f"invalid strategy {args.strategy!r} (VITALS_DEFAULT_STRATEGY); choose from {', '.join(STRATEGIES)}")
    return args


def load_input(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _to_bag(data: Any, strategy: str) -> RawMetricBag:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object of metrics, got {type(data).__name__}")
    if any(s in data for s in STRATEGIES):
        return RawMetricBag.from_pagespeed(data, strategy=strategy)
    return RawMetricBag.from_dict(data)


def read_targets(data: Any, strategy: str) -> List[Tuple[Optional[str], RawMetricBag]]:
    """Normalize the three accepted input shapes to (url, bag) pairs."""
    if isinstance(data, list):
        targets = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"Target #{i + 1} is not a JSON object")
            targets.append((item.get("url"), _to_bag(item.get("metrics") or {}, strategy)))
        return targets
    if isinstance(data, dict) and "metrics" in data:
        return [(data.get("url"), _to_bag(data["metrics"] or {}, strategy))]
    return [(None, _to_bag(data, strategy))]


def build_report(targets: List[Tuple[Optional[str], RawMetricBag]], with_findings: bool = False) -> Dict[str, Any]:
    results = []
    for url, bag in targets:
        assessment = assess_performance(bag, url=url)
        result = assessment.to_dict()
        if with_findings:
            result["findings"] = build_performance_findings(assessment)
        results.append(result)
    return {
        "schema_version": "1",
        "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "results": results,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        targets = read_targets(load_input(args.input), args.strategy)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error(f"Could not read metrics from {args.input}: {e}")
        return EXIT_BAD_INPUT

    logger.info(f"Web Vitals check — {len(targets)} measurement(s), strategy={args.strategy}")
    report = build_report(targets, with_findings=args.findings)

    text = json.dumps(report, ensure_ascii=False, indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"Saved JSON: {args.out}")
    else:
        print(text)

    invalid = sum(1 for r in report["results"] if r["likely_invalid"])
    logger.info(f"Done — {len(targets) - invalid} OK, {invalid} likely invalid")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
