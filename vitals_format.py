from __future__ import annotations

from vitals_bounds import TIMING_METRICS, MetricName


def format_metric_value(metric: MetricName, value: float) -> str:
    """
    Display string for one metric: 2500 -> "2.50s", 640 -> "640ms", cls 0.05 -> "0.050".
    No validation happens here.
    """
    if metric in TIMING_METRICS:
        ms = int(round(value))
        # 999.6 rounds to a full second and is shown as one
        if value >= 1000 or ms >= 1000:
            return f"{value / 1000:.2f}s"
        return f"{ms}ms"
    if metric == "cls":
        return f"{value:.3f}"
    raise ValueError(f"Unknown metric: {metric}")
