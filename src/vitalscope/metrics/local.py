"""Report of locally measured metrics.

Pass/fail flags come from the measurement collector and are passed
through unchanged. LCP carries a caveat when the tab was loaded in the
background, since background loading inflates the measurement.
"""

from __future__ import annotations

from vitalscope.models.domain import MetricName
from vitalscope.models.types import (
    LocalMetricReport,
    LocalMetricSample,
    LocalMetricsBundle,
    LocalReport,
)

LOCAL_METRIC_LABELS: dict[MetricName, str] = {
    "lcp": "Largest Contentful Paint",
    "fid": "First Input Delay",
    "cls": "Cumulative Layout Shift",
}

MIGHT_CHANGE = "(might change)"
WAITING_FOR_INPUT = "(waiting for input)"
BACKGROUND_CAVEAT = "Value inflated as tab was loaded in background"


def format_value(metric: MetricName, sample: LocalMetricSample) -> str:
    """Format a metric value for display.

    LCP in seconds, FID in milliseconds (blank until final), CLS unitless.
    """
    if metric == "lcp":
        return f"{sample.value / 1000:.2f} s"
    if metric == "fid":
        return f"{sample.value:.2f} ms" if sample.final else ""
    return f"{sample.value:.3f}"


def state_label(metric: MetricName, sample: LocalMetricSample) -> str:
    """Label shown next to a metric that may still change."""
    if sample.final:
        return ""
    return WAITING_FOR_INPUT if metric == "fid" else MIGHT_CHANGE


def _metric_report(
    metric: MetricName, sample: LocalMetricSample, background_load_hint: bool
) -> LocalMetricReport:
    caveat = background_load_hint and metric == "lcp"
    return LocalMetricReport(
        metric=metric,
        label=LOCAL_METRIC_LABELS[metric],
        value=sample.value,
        passed=sample.passed,
        final=sample.final,
        caveat=caveat,
        caveat_text=BACKGROUND_CAVEAT if caveat else None,
        display_value=format_value(metric, sample),
        state_label=state_label(metric, sample),
    )


def build_local_report(samples: LocalMetricsBundle, background_load_hint: bool) -> LocalReport:
    """Build the local metrics report.

    Args:
        samples: Cached LCP/FID/CLS samples for the page.
        background_load_hint: Whether the tab was loaded in the background.

    Returns:
        Immutable LocalReport; no values are combined across metrics.
    """
    location = samples.location
    return LocalReport(
        url=location.url if location else None,
        short_url=location.short_url if location else None,
        timestamp=samples.timestamp,
        lcp=_metric_report("lcp", samples.lcp, background_load_hint),
        fid=_metric_report("fid", samples.fid, background_load_hint),
        cls=_metric_report("cls", samples.cls, background_load_hint),
    )
