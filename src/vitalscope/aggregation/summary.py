"""Overall performance summary of an origin.

Combines per-metric tiers with an all/any policy:
- Good: every metric is Good
- Poor: any metric is Poor
- Needs Improvement: otherwise
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import quote

from vitalscope.metrics.histogram import classify, distribution
from vitalscope.models.domain import METRIC_ORDER, MetricName, OverallLabel, QualityTier
from vitalscope.models.types import MetricClassification, OriginReport, RemoteRecord

METRIC_LABELS: dict[MetricName, str] = {
    "lcp": "Largest Contentful Paint (LCP)",
    "fid": "First Input Delay (FID)",
    "cls": "Cumulative Layout Shift (CLS)",
}

# Characters encodeURIComponent leaves alone besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!*'()"


def summarize(tiers: Sequence[QualityTier]) -> OverallLabel:
    """Combine the three metric tiers (LCP, FID, CLS order) into one label.

    Total over every combination of three tiers.

    Raises:
        ValueError: If tiers does not hold exactly one tier per metric.
    """
    if len(tiers) != len(METRIC_ORDER):
        raise ValueError(f"Expected {len(METRIC_ORDER)} metric tiers, got {len(tiers)}")
    if all(tier == QualityTier.GOOD for tier in tiers):
        return QualityTier.GOOD
    if any(tier == QualityTier.POOR for tier in tiers):
        return QualityTier.POOR
    return QualityTier.NEEDS_IMPROVEMENT


def build_psi_link(origin: str, base_url: str) -> str:
    """Link to the PageSpeed Insights report of an origin."""
    return f"{base_url}?url={quote(origin, safe=_URI_COMPONENT_SAFE)}"


def summarize_record(record: RemoteRecord, psi_url: str) -> OriginReport:
    """Classify every metric of a remote record and summarize the origin.

    Classification errors propagate; one unclassifiable metric fails the
    whole report.

    Args:
        record: Remote distribution record.
        psi_url: PageSpeed Insights base URL.

    Returns:
        OriginReport with the overall label and per-metric tiers.

    Raises:
        InvalidHistogramError: If a metric does not have three buckets.
        UnclassifiedError: If a metric's densities never reach 0.75.
    """
    metrics = [
        MetricClassification(
            metric=name,
            label=METRIC_LABELS[name],
            tier=classify(histogram),
            distribution=distribution(histogram),
        )
        for name, histogram in record.record.metrics.in_order()
    ]

    origin = record.record.key.origin or record.record.key.url or ""

    return OriginReport(
        origin=origin,
        overall=summarize([m.tier for m in metrics]),
        metrics=metrics,
        psi_url=build_psi_link(origin, psi_url),
    )
