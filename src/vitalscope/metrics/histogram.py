"""75th-percentile classification of metric histograms.

A histogram has three buckets (good / needs improvement / poor). The tier
of a metric is the bucket in which the cumulative density first reaches
the 75th percentile, walking buckets in ascending `start` order.
"""

from __future__ import annotations

import math

from vitalscope.core.errors import InvalidHistogramError, UnclassifiedError
from vitalscope.models.domain import TIER_ORDER, QualityTier
from vitalscope.models.types import BucketShare, HistogramBucket, MetricHistogram

PERCENTILE_THRESHOLD = 0.75
BUCKET_COUNT = 3


def sorted_buckets(histogram: MetricHistogram) -> list[HistogramBucket]:
    """Return the histogram's buckets sorted by start (input is untouched).

    Raises:
        InvalidHistogramError: If there are not exactly three buckets.
    """
    if len(histogram.histogram) != BUCKET_COUNT:
        raise InvalidHistogramError(len(histogram.histogram))
    return sorted(histogram.histogram, key=lambda bucket: bucket.start)


def classify(histogram: MetricHistogram) -> QualityTier:
    """Return the tier containing the histogram's 75th percentile.

    Args:
        histogram: Three-bucket histogram, buckets in any order.

    Returns:
        GOOD, NEEDS_IMPROVEMENT or POOR for bucket 0, 1 or 2.

    Raises:
        InvalidHistogramError: If there are not exactly three buckets.
        UnclassifiedError: If the densities never reach 0.75.
    """
    cdf = 0.0
    for tier, bucket in zip(TIER_ORDER, sorted_buckets(histogram)):
        cdf += bucket.density
        if cdf >= PERCENTILE_THRESHOLD:
            return tier

    raise UnclassifiedError(cdf)


def distribution(histogram: MetricHistogram) -> list[BucketShare]:
    """Per-tier shares of a histogram, in tier order."""
    return [
        BucketShare(
            tier=tier,
            start=bucket.start,
            density=bucket.density,
            percent=round(bucket.density * 100, 2),
            # Half-up like the bar labels, not banker's rounding
            rounded_percent=int(math.floor(bucket.density * 100 + 0.5)),
        )
        for tier, bucket in zip(TIER_ORDER, sorted_buckets(histogram))
    ]
