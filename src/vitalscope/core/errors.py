"""Error taxonomy for vitalscope.

Classification and aggregation raise these and never catch them.
The popup session recovers from them once, at the boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vitalscope.models.domain import RemoteError


class VitalsError(Exception):
    """Base class for vitalscope errors."""


class InvalidHistogramError(VitalsError):
    """Histogram does not have exactly three buckets."""

    def __init__(self, bucket_count: int):
        self.bucket_count = bucket_count
        super().__init__(f"Expected 3 histogram buckets, got {bucket_count}")


class UnclassifiedError(VitalsError):
    """Cumulative density never reached the 75th percentile."""

    def __init__(self, cumulative_density: float):
        self.cumulative_density = cumulative_density
        super().__init__(
            f"Histogram densities sum to {cumulative_density:.3f}, "
            "never reaching the 75th percentile"
        )


class RemoteQueryError(VitalsError):
    """Remote query failed in transport or returned an error body."""

    def __init__(self, message: str, remote_error: RemoteError | None = None):
        self.remote_error = remote_error
        super().__init__(message)
