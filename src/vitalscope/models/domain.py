"""Domain models for vitalscope.

Pure Python enums and dataclasses shared by the classifier, the
aggregators and the popup session. Independent of pydantic and SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Literal, TypeVar, Union

if TYPE_CHECKING:
    from vitalscope.models.types import RemoteRecord


# ============================================================================
# Quality tiers
# ============================================================================


class QualityTier(str, Enum):
    """Quality tier of a metric, ordered best to worst.

    Declaration order matches sorted histogram bucket position:
    bucket 0 is GOOD, bucket 1 is NEEDS_IMPROVEMENT, bucket 2 is POOR.
    """

    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR = "Poor"


# Overall labels share the tier vocabulary
OverallLabel = QualityTier

TIER_ORDER: tuple[QualityTier, ...] = tuple(QualityTier)

MetricName = Literal["lcp", "fid", "cls"]

# Fixed evaluation order for the three Core Web Vitals
METRIC_ORDER: tuple[MetricName, ...] = ("lcp", "fid", "cls")


# ============================================================================
# Popup session
# ============================================================================


class FetchState(str, Enum):
    """Lifecycle of the remote origin report within one popup session."""

    NOT_FETCHED = "not_fetched"
    FETCHING = "fetching"
    RENDERED = "rendered"


@dataclass(frozen=True)
class TabInfo:
    """The browser tab a popup session reports on."""

    tab_id: int
    url: str | None


# ============================================================================
# Remote query results
# ============================================================================


@dataclass(frozen=True)
class RemoteError:
    """Error body returned by the remote distribution service."""

    code: int
    message: str
    status: str = ""


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result."""

    error: E


RemoteResult = Union[Ok["RemoteRecord"], Err[RemoteError]]
