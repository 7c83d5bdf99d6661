"""Pydantic models for vitalscope.

Wire shapes of the remote distribution service (CrUX), the locally
measured metrics record, and the report payloads handed to presentation.
All models are frozen: a parsed record is never mutated afterwards.
"""

from pydantic import BaseModel, ConfigDict, Field

from vitalscope.models.domain import FetchState, MetricName, QualityTier

# ============================================================================
# Remote distribution records
# ============================================================================


class HistogramBucket(BaseModel):
    """One density bucket of a metric histogram.

    CrUX sends CLS bounds as strings ("0.10"); they are coerced to floats.
    """

    model_config = ConfigDict(frozen=True)

    start: float
    end: float | None = None
    density: float = Field(default=0.0, ge=0.0)


class Percentiles(BaseModel):
    """Percentile values reported alongside a histogram."""

    model_config = ConfigDict(frozen=True)

    p75: float | None = None


class MetricHistogram(BaseModel):
    """Three-bucket density histogram for one metric of an origin.

    Bucket order is whatever the source sent; classification sorts.
    """

    model_config = ConfigDict(frozen=True)

    histogram: tuple[HistogramBucket, ...]
    percentiles: Percentiles | None = None


class RecordKey(BaseModel):
    """Identity of a remote record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: str | None = None
    url: str | None = None
    form_factor: str | None = Field(default=None, alias="formFactor")


class RecordMetrics(BaseModel):
    """The three Core Web Vitals histograms of a record.

    Other metrics present in the response are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    largest_contentful_paint: MetricHistogram
    first_input_delay: MetricHistogram = Field(alias="first_input.delay")
    cumulative_layout_shift: MetricHistogram = Field(
        alias="layout_instability.cumulative_layout_shift"
    )

    def in_order(self) -> tuple[tuple[MetricName, MetricHistogram], ...]:
        """Return (metric, histogram) pairs in LCP, FID, CLS order."""
        return (
            ("lcp", self.largest_contentful_paint),
            ("fid", self.first_input_delay),
            ("cls", self.cumulative_layout_shift),
        )


class Record(BaseModel):
    """Record body of a remote response."""

    model_config = ConfigDict(frozen=True)

    key: RecordKey
    metrics: RecordMetrics


class RemoteRecord(BaseModel):
    """Successful response of the remote distribution service."""

    model_config = ConfigDict(frozen=True)

    record: Record


# ============================================================================
# Locally measured metrics
# ============================================================================


class LocalMetricSample(BaseModel):
    """Snapshot of one locally measured metric.

    final=False means the value may still change (FID before any input,
    LCP/CLS before the page is hidden).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: float
    passed: bool = Field(alias="pass")
    final: bool


class PageLocation(BaseModel):
    """Page the local metrics were measured on."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    short_url: str = Field(alias="shortURL")


class LocalMetricsBundle(BaseModel):
    """Cached record written by the measurement collector."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lcp: LocalMetricSample
    fid: LocalMetricSample
    cls: LocalMetricSample
    location: PageLocation | None = None
    timestamp: str | None = None


# ============================================================================
# Reports
# ============================================================================


class BucketShare(BaseModel):
    """Share of observations in one tier bucket, for distribution bars."""

    model_config = ConfigDict(frozen=True)

    tier: QualityTier
    start: float
    density: float
    percent: float  # 2 decimals, for tooltips
    rounded_percent: int  # bar label


class MetricClassification(BaseModel):
    """Tier of one remote metric with its distribution."""

    model_config = ConfigDict(frozen=True)

    metric: MetricName
    label: str
    tier: QualityTier
    distribution: list[BucketShare]


class OriginReport(BaseModel):
    """Classified remote report for an origin."""

    model_config = ConfigDict(frozen=True)

    origin: str
    overall: QualityTier
    metrics: list[MetricClassification]
    psi_url: str


class LocalMetricReport(BaseModel):
    """One locally measured metric, ready for display."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    metric: MetricName
    label: str
    value: float
    passed: bool = Field(alias="pass")
    final: bool
    caveat: bool
    caveat_text: str | None
    display_value: str
    state_label: str


class LocalReport(BaseModel):
    """Report of the locally measured metrics for the current page."""

    model_config = ConfigDict(frozen=True)

    url: str | None
    short_url: str | None
    timestamp: str | None
    lcp: LocalMetricReport
    fid: LocalMetricReport
    cls: LocalMetricReport

    def in_order(self) -> tuple[LocalMetricReport, ...]:
        """Return metric reports in LCP, FID, CLS order."""
        return (self.lcp, self.fid, self.cls)


class ReportPayload(BaseModel):
    """Everything a popup session rendered, for API clients."""

    fetch_state: FetchState
    origin: OriginReport | None = None
    origin_error: str | None = None
    local: LocalReport | None = None


# ============================================================================
# API requests
# ============================================================================


class MetricsSubmission(BaseModel):
    """Locally measured metrics posted by the collector."""

    url: str = Field(min_length=1)
    metrics: LocalMetricsBundle


class MetricsStored(BaseModel):
    """Cache key a submission was stored under."""

    key: str


class BackgroundFlag(BaseModel):
    """Whether a tab was loaded in the background."""

    loaded_in_background: bool
