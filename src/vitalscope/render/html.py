"""HTML presentation sink.

Renders the origin report (overall label, distribution bars, PageSpeed
Insights link) and the local metrics table as HTML fragments. Class names
are hooks for an external stylesheet; no styling lives here.
"""

import html

from vitalscope.models.types import (
    BucketShare,
    LocalMetricReport,
    LocalReport,
    MetricClassification,
    OriginReport,
)
from vitalscope.render.sink import PresentationSink

# Bar class per tier position
BAR_CLASSES = ("fast", "average", "slow")

MOBILE_WARNING = "Mobile performance may be significantly slower."
MOBILE_WARNING_LINK = "https://web.dev/load-fast-enough-for-pwa/"


class HtmlSink(PresentationSink):
    """Collects rendered HTML fragments for the report and local metrics."""

    def __init__(self) -> None:
        self.report_html = ""
        self.local_html = ""

    def _escape(self, text: object) -> str:
        """HTML escape text."""
        return html.escape(str(text))

    def _render_bar(self, bar_class: str, share: BucketShare) -> str:
        return (
            f'<div class="bar {bar_class}" title="{share.percent:.2f}%" '
            f'style="flex-grow:{share.density * 100};">{share.rounded_percent}%</div>'
        )

    def _render_distribution(self, metric: MetricClassification) -> str:
        bars = "".join(
            self._render_bar(bar_class, share)
            for bar_class, share in zip(BAR_CLASSES, metric.distribution)
        )
        return (
            '<div class="field-data"><div class="metric-wrapper lh-column">'
            '<div class="lh-metric">'
            '<div class="field-metric lh-metric__innerwrap">'
            f'<span class="metric-description">{self._escape(metric.label)}</span>'
            "</div>"
            f'<div class="metric-chart">{bars}</div>'
            "</div></div></div>"
        )

    def render_origin(self, report: OriginReport) -> None:
        distributions = " ".join(self._render_distribution(m) for m in report.metrics)
        link = (
            f"<br><a href='{self._escape(report.psi_url)}' target='_blank'>"
            "View Report on PageSpeed Insights</a>"
        )
        self.report_html = (
            f"<h1>Origin Performance ({self._escape(report.overall.value)})</h1> "
            f"{distributions} {link}"
        )

    def render_origin_failure(self, message: str) -> None:
        self.report_html = self._escape(message)

    def _render_local_metric(self, metric: LocalMetricReport) -> str:
        outcome = "pass" if metric.passed else "fail"
        subtitle = (
            f'<span class="lh-metric__subtitle">{self._escape(metric.caveat_text)}</span>'
            if metric.caveat
            else ""
        )
        return (
            f'<div class="lh-metric lh-metric--{outcome}">'
            '<div class="lh-metric__innerwrap"><div>'
            f'<span class="lh-metric__title">{self._escape(metric.label)} '
            f'<span class="lh-metric-state">{self._escape(metric.state_label)}</span></span>'
            f"{subtitle}</div>"
            f'<div class="lh-metric__value">{self._escape(metric.display_value)}</div>'
            "</div></div>"
        )

    def render_local(self, report: LocalReport) -> None:
        topbar = ""
        if report.url:
            url = self._escape(report.url)
            short_url = self._escape(report.short_url or report.url)
            timestamp = self._escape(report.timestamp or "")
            topbar = (
                '<div class="lh-topbar">'
                f'<a href="{url}" class="lh-topbar__url" target="_blank" rel="noopener" '
                f'title="{url}">{short_url}</a> - {timestamp}</div>'
            )
        metrics = "".join(self._render_local_metric(m) for m in report.in_order())
        self.local_html = (
            f"{topbar}"
            '<div class="lh-audit-group lh-audit-group--metrics">'
            '<div class="lh-audit-group__header">'
            '<span class="lh-audit-group__title">Metrics</span></div>'
            f'<div class="lh-columns"><div class="lh-column">{metrics}</div></div>'
            "</div>"
            f'<div class="lh-footer lh-warning">{MOBILE_WARNING} '
            f'<a href="{MOBILE_WARNING_LINK}" target="_blank">Learn more</a></div>'
        )

    def document(self) -> str:
        """The popup body: origin report above the local metrics."""
        return (
            f'<div id="report">{self.report_html}</div>'
            f'<div id="local-metrics">{self.local_html}</div>'
        )
