"""Tests for the local metrics report."""

import pytest
from pydantic import ValidationError

from vitalscope.metrics.local import (
    BACKGROUND_CAVEAT,
    MIGHT_CHANGE,
    WAITING_FOR_INPUT,
    build_local_report,
    format_value,
    state_label,
)
from vitalscope.models.types import LocalMetricSample, LocalMetricsBundle


def sample(value, passed=True, final=True) -> LocalMetricSample:
    return LocalMetricSample(value=value, passed=passed, final=final)


class TestBuildLocalReport:
    """Test pass-through of samples into the report."""

    def test_values_and_flags_pass_through(self, local_bundle):
        """value, pass and final are copied unchanged."""
        report = build_local_report(local_bundle, background_load_hint=False)
        assert report.lcp.value == 2480.5
        assert report.lcp.passed is True
        assert report.lcp.final is False
        assert report.cls.passed is False
        assert report.cls.final is True

    def test_location_and_timestamp(self, local_bundle):
        """Page location and timestamp are carried over."""
        report = build_local_report(local_bundle, background_load_hint=False)
        assert report.url == "https://example.com/page"
        assert report.short_url == "example.com/page"
        assert report.timestamp == "2024-05-01T10:00:00Z"

    def test_missing_location(self):
        """A bundle without location reports no URL."""
        bundle = LocalMetricsBundle(lcp=sample(1000), fid=sample(10), cls=sample(0.01))
        report = build_local_report(bundle, background_load_hint=False)
        assert report.url is None
        assert report.short_url is None

    def test_no_caveat_without_background_hint(self, local_bundle):
        """No metric carries a caveat for a foreground load."""
        report = build_local_report(local_bundle, background_load_hint=False)
        assert not any(m.caveat for m in report.in_order())
        assert report.lcp.caveat_text is None

    def test_background_hint_flags_lcp_only(self, local_bundle):
        """Background loading adds a caveat to LCP and nothing else."""
        report = build_local_report(local_bundle, background_load_hint=True)
        assert report.lcp.caveat is True
        assert report.lcp.caveat_text == BACKGROUND_CAVEAT
        assert report.fid.caveat is False
        assert report.cls.caveat is False

    def test_report_is_immutable(self, local_bundle):
        """The report cannot be modified after construction."""
        report = build_local_report(local_bundle, background_load_hint=False)
        with pytest.raises(ValidationError):
            report.lcp = report.fid

    def test_pass_alias_in_dump(self, local_bundle):
        """Serialized reports use the collector's 'pass' field name."""
        report = build_local_report(local_bundle, background_load_hint=False)
        dumped = report.model_dump(by_alias=True)
        assert dumped["lcp"]["pass"] is True


class TestFormatting:
    """Test display values and state labels."""

    def test_lcp_in_seconds(self):
        """LCP milliseconds display as seconds with two decimals."""
        assert format_value("lcp", sample(2480.5)) == "2.48 s"

    def test_fid_in_milliseconds_when_final(self):
        """Final FID displays in milliseconds."""
        assert format_value("fid", sample(12.5)) == "12.50 ms"

    def test_fid_blank_until_final(self):
        """Provisional FID has no value to show."""
        assert format_value("fid", sample(0, final=False)) == ""

    def test_cls_three_decimals(self):
        """CLS displays with three decimals."""
        assert format_value("cls", sample(0.1)) == "0.100"

    def test_final_metrics_have_no_state_label(self):
        """Final values show no state label."""
        assert state_label("lcp", sample(1000)) == ""
        assert state_label("fid", sample(10)) == ""

    def test_provisional_labels(self):
        """Provisional FID waits for input; LCP and CLS might change."""
        assert state_label("fid", sample(0, final=False)) == WAITING_FOR_INPUT
        assert state_label("lcp", sample(1000, final=False)) == MIGHT_CHANGE
        assert state_label("cls", sample(0.1, final=False)) == MIGHT_CHANGE
