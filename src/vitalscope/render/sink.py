"""Presentation sink interface.

The popup session hands computed reports to a sink; the sink decides how
they are shown. Sinks must NOT classify or fetch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vitalscope.models.domain import FetchState
from vitalscope.models.types import LocalReport, OriginReport, ReportPayload


class PresentationSink(ABC):
    """Abstract base class for report presentation."""

    @abstractmethod
    def render_origin(self, report: OriginReport) -> None:
        """Show the classified origin report."""
        pass

    @abstractmethod
    def render_origin_failure(self, message: str) -> None:
        """Show a user-facing message in place of the origin report."""
        pass

    @abstractmethod
    def render_local(self, report: LocalReport) -> None:
        """Show the local metrics report."""
        pass


class CollectingSink(PresentationSink):
    """Sink that keeps what it was given, for API payloads."""

    def __init__(self) -> None:
        self.origin: OriginReport | None = None
        self.origin_error: str | None = None
        self.local: LocalReport | None = None

    def render_origin(self, report: OriginReport) -> None:
        self.origin = report

    def render_origin_failure(self, message: str) -> None:
        self.origin_error = message

    def render_local(self, report: LocalReport) -> None:
        self.local = report

    def payload(self, fetch_state: FetchState) -> ReportPayload:
        """Snapshot everything rendered so far."""
        return ReportPayload(
            fetch_state=fetch_state,
            origin=self.origin,
            origin_error=self.origin_error,
            local=self.local,
        )
