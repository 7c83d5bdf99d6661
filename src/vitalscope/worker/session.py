"""Popup session orchestration.

A PopupSession covers one opening of the report popup for a tab:
- Remote path: fetch origin field data -> classify -> summarize -> render
- Local path: read cached metrics + background flag -> build report -> render

The two paths run concurrently and never block each other. The session is
the recovery boundary for remote and classification errors: it renders one
generic failure message and logs the cause. An unreadable cache entry is
logged and leaves the local report unrendered.

Architecture:
- FetchAdapter: remote field data (providers/)
- CacheAdapter: cached local metrics and tab flags (db/cache.py)
- PresentationSink: rendering (render/)
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from vitalscope.aggregation.summary import summarize_record
from vitalscope.core.config import Settings
from vitalscope.core.errors import (
    InvalidHistogramError,
    RemoteQueryError,
    UnclassifiedError,
    VitalsError,
)
from vitalscope.core.identity import derive_cache_key
from vitalscope.db.cache import CacheAdapter
from vitalscope.metrics.local import build_local_report
from vitalscope.models.domain import Err, FetchState, RemoteResult, TabInfo
from vitalscope.providers.base import FetchAdapter
from vitalscope.render.sink import PresentationSink

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "We were unable to process your request."


class PopupSession:
    """Loads and renders the reports for one popup lifetime.

    The remote report is rendered at most once: a fetch starts only from
    NOT_FETCHED, and a completion is ignored once the state is RENDERED.
    """

    def __init__(
        self,
        fetch_adapter: FetchAdapter,
        cache: CacheAdapter,
        sink: PresentationSink,
        settings: Settings,
    ):
        """Initialize session.

        Args:
            fetch_adapter: Remote field data source.
            cache: Local metrics cache.
            sink: Where reports are rendered.
            settings: Feature flag and PageSpeed Insights URL.
        """
        self.fetch_adapter = fetch_adapter
        self.cache = cache
        self.sink = sink
        self.settings = settings
        self._state = FetchState.NOT_FETCHED

    @property
    def state(self) -> FetchState:
        return self._state

    async def open(self, tab: TabInfo) -> None:
        """Load both reports for a tab concurrently."""
        if not tab.url:
            logger.debug(f"Tab {tab.tab_id} has no URL, nothing to report")
            return

        await asyncio.gather(
            self.fetch_origin_report(tab.url),
            self.load_local_report(tab),
        )

    async def fetch_origin_report(self, url: str) -> None:
        """Fetch, classify and render the origin report of a page URL."""
        if not self.settings.field_enabled:
            return
        if self._state != FetchState.NOT_FETCHED:
            logger.debug(f"Origin report already {self._state.value}, not fetching again")
            return

        self._state = FetchState.FETCHING
        try:
            try:
                result = await self.fetch_adapter.query(url)
            except RemoteQueryError as e:
                self._render_failure(e)
                return
            self.complete_fetch(result)
        finally:
            if self._state == FetchState.FETCHING:
                logger.error(f"Origin report for {url} aborted by an unexpected error")
                self.sink.render_origin_failure(GENERIC_FAILURE_MESSAGE)
                self._state = FetchState.RENDERED

    def complete_fetch(self, result: RemoteResult) -> None:
        """Render a fetch result, once per session."""
        if self._state == FetchState.RENDERED:
            logger.debug("Origin report already rendered, ignoring fetch result")
            return

        if isinstance(result, Err):
            error = result.error
            self._render_failure(
                RemoteQueryError(f"Remote query failed: {error.code} {error.message}", error)
            )
            return

        try:
            report = summarize_record(result.value, self.settings.psi_url)
        except (InvalidHistogramError, UnclassifiedError) as e:
            self._render_failure(e)
            return

        self.sink.render_origin(report)
        self._state = FetchState.RENDERED

    def _render_failure(self, error: VitalsError) -> None:
        if self._state == FetchState.RENDERED:
            return
        logger.warning(f"Origin report unavailable: {error}")
        self.sink.render_origin_failure(GENERIC_FAILURE_MESSAGE)
        self._state = FetchState.RENDERED

    async def load_local_report(self, tab: TabInfo) -> None:
        """Read cached local metrics for the tab's page and render them."""
        if not tab.url:
            return

        try:
            bundle, loaded_in_background = await asyncio.gather(
                self.cache.get_local_metrics(derive_cache_key(tab.url)),
                self.cache.get_background_flag(tab.tab_id),
            )
        except (ValidationError, SQLAlchemyError) as e:
            logger.warning(f"Local metrics for {tab.url} unreadable: {e}")
            return
        if bundle is None:
            logger.info(f"No local metrics recorded for {tab.url}")
            return

        self.sink.render_local(build_local_report(bundle, loaded_in_background))
