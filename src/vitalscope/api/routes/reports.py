"""Report API endpoints.

GET /api/origin - Classified field data for the origin of a page
GET /api/report - Both popup reports for a tab
GET /api/report.html - Both popup reports for a tab as an HTML fragment
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from vitalscope.aggregation.summary import summarize_record
from vitalscope.api.app import get_cache_adapter, get_fetch_adapter
from vitalscope.core.config import Settings, get_settings
from vitalscope.core.errors import InvalidHistogramError, RemoteQueryError, UnclassifiedError
from vitalscope.db.cache import CacheAdapter
from vitalscope.models.domain import Err, TabInfo
from vitalscope.models.types import OriginReport, ReportPayload
from vitalscope.providers.base import FetchAdapter
from vitalscope.render.html import HtmlSink
from vitalscope.render.sink import CollectingSink
from vitalscope.worker.session import GENERIC_FAILURE_MESSAGE, PopupSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/origin", response_model=OriginReport)
async def get_origin_report(
    url: str = Query(min_length=1),
    fetch_adapter: FetchAdapter = Depends(get_fetch_adapter),
    settings: Settings = Depends(get_settings),
) -> OriginReport:
    """Get the classified field data report for the origin of url.

    Raises:
        HTTPException: 404 if field data is disabled, 502 if the remote
            query failed or its data could not be classified.
    """
    if not settings.field_enabled:
        raise HTTPException(status_code=404, detail="Field data is disabled")

    try:
        result = await fetch_adapter.query(url)
        if isinstance(result, Err):
            raise RemoteQueryError(f"Remote query failed: {result.error.message}", result.error)
        return summarize_record(result.value, settings.psi_url)
    except (RemoteQueryError, InvalidHistogramError, UnclassifiedError) as e:
        logger.warning(f"Origin report for {url} unavailable: {e}")
        raise HTTPException(status_code=502, detail=GENERIC_FAILURE_MESSAGE) from e


@router.get("/report", response_model=ReportPayload)
async def get_report(
    url: str = Query(min_length=1),
    tab_id: int = Query(),
    fetch_adapter: FetchAdapter = Depends(get_fetch_adapter),
    cache: CacheAdapter = Depends(get_cache_adapter),
    settings: Settings = Depends(get_settings),
) -> ReportPayload:
    """Run a popup session for a tab and return what it rendered.

    Args:
        url: URL of the tab's page.
        tab_id: Browser tab id.
        fetch_adapter: Remote field data source (injected).
        cache: Local metrics cache (injected).
        settings: Runtime settings (injected).

    Returns:
        ReportPayload with the origin report or its failure message, and
        the local report when metrics were recorded.
    """
    sink = CollectingSink()
    session = PopupSession(fetch_adapter, cache, sink, settings)
    await session.open(TabInfo(tab_id=tab_id, url=url))
    return sink.payload(session.state)


@router.get("/report.html", response_class=HTMLResponse)
async def get_report_html(
    url: str = Query(min_length=1),
    tab_id: int = Query(),
    fetch_adapter: FetchAdapter = Depends(get_fetch_adapter),
    cache: CacheAdapter = Depends(get_cache_adapter),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Run a popup session for a tab and return the rendered popup body."""
    sink = HtmlSink()
    session = PopupSession(fetch_adapter, cache, sink, settings)
    await session.open(TabInfo(tab_id=tab_id, url=url))
    return HTMLResponse(sink.document())
