"""Local metrics API endpoints.

POST /api/metrics - Store locally measured metrics for a page
GET /api/metrics - Get the stored metrics for a page
PUT /api/tabs/{tab_id}/background - Record a tab's background-load flag
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vitalscope.api.app import get_cache_adapter
from vitalscope.core.identity import derive_cache_key
from vitalscope.db.cache import CacheAdapter
from vitalscope.models.types import (
    BackgroundFlag,
    LocalMetricsBundle,
    MetricsStored,
    MetricsSubmission,
)

router = APIRouter()


@router.post("/metrics", response_model=MetricsStored)
async def store_metrics(
    submission: MetricsSubmission,
    cache: CacheAdapter = Depends(get_cache_adapter),
) -> MetricsStored:
    """Store the latest metrics of a page under its cache key.

    Args:
        submission: Page URL and measured metrics.
        cache: Local metrics cache (injected).

    Returns:
        The cache key used.
    """
    key = derive_cache_key(submission.url)
    await cache.put_local_metrics(key, submission.metrics)
    return MetricsStored(key=key)


@router.get("/metrics", response_model=LocalMetricsBundle)
async def get_metrics(
    url: str = Query(min_length=1),
    cache: CacheAdapter = Depends(get_cache_adapter),
) -> LocalMetricsBundle:
    """Get the stored metrics of a page.

    Raises:
        HTTPException: 404 if nothing is stored for the page.
    """
    bundle = await cache.get_local_metrics(derive_cache_key(url))
    if bundle is None:
        raise HTTPException(status_code=404, detail="No metrics recorded for this page")
    return bundle


@router.put("/tabs/{tab_id}/background", response_model=BackgroundFlag)
async def set_background_flag(
    tab_id: int,
    flag: BackgroundFlag,
    cache: CacheAdapter = Depends(get_cache_adapter),
) -> BackgroundFlag:
    """Record whether a tab was loaded in the background."""
    await cache.set_background_flag(tab_id, flag.loaded_in_background)
    return flag
