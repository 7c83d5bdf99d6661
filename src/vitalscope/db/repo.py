"""Repository pattern for cache operations.

Encapsulates all SQLAlchemy queries. Returns pydantic models (not
SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from vitalscope.db.schema import MetricRecord, TabState
from vitalscope.models.types import LocalMetricsBundle

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Metric Record Repository
# ============================================================================


def get_metrics_bundle(session: DbSession, key: str) -> LocalMetricsBundle | None:
    """Get the cached metrics bundle stored under key."""
    record = session.get(MetricRecord, key)
    if record is None:
        return None
    return LocalMetricsBundle.model_validate_json(record.value_json)


def put_metrics_bundle(session: DbSession, key: str, bundle: LocalMetricsBundle) -> None:
    """Store a metrics bundle under key, replacing any previous one."""
    value_json = bundle.model_dump_json(by_alias=True)
    record = session.get(MetricRecord, key)
    if record is None:
        session.add(MetricRecord(key=key, value_json=value_json))
    else:
        record.value_json = value_json


# ============================================================================
# Tab State Repository
# ============================================================================


def get_background_flag(session: DbSession, tab_key: str) -> bool:
    """Whether the tab was loaded in the background (False if unknown)."""
    state = session.get(TabState, tab_key)
    return state.loaded_in_background if state else False


def set_background_flag(session: DbSession, tab_key: str, loaded_in_background: bool) -> None:
    """Record whether the tab was loaded in the background."""
    state = session.get(TabState, tab_key)
    if state is None:
        session.add(TabState(tab_key=tab_key, loaded_in_background=loaded_in_background))
    else:
        state.loaded_in_background = loaded_in_background
