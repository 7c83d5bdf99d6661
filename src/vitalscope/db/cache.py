"""Cache adapter over the local metrics store.

The popup session reads the cache asynchronously; SqlCacheAdapter runs the
blocking SQLAlchemy calls in a worker thread, one session per call.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from sqlalchemy.orm import sessionmaker

from vitalscope.core.identity import tab_state_key
from vitalscope.db import repo
from vitalscope.db.session import session_scope
from vitalscope.models.types import LocalMetricsBundle

logger = logging.getLogger(__name__)


class CacheAdapter(ABC):
    """Key-value access to locally measured metrics and tab flags."""

    @abstractmethod
    async def get_local_metrics(self, key: str) -> LocalMetricsBundle | None:
        """Get the metrics bundle stored under a cache key, if any."""
        pass

    @abstractmethod
    async def put_local_metrics(self, key: str, bundle: LocalMetricsBundle) -> None:
        """Store a metrics bundle under a cache key."""
        pass

    @abstractmethod
    async def get_background_flag(self, tab_id: int) -> bool:
        """Whether a tab was loaded in the background (False if unknown)."""
        pass

    @abstractmethod
    async def set_background_flag(self, tab_id: int, loaded_in_background: bool) -> None:
        """Record whether a tab was loaded in the background."""
        pass


class SqlCacheAdapter(CacheAdapter):
    """CacheAdapter backed by the SQLite cache tables."""

    def __init__(self, session_factory: sessionmaker):
        """Initialize adapter.

        Args:
            session_factory: Factory bound to an engine with the cache schema.
        """
        self.session_factory = session_factory

    def _read_metrics(self, key: str) -> LocalMetricsBundle | None:
        with session_scope(self.session_factory) as session:
            bundle = repo.get_metrics_bundle(session, key)
        if bundle is None:
            logger.debug(f"No cached metrics for key {key!r}")
        return bundle

    def _write_metrics(self, key: str, bundle: LocalMetricsBundle) -> None:
        with session_scope(self.session_factory) as session:
            repo.put_metrics_bundle(session, key, bundle)

    def _read_flag(self, tab_id: int) -> bool:
        with session_scope(self.session_factory) as session:
            return repo.get_background_flag(session, tab_state_key(tab_id))

    def _write_flag(self, tab_id: int, loaded_in_background: bool) -> None:
        with session_scope(self.session_factory) as session:
            repo.set_background_flag(session, tab_state_key(tab_id), loaded_in_background)

    async def get_local_metrics(self, key: str) -> LocalMetricsBundle | None:
        return await asyncio.to_thread(self._read_metrics, key)

    async def put_local_metrics(self, key: str, bundle: LocalMetricsBundle) -> None:
        await asyncio.to_thread(self._write_metrics, key, bundle)

    async def get_background_flag(self, tab_id: int) -> bool:
        return await asyncio.to_thread(self._read_flag, tab_id)

    async def set_background_flag(self, tab_id: int, loaded_in_background: bool) -> None:
        await asyncio.to_thread(self._write_flag, tab_id, loaded_in_background)
