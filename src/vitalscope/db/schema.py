"""Database schema for the local metrics cache.

Two key-value tables:
- metric_records: cache key (hash of page URL) -> metrics bundle JSON
- tab_states: tab id -> whether the tab was loaded in the background
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class MetricRecord(Base):
    """Latest locally measured metrics for a page.

    Keyed by derive_cache_key(url); distinct URLs whose hashes collide
    share a row.
    """

    __tablename__ = "metric_records"

    key: Mapped[str] = mapped_column(String(16), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class TabState(Base):
    """Per-tab flags recorded by the collector."""

    __tablename__ = "tab_states"

    tab_key: Mapped[str] = mapped_column(String(32), primary_key=True)
    loaded_in_background: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
