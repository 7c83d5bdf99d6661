"""Shared pytest fixtures for vitalscope tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vitalscope.core.config import Settings
from vitalscope.db.cache import SqlCacheAdapter
from vitalscope.db.schema import Base
from vitalscope.models.types import LocalMetricsBundle, RemoteRecord


def make_histogram(densities, starts=(0, 2500, 4000)) -> dict:
    """Build a raw histogram payload from densities in tier order."""
    ends = list(starts[1:]) + [None]
    return {
        "histogram": [
            {"start": start, "end": end, "density": density}
            for start, end, density in zip(starts, ends, densities)
        ]
    }


def make_record_payload(lcp, fid, cls, origin="https://example.com") -> dict:
    """Build a raw CrUX queryRecord response from per-metric densities."""
    return {
        "record": {
            "key": {"origin": origin, "formFactor": "DESKTOP"},
            "metrics": {
                "largest_contentful_paint": make_histogram(lcp),
                "first_input.delay": make_histogram(fid, starts=(0, 100, 300)),
                "layout_instability.cumulative_layout_shift": make_histogram(
                    cls, starts=("0.00", "0.10", "0.25")
                ),
            },
        }
    }


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the in-memory engine."""
    return sessionmaker(bind=engine)


@pytest.fixture
def cache(session_factory) -> SqlCacheAdapter:
    """Cache adapter over the in-memory database."""
    return SqlCacheAdapter(session_factory)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        field_enabled=True,
        crux_api_key="test-key",
        db_path=tmp_path / "vitalscope.db",
    )


@pytest.fixture
def good_record() -> RemoteRecord:
    """Remote record whose three metrics are all Good."""
    return RemoteRecord.model_validate(
        make_record_payload(lcp=(0.8, 0.15, 0.05), fid=(0.95, 0.04, 0.01), cls=(0.9, 0.07, 0.03))
    )


@pytest.fixture
def mixed_record() -> RemoteRecord:
    """Remote record with LCP Needs Improvement, FID Good, CLS Poor."""
    return RemoteRecord.model_validate(
        make_record_payload(lcp=(0.5, 0.3, 0.2), fid=(0.9, 0.05, 0.05), cls=(0.4, 0.2, 0.4))
    )


@pytest.fixture
def local_bundle() -> LocalMetricsBundle:
    """Cached local metrics as written by the collector."""
    return LocalMetricsBundle.model_validate(
        {
            "lcp": {"value": 2480.5, "pass": True, "final": False},
            "fid": {"value": 0, "pass": True, "final": False},
            "cls": {"value": 0.1234, "pass": False, "final": True},
            "location": {"url": "https://example.com/page", "shortURL": "example.com/page"},
            "timestamp": "2024-05-01T10:00:00Z",
        }
    )
