"""Remote field data adapters.

- base: FetchAdapter interface
- crux: Chrome UX Report API client
- mock: canned results for demos and tests
"""

from vitalscope.providers.base import FetchAdapter
from vitalscope.providers.crux import CruxFetchAdapter, origin_of
from vitalscope.providers.mock import StaticFetchAdapter

__all__ = [
    "CruxFetchAdapter",
    "FetchAdapter",
    "StaticFetchAdapter",
    "origin_of",
]
