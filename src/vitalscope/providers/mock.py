"""Static fetch adapter for demos and tests.

Returns a canned result without touching the network.
"""

from __future__ import annotations

from vitalscope.core.errors import RemoteQueryError
from vitalscope.models.domain import RemoteResult
from vitalscope.providers.base import FetchAdapter


class StaticFetchAdapter(FetchAdapter):
    """Fetch adapter that answers every query with the same result.

    Pass an exception instead of a result to simulate a transport failure.
    """

    def __init__(self, result: RemoteResult | RemoteQueryError):
        self.result = result
        self.queries: list[str] = []

    @property
    def query_count(self) -> int:
        return len(self.queries)

    async def query(self, url: str) -> RemoteResult:
        self.queries.append(url)
        if isinstance(self.result, RemoteQueryError):
            raise self.result
        return self.result
