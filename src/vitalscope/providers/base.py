"""Base fetch adapter interface.

Remote field-data adapters implement a narrow interface:
`query(url) -> Ok(RemoteRecord) | Err(RemoteError)`.
Adapters must NOT classify, cache or render.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vitalscope.models.domain import RemoteResult


class FetchAdapter(ABC):
    """Abstract base class for remote distribution adapters."""

    @abstractmethod
    async def query(self, url: str) -> RemoteResult:
        """Query field data for the origin of a page URL.

        Args:
            url: Page URL; the adapter derives the origin.

        Returns:
            Ok with the record, or Err when the service answered with an
            error body.

        Raises:
            RemoteQueryError: On transport failure or an unusable response.
        """
        pass
