"""Chrome UX Report (CrUX) fetch adapter.

POSTs `{"origin", "formFactor"}` to the queryRecord endpoint. An `error`
body is a failure result, distinct from a transport failure, which raises.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from vitalscope.core.config import Settings
from vitalscope.core.errors import RemoteQueryError
from vitalscope.models.domain import Err, Ok, RemoteError, RemoteResult
from vitalscope.models.types import RemoteRecord
from vitalscope.providers.base import FetchAdapter

logger = logging.getLogger(__name__)

MALFORMED_RECORD = "MALFORMED_RECORD"


def origin_of(url: str) -> str:
    """Return the web origin (scheme://host[:port]) of a page URL.

    Matches a browser's `URL.origin`: default ports are omitted, IDN hosts
    are punycoded and IPv6 hosts keep their brackets.

    Raises:
        RemoteQueryError: If the URL is not an http(s) URL.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise RemoteQueryError(f"Invalid URL: {url!r}") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise RemoteQueryError(f"URL has no web origin: {url!r}")

    # netloc is IDNA-encoded, keeps IPv6 brackets and drops default ports
    return f"{parsed.scheme}://{parsed.netloc.decode('ascii')}"


def _error_code(raw: Any) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_error(body: dict[str, Any]) -> RemoteError:
    error = body["error"]
    if not isinstance(error, dict):
        return RemoteError(code=0, message=str(error))

    raw_code = error.get("code", 0)
    code = _error_code(raw_code)
    status = str(error.get("status", ""))
    if code is None:
        # Non-numeric codes are kept as the status
        code = 0
        status = status or str(raw_code)

    return RemoteError(code=code, message=str(error.get("message", "")), status=status)


class CruxFetchAdapter(FetchAdapter):
    """Fetch adapter backed by the CrUX API."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        """Initialize adapter.

        Args:
            client: HTTP client; owned by the caller.
            settings: Endpoint, API key, form factor and timeout.
        """
        self.client = client
        self.settings = settings

    async def query(self, url: str) -> RemoteResult:
        """Query CrUX for the origin of url."""
        query = {
            "origin": origin_of(url),
            "formFactor": self.settings.form_factor,
        }

        try:
            response = await self.client.post(
                self.settings.crux_api_url,
                params={"key": self.settings.crux_api_key},
                json=query,
                timeout=self.settings.request_timeout,
            )
        except httpx.HTTPError as e:
            raise RemoteQueryError(f"CrUX request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteQueryError(
                f"CrUX returned a non-JSON body (HTTP {response.status_code})"
            ) from e

        if isinstance(body, dict) and "error" in body:
            error = _parse_error(body)
            logger.warning(f"CrUX API error for {query['origin']}: {error.code} {error.message}")
            return Err(error)

        if response.is_error:
            raise RemoteQueryError(f"CrUX request failed with HTTP {response.status_code}")

        try:
            record = RemoteRecord.model_validate(body)
        except ValidationError as e:
            logger.warning(f"CrUX record for {query['origin']} is malformed: {e}")
            return Err(RemoteError(code=0, message=str(e), status=MALFORMED_RECORD))

        logger.info(f"CrUX record received for {query['origin']}")
        return Ok(record)
