"""minFraud legacy HTTP transport.

Service docs: https://dev.maxmind.com/minfraud/minfraud-legacy
Parameters go out as a GET query string over TLS; the body comes back as raw
bytes for the decoder to parse.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

import httpx

from ...exceptions import ConnectionError
from ..decoding import resolve_encoding
from ..models import RawResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class Transport(Protocol):
    def send(
        self,
        endpoint: str,
        params: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> RawResponse: ...


class HttpTransport:
    """Blocking httpx transport. One GET per call, no retries."""

    def __init__(self, verify: bool = True, client: Optional[httpx.Client] = None):
        self._verify = verify
        self._client = client

    def send(
        self,
        endpoint: str,
        params: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> RawResponse:
        """GET endpoint with params as the query string.

        A timeout bounds both connect and read. Transport failures and
        timeouts raise ConnectionError; HTTP error statuses are returned as-is.
        """
        request_timeout = httpx.Timeout(timeout) if timeout is not None else DEFAULT_TIMEOUT
        logger.debug("Sending minFraud request to %s", endpoint)
        try:
            if self._client is not None:
                response = self._client.get(endpoint, params=dict(params), timeout=request_timeout)
            else:
                with httpx.Client(timeout=request_timeout, verify=self._verify) as client:
                    response = client.get(endpoint, params=dict(params))
        except httpx.TimeoutException as exc:
            raise ConnectionError(f"minFraud request to {endpoint} timed out") from exc
        except httpx.HTTPError as exc:
            raise ConnectionError(f"minFraud request to {endpoint} failed: {exc}") from exc

        logger.debug("minFraud responded with HTTP %d", response.status_code)
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            encoding=resolve_encoding(response.charset_encoding),
        )
