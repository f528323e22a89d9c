"""HTTP proxying utilities for upstream requests."""

from collections.abc import AsyncIterator

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.cors import with_cors
from core.exceptions import UpstreamConnectionError, UpstreamTimeoutError
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest


class UpstreamClient:
    """Send prepared requests to YNAB and relay the responses with streaming."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._client = client
        self._headers = header_builder or HeaderBuilder()

    async def send(
        self,
        prepared: PreparedRequest,
        body: AsyncIterator[bytes] | None = None,
    ) -> httpx.Response:
        """Issue the request and return once upstream response headers arrive.

        The body is left unread; callers must close the response.

        Raises:
            UpstreamTimeoutError: the transport timed out.
            UpstreamConnectionError: any other transport failure.
        """
        req = self._client.build_request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=body if prepared.has_body else None,
        )
        try:
            return await self._client.send(req, stream=True, follow_redirects=True)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(str(e) or "Upstream timeout", url=prepared.url) from e
        except httpx.RequestError as e:
            raise UpstreamConnectionError(str(e) or type(e).__name__, url=prepared.url) from e

    def relay(self, response: httpx.Response) -> StreamingResponse:
        """Wrap an upstream response, keeping its status, headers and raw body."""
        relayed = StreamingResponse(
            response.aiter_raw(),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        headers = self._headers.build_response_headers(response.headers.multi_items())
        for key, value in with_cors(headers):
            relayed.headers.append(key, value)
        return relayed

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
