"""FastAPI route handlers."""

from fastapi import Request, Response

from core.config import Config, require_credentials
from core.cors import CORS_HEADERS
from core.exceptions import ConfigurationError, UpstreamError
from core.protocols import RequestLogger
from ui.log_utils import write_incoming_log

GATEWAY_ERROR_MESSAGE = "An error occurred while proxying the request."


def _raw_path(request: Request) -> str:
    """Inbound path as the client sent it, still percent-encoded."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


def _has_body(request: Request) -> bool:
    if "transfer-encoding" in request.headers:
        return True
    return request.headers.get("content-length", "0") not in ("", "0")


async def handle_proxy(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Forward any request to the YNAB budget API."""
    try:
        require_credentials(config.ynab)
    except ConfigurationError as e:
        logger.log_error("config", 500, str(e))
        return Response(
            content=str(e),
            status_code=500,
            headers={"Content-Type": "text/plain"},
        )

    path = _raw_path(request)
    if request.method == "OPTIONS":
        logger.log_request(request.method, path, 204, outcome="preflight")
        return Response(status_code=204, headers=dict(CORS_HEADERS))

    if config.proxy.debug:
        write_incoming_log(request.method, path, dict(request.headers), None)

    prepared = request.app.state.ynab_target.prepare(
        request.method,
        path,
        request.url.query,
        request.headers.items(),
        has_body=_has_body(request),
    )
    upstream = request.app.state.upstream_client

    try:
        response = await upstream.send(prepared, request.stream())
    except UpstreamError as e:
        logger.log_error("YNAB", 502, f"{type(e).__name__}: {e}")
        return Response(
            content=GATEWAY_ERROR_MESSAGE,
            status_code=502,
            media_type="text/plain",
            headers=dict(CORS_HEADERS),
        )

    logger.log_request(request.method, path, response.status_code, outcome="forwarded")
    return upstream.relay(response)
