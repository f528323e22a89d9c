"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from starlette.routing import Route

from api.handlers import handle_proxy
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.targets import YnabTarget
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        ynab_client = httpx.AsyncClient(
            timeout=config.limits.timeout,
            limits=limits,
            follow_redirects=True,
            transport=transport,
        )
        header_builder = HeaderBuilder()
        app.state.upstream_client = UpstreamClient(ynab_client, header_builder)
        app.state.ynab_target = YnabTarget(config, header_builder)
        try:
            yield
        finally:
            await ynab_client.aclose()

    app = FastAPI(
        title="YNAB Proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    async def proxy(request: Request):
        return await handle_proxy(request, config, logger)

    # methods=None matches every verb, including WebDAV and custom ones
    app.router.routes.append(Route("/{path:path}", proxy, methods=None))

    return app
