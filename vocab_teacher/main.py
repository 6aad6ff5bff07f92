from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vocab_teacher.api.v1.router import router as v1_router
from vocab_teacher.core.config import Settings, get_settings
from vocab_teacher.core.exception_handlers import register_exception_handlers
from vocab_teacher.core.logging import setup_logging
from vocab_teacher.core.middleware.request_context import RequestContextMiddleware
from vocab_teacher.core.middleware.security_headers import SecurityHeadersMiddleware
from vocab_teacher.infrastructure.llm.openai_client import OpenAIChatClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the proxy application.

    Settings are bound to ``app.state`` here and never read from module globals
    by handlers. When ``http_client`` is given the caller owns it and the
    upstream client is wired immediately; otherwise one is opened in the
    lifespan and closed on shutdown.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    docs_url = "/docs" if settings.docs_enabled else None
    redoc_url = "/redoc" if settings.docs_enabled else None
    openapi_url = "/openapi.json" if settings.docs_enabled else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        await _startup(app, settings)
        try:
            yield
        finally:
            await _shutdown(app)

    app = FastAPI(
        title=settings.app_name,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if http_client is not None:
        app.state.llm_client = _build_llm_client(http_client, settings)

    register_exception_handlers(app)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
            allow_credentials=settings.cors_allow_credentials,
        )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


def build_upstream_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=str(settings.openai_base_url),
        timeout=httpx.Timeout(settings.openai_timeout_seconds),
        headers={"Accept": "application/json"},
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )


def _build_llm_client(http_client: httpx.AsyncClient, settings: Settings) -> OpenAIChatClient:
    return OpenAIChatClient(
        http_client=http_client,
        api_key=settings.openai_api_key_plain(),
        model=settings.openai_model,
        max_completion_tokens=settings.openai_max_completion_tokens,
    )


async def _startup(app: FastAPI, settings: Settings) -> None:
    if getattr(app.state, "llm_client", None) is None:
        http_client = build_upstream_http_client(settings)
        app.state.http_client = http_client
        app.state.llm_client = _build_llm_client(http_client, settings)

    logger.info(
        "startup_complete",
        extra={
            "model": settings.openai_model,
            "api_key_configured": settings.api_key_configured(),
            "app_env": settings.app_env,
        },
    )


async def _shutdown(app: FastAPI) -> None:
    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        try:
            await http_client.aclose()
        except Exception:  # noqa: BLE001
            logger.warning("http_client_close_failed", exc_info=True)


app = create_app()
