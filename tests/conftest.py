from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from vocab_teacher.core.config import Settings
from vocab_teacher.main import create_app

UPSTREAM_BASE_URL = "https://upstream.test/v1"
UPSTREAM_CHAT_URL = f"{UPSTREAM_BASE_URL}/chat/completions"
TEST_API_KEY = "sk-test-0123456789abcdefghijklmn"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "APP_ENV": "test",
        "OPENAI_API_KEY": TEST_API_KEY,
        "OPENAI_BASE_URL": UPSTREAM_BASE_URL,
        "CORS_ALLOW_ORIGINS": "",
        "LOG_JSON": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def chat_completion(content: str | None) -> dict[str, object]:
    message: dict[str, object] = {"role": "assistant"}
    if content is not None:
        message["content"] = content
    return {"id": "chatcmpl-test", "object": "chat.completion", "choices": [{"index": 0, "message": message}]}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def upstream_http() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(base_url=UPSTREAM_BASE_URL) as http_client:
        yield http_client


@pytest.fixture
def app(settings: Settings, upstream_http: httpx.AsyncClient) -> FastAPI:
    return create_app(settings, http_client=upstream_http, configure_logging=False)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
