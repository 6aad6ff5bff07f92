from __future__ import annotations

import logging
from typing import Any

import httpx

from vocab_teacher.core.context import REQUEST_ID_HEADER, current_request_id
from vocab_teacher.core.errors import ApiKeyMissingError, UpstreamError, UpstreamUnavailableError
from vocab_teacher.domain.ports.llm import ChatCompletionClient

logger = logging.getLogger(__name__)

_UPSTREAM_DETAIL_LIMIT = 2000


class OpenAIChatClient(ChatCompletionClient):
    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        model: str,
        max_completion_tokens: int,
    ) -> None:
        self._client = http_client
        self._api_key = api_key
        self._model = model
        self._max_completion_tokens = int(max_completion_tokens)

    async def complete(self, *, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        if not self._api_key:
            raise ApiKeyMissingError()

        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {"type": "json_object"},
            "max_completion_tokens": self._max_completion_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        rid = current_request_id()
        if rid:
            headers[REQUEST_ID_HEADER] = rid

        try:
            resp = await self._client.post("chat/completions", json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            logger.warning("upstream_error", extra={"upstream_status": resp.status_code, "model": self._model})
            raise UpstreamError(resp.status_code, resp.text[:_UPSTREAM_DETAIL_LIMIT])

        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
