from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import httpx
from vocab_teacher.client.errors import ApiConnectionError, ApiError, InvalidResponseError
from vocab_teacher.core.context import REQUEST_ID_HEADER
from vocab_teacher.domain.schemas import GenerateRequestBody, VocabularyResult, WordExplanation

logger = logging.getLogger(__name__)


def find_missing_words(words: Iterable[str], explanations: Sequence[WordExplanation]) -> list[str]:
    explained = {e.word.lower() for e in explanations if isinstance(e.word, str)}
    return [w for w in words if w.lower() not in explained]


def _error_message(resp: httpx.Response) -> str | None:
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return None


class VocabularyApiClient:
    """Calls the vocabulary proxy and checks the shape of what comes back.

    Every call is a single attempt. Shape violations are fatal for the call;
    missing explanations for requested words are only logged.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        generate_path: str = "/api/generate",
        status_path: str = "/api/status",
    ) -> None:
        self._client = http_client
        self._generate_path = generate_path
        self._status_path = status_path

    async def generate(self, words: Sequence[str], age: int) -> VocabularyResult:
        body = GenerateRequestBody(words=list(words), age=age).model_dump()

        try:
            resp = await self._client.post(self._generate_path, json=body)
        except httpx.HTTPError as exc:
            logger.error("api_call_failed", extra={"reason": str(exc)})
            raise ApiConnectionError(str(exc) or exc.__class__.__name__) from exc

        rid = resp.headers.get(REQUEST_ID_HEADER)
        if not resp.is_success:
            err = ApiError(resp.status_code, _error_message(resp), request_id=rid)
            logger.error(
                "api_call_failed", extra={"status": resp.status_code, "reason": str(err), "proxy_request_id": rid}
            )
            raise err

        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise InvalidResponseError(request_id=rid) from exc

        if (
            not isinstance(data, dict)
            or not isinstance(data.get("explanations"), list)
            or not data.get("story")
        ):
            raise InvalidResponseError(request_id=rid)

        result = VocabularyResult.model_validate(data)

        missing = find_missing_words(words, result.entries())
        if missing:
            logger.warning("missing_explanations", extra={"missing_words": missing})

        return result

    async def test_connection(self) -> bool:
        try:
            await self.generate(["test"], 10)
        except Exception as exc:  # noqa: BLE001
            logger.error("api_connection_test_failed", extra={"reason": str(exc)})
            return False
        return True

    async def get_status(self) -> dict[str, Any]:
        try:
            resp = await self._client.get(self._status_path)
            if not resp.is_success:
                raise ApiError(resp.status_code, "Status check failed")
            data = resp.json()
        except (httpx.HTTPError, ApiError, ValueError) as exc:
            logger.error("status_check_failed", extra={"reason": str(exc)})
            return {"status": "error", "message": str(exc)}
        return data if isinstance(data, dict) else {"status": "error", "message": "Invalid status payload"}
