from __future__ import annotations

import json
import logging
from typing import Any

from vocab_teacher.core.errors import NoContentError, ParseFailureError, WordsRequiredError
from vocab_teacher.domain.entities import GenerateRequest
from vocab_teacher.domain.ports.llm import ChatCompletionClient
from vocab_teacher.services.prompts import build_chat_prompt

logger = logging.getLogger(__name__)


def parse_generate_request(body: Any, *, default_age: int) -> GenerateRequest:
    """Validate an inbound proxy body.

    ``words`` must be a non-empty list of non-blank strings; anything else is a
    client error. ``age`` is lenient: missing, zero or non-integer values fall
    back to ``default_age`` and no range is enforced here.
    """
    if not isinstance(body, dict):
        raise WordsRequiredError("body is not a json object")

    words = body.get("words")
    if not isinstance(words, list) or not words:
        raise WordsRequiredError("words missing or empty")
    if not all(isinstance(w, str) and w.strip() for w in words):
        raise WordsRequiredError("words must be non-empty strings")

    return GenerateRequest(words=tuple(words), age=_coerce_age(body.get("age"), default_age))


def _coerce_age(value: Any, default_age: int) -> int:
    if isinstance(value, bool):
        return default_age
    if isinstance(value, int) and value:
        return value
    if isinstance(value, float) and value.is_integer() and value:
        return int(value)
    return default_age


def extract_message_content(data: dict[str, Any]) -> str | None:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content:
        return None
    return content


class VocabularyService:
    def __init__(self, *, llm: ChatCompletionClient) -> None:
        self._llm = llm

    async def generate(self, request: GenerateRequest) -> Any:
        prompt = build_chat_prompt(words=request.words, age=request.age)

        data = await self._llm.complete(system_prompt=prompt.system_prompt, user_prompt=prompt.user_prompt)

        content = extract_message_content(data)
        if content is None:
            raise NoContentError()

        try:
            parsed = json.loads(content)
        except ValueError as exc:
            raise ParseFailureError(content) from exc

        logger.info("vocabulary_generated", extra={"word_count": len(request.words), "age": request.age})
        return parsed
