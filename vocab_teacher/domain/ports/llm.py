from __future__ import annotations

from typing import Any, Protocol


class ChatCompletionClient(Protocol):
    async def complete(self, *, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        ...
