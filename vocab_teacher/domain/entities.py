from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerateRequest:
    words: tuple[str, ...]
    age: int


@dataclass(frozen=True)
class ChatPrompt:
    system_prompt: str
    user_prompt: str
