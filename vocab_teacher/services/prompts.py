from __future__ import annotations

from collections.abc import Sequence

from vocab_teacher.domain.entities import ChatPrompt

_RESPONSE_SHAPE = """{
  "explanations": [
    {
      "word": "example",
      "definition": "simple definition here",
      "example": "example sentence here"
    }
  ],
  "story": "A short story (2-3 sentences) that uses all the words in context"
}"""


def build_system_prompt(age: int) -> str:
    return (
        f"You are a vocabulary teacher for {age}-year-old students. For each word provided, create:\n"
        "1. A simple, age-appropriate definition\n"
        "2. One example sentence using the word\n"
        "\n"
        "Return your response as a JSON object with this structure:\n"
        f"{_RESPONSE_SHAPE}"
    )


def build_user_prompt(words: Sequence[str]) -> str:
    return f"Define these words: {', '.join(words)}"


def build_chat_prompt(*, words: Sequence[str], age: int) -> ChatPrompt:
    return ChatPrompt(system_prompt=build_system_prompt(age), user_prompt=build_user_prompt(words))
