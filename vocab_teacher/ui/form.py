from __future__ import annotations

from dataclasses import dataclass, field

MIN_AGE = 5
MAX_AGE = 18
DEFAULT_FORM_AGE = 9

WORDS_REQUIRED_MESSAGE = "Please enter some words"
AGE_RANGE_MESSAGE = f"Age must be between {MIN_AGE} and {MAX_AGE}"


@dataclass(frozen=True)
class FormValidation:
    words: tuple[str, ...]
    age: int
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def parse_word_list(text: str) -> list[str]:
    return [w.strip() for w in text.split(",") if w.strip()]


def validate_form(words_text: str, age: int) -> FormValidation:
    words = parse_word_list(words_text or "")
    errors: dict[str, str] = {}

    if not words:
        errors["words"] = WORDS_REQUIRED_MESSAGE
    if age < MIN_AGE or age > MAX_AGE:
        errors["age"] = AGE_RANGE_MESSAGE

    return FormValidation(words=tuple(words), age=age, errors=errors)


def word_count_message(count: int) -> str:
    if count <= 0:
        return "Start typing some words..."
    if count == 1:
        return "1 word added"
    if count <= 3:
        return f"{count} words - add a few more!"
    if count <= 6:
        return f"{count} words - perfect amount!"
    return f"{count} words - great selection!"
