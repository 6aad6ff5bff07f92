from __future__ import annotations

import pytest

from vocab_teacher.ui.errors import API_KEY_HINT, FAILURE_PREFIX, NETWORK_HINT, QUOTA_HINT, RETRY_HINT, classify_error
from vocab_teacher.ui.form import (
    AGE_RANGE_MESSAGE,
    WORDS_REQUIRED_MESSAGE,
    parse_word_list,
    validate_form,
    word_count_message,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("test, word, list", ["test", "word", "list"]),
        (" a ,, b ", ["a", "b"]),
        ("single", ["single"]),
        ("dup, dup", ["dup", "dup"]),
        ("", []),
        (" , ,  ", []),
    ],
)
def test_parse_word_list(text: str, expected: list[str]) -> None:
    assert parse_word_list(text) == expected


@pytest.mark.parametrize("text", ["", "   ", ",", " , , "])
def test_empty_words_are_rejected(text: str) -> None:
    form = validate_form(text, 9)

    assert not form.ok
    assert form.errors == {"words": WORDS_REQUIRED_MESSAGE}
    assert WORDS_REQUIRED_MESSAGE == "Please enter some words"


@pytest.mark.parametrize("age", [4, 19, 0, -1])
def test_age_out_of_range_is_rejected(age: int) -> None:
    form = validate_form("afford", age)

    assert form.errors == {"age": AGE_RANGE_MESSAGE}


def test_both_errors_are_reported() -> None:
    assert set(validate_form("", 30).errors) == {"words", "age"}


@pytest.mark.parametrize("age", [5, 9, 18])
def test_valid_form(age: int) -> None:
    form = validate_form("afford, loan", age)

    assert form.ok
    assert form.words == ("afford", "loan")
    assert form.age == age


@pytest.mark.parametrize(
    ("count", "message"),
    [
        (0, "Start typing some words..."),
        (1, "1 word added"),
        (3, "3 words - add a few more!"),
        (5, "5 words - perfect amount!"),
        (8, "8 words - great selection!"),
    ],
)
def test_word_count_message(count: int, message: str) -> None:
    assert word_count_message(count) == message


@pytest.mark.parametrize(
    ("message", "hint"),
    [
        ("API error: 500 - OpenAI API key is not configured", API_KEY_HINT),
        ("API error: 429 - insufficient_quota", QUOTA_HINT),
        ("billing hard limit reached", QUOTA_HINT),
        ("network error: connection refused", NETWORK_HINT),
        ("Failed to fetch", NETWORK_HINT),
        ("Invalid response format from API", RETRY_HINT),
        ("API error: 500 - Server error", RETRY_HINT),
    ],
)
def test_classify_error(message: str, hint: str) -> None:
    assert classify_error(message) == FAILURE_PREFIX + hint
