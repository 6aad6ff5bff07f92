from __future__ import annotations

from typing import Any

from vocab_teacher.domain.schemas import VocabularyResult, WordExplanation


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def explanation_speech_text(explanation: WordExplanation) -> str:
    word = _text(explanation.word)
    parts = (f"{word}." if word else "", _text(explanation.definition), _text(explanation.example))
    return " ".join(p for p in parts if p)


def render_explanation(explanation: WordExplanation) -> str:
    lines = [_text(explanation.word).upper(), f"  Definition: {_text(explanation.definition)}"]
    if explanation.example:
        lines.append(f'  Example sentence: "{_text(explanation.example)}"')
    return "\n".join(lines)


def render_result(result: VocabularyResult) -> str:
    blocks = ["Word Explanations", ""]
    for explanation in result.entries():
        blocks.append(render_explanation(explanation))
        blocks.append("")
    if result.story:
        blocks.extend(["Your Vocabulary Story", "", _text(result.story)])
    return "\n".join(blocks).rstrip() + "\n"
