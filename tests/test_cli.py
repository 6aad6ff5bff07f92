from __future__ import annotations

import json

import httpx
import pytest
from respx import MockRouter
from typer.testing import CliRunner

from vocab_teacher import cli

PROXY = "http://proxy.test"

RESULT = {
    "explanations": [
        {"word": "orbit", "definition": "The path around a planet", "example": "The moon is in orbit."},
    ],
    "story": "A rocket went into orbit.",
}

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


def test_generate_with_empty_words_makes_no_call(respx_mock: MockRouter) -> None:
    result = runner.invoke(cli.app, ["generate", "--words", " , ", "--base-url", PROXY])

    assert result.exit_code == 2
    assert "Please enter some words" in result.output
    assert len(respx_mock.calls) == 0


def test_generate_with_bad_age_makes_no_call(respx_mock: MockRouter) -> None:
    result = runner.invoke(cli.app, ["generate", "--words", "orbit", "--age", "21", "--base-url", PROXY])

    assert result.exit_code == 2
    assert "Age must be between 5 and 18" in result.output
    assert len(respx_mock.calls) == 0


def test_generate_renders_result(respx_mock: MockRouter) -> None:
    route = respx_mock.post(f"{PROXY}/api/generate").mock(return_value=httpx.Response(200, json=RESULT))

    result = runner.invoke(cli.app, ["generate", "--words", " orbit ,, planet", "--age", "11", "--base-url", PROXY])

    assert result.exit_code == 0, result.output
    assert json.loads(route.calls[0].request.content) == {"words": ["orbit", "planet"], "age": 11}
    assert "ORBIT" in result.output
    assert "A rocket went into orbit." in result.output


def test_generate_json_output(respx_mock: MockRouter) -> None:
    respx_mock.post(f"{PROXY}/api/generate").mock(return_value=httpx.Response(200, json=RESULT))

    result = runner.invoke(cli.app, ["generate", "-w", "orbit", "--json", "--base-url", PROXY])

    assert result.exit_code == 0, result.output
    assert '"story": "A rocket went into orbit."' in result.output


def test_generate_failure_shows_hint(respx_mock: MockRouter) -> None:
    respx_mock.post(f"{PROXY}/api/generate").mock(
        return_value=httpx.Response(500, json={"error": "OpenAI API key is not configured"})
    )

    result = runner.invoke(cli.app, ["generate", "-w", "orbit", "--base-url", PROXY])

    assert result.exit_code == 1
    assert "Failed to generate explanations. Please check your OpenAI API key configuration." in result.output


def test_status_command(respx_mock: MockRouter) -> None:
    status = {"status": "online", "apiKey": {"configured": False, "validFormat": False}}
    respx_mock.get(f"{PROXY}/api/status").mock(return_value=httpx.Response(200, json=status))

    result = runner.invoke(cli.app, ["status", "--base-url", PROXY])

    assert result.exit_code == 0
    assert '"configured": false' in result.output


def test_status_command_offline(respx_mock: MockRouter) -> None:
    respx_mock.get(f"{PROXY}/api/status").mock(side_effect=httpx.ConnectError("refused"))

    result = runner.invoke(cli.app, ["status", "--base-url", PROXY])

    assert result.exit_code == 1
    assert '"status": "error"' in result.output


def test_generate_failure_shows_request_id(respx_mock: MockRouter) -> None:
    respx_mock.post(f"{PROXY}/api/generate").mock(
        return_value=httpx.Response(502, json={"error": "Upstream error"}, headers={"X-Request-ID": "req-0f0f0f0f"})
    )

    result = runner.invoke(cli.app, ["generate", "-w", "orbit", "--base-url", PROXY])

    assert result.exit_code == 1
    assert "Request id: req-0f0f0f0f" in result.output


class RecordingPlayback:
    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def start(self, text: str) -> None:
        self.events.append(("start", text))

    def wait(self) -> None:
        self.events.append(("wait",))

    def stop(self) -> None:
        self.events.append(("stop",))


def test_generate_speak_reads_explanations_then_story(
    respx_mock: MockRouter, monkeypatch: pytest.MonkeyPatch
) -> None:
    payload = {
        "explanations": [
            RESULT["explanations"][0],
            {"word": "planet", "definition": "A big ball in space", "example": None},
        ],
        "story": RESULT["story"],
    }
    respx_mock.post(f"{PROXY}/api/generate").mock(return_value=httpx.Response(200, json=payload))
    playback = RecordingPlayback()
    built: list[tuple[object, float]] = []

    def fake_build_playback(tts_command: object, *, rate: float) -> RecordingPlayback:
        built.append((tts_command, rate))
        return playback

    monkeypatch.setattr(cli, "build_playback", fake_build_playback)
    monkeypatch.setenv("TTS_COMMAND", "espeak -s {wpm}")
    monkeypatch.delenv("SPEECH_RATE", raising=False)

    result = runner.invoke(cli.app, ["generate", "-w", "orbit,planet", "--speak", "--base-url", PROXY])

    assert result.exit_code == 0, result.output
    assert built == [("espeak -s {wpm}", 0.8)]
    assert playback.events == [
        ("start", "orbit. The path around a planet The moon is in orbit."),
        ("wait",),
        ("start", "planet. A big ball in space"),
        ("wait",),
        ("start", "A rocket went into orbit."),
        ("wait",),
        ("stop",),
    ]


def test_generate_without_speak_builds_no_playback(respx_mock: MockRouter, monkeypatch: pytest.MonkeyPatch) -> None:
    respx_mock.post(f"{PROXY}/api/generate").mock(return_value=httpx.Response(200, json=RESULT))
    monkeypatch.setattr(cli, "build_playback", lambda *args, **kwargs: pytest.fail("playback built"))

    result = runner.invoke(cli.app, ["generate", "-w", "orbit", "--base-url", PROXY])

    assert result.exit_code == 0, result.output
