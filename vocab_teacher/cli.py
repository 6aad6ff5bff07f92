"""Command line front end for the vocabulary proxy."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Sequence
from typing import Any, Optional

import httpx
import typer

from vocab_teacher.client.api_client import VocabularyApiClient
from vocab_teacher.client.errors import ClientError
from vocab_teacher.core.config import ClientSettings
from vocab_teacher.core.logging import setup_logging
from vocab_teacher.domain.schemas import VocabularyResult
from vocab_teacher.ui.errors import classify_error
from vocab_teacher.ui.form import DEFAULT_FORM_AGE, validate_form, word_count_message
from vocab_teacher.ui.render import explanation_speech_text, render_result
from vocab_teacher.ui.speech import SpeechPlayback, build_playback

app = typer.Typer(help="Age-appropriate word explanations and a short story for a list of words.")


@app.callback()
def main() -> None:
    setup_logging(ClientSettings(), stream=sys.stderr)


def _api_client(http_client: httpx.AsyncClient, settings: ClientSettings) -> VocabularyApiClient:
    prefix = settings.api_prefix.rstrip("/")
    return VocabularyApiClient(
        http_client=http_client,
        generate_path=f"{prefix}/generate",
        status_path=f"{prefix}/status",
    )


def _http_client(settings: ClientSettings, base_url: str | None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url or str(settings.api_base_url),
        timeout=httpx.Timeout(settings.api_timeout_seconds),
        headers={"Accept": "application/json"},
    )


async def _generate(settings: ClientSettings, base_url: str | None, words: Sequence[str], age: int) -> VocabularyResult:
    async with _http_client(settings, base_url) as http_client:
        return await _api_client(http_client, settings).generate(words, age)


async def _status(settings: ClientSettings, base_url: str | None) -> dict[str, Any]:
    async with _http_client(settings, base_url) as http_client:
        return await _api_client(http_client, settings).get_status()


def _speak(playback: SpeechPlayback, result: VocabularyResult) -> None:
    texts = [explanation_speech_text(e) for e in result.entries()]
    if result.story:
        texts.append(str(result.story))
    try:
        for text in texts:
            playback.start(text)
            playback.wait()
    finally:
        playback.stop()


@app.command()
def generate(
    words: str = typer.Option("", "--words", "-w", help="Words separated by commas"),
    age: int = typer.Option(DEFAULT_FORM_AGE, "--age", "-a", help="Age of the audience (5-18)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Proxy base URL"),
    speak: bool = typer.Option(False, "--speak", help="Read the result aloud"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result"),
) -> None:
    """Generate explanations and a story for WORDS."""

    form = validate_form(words, age)
    if not form.ok:
        for message in form.errors.values():
            typer.secho(message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2)

    settings = ClientSettings()
    typer.secho(word_count_message(len(form.words)), err=True, fg=typer.colors.BLUE)

    try:
        result = asyncio.run(_generate(settings, base_url, form.words, form.age))
    except ClientError as exc:
        typer.secho(classify_error(str(exc)), err=True, fg=typer.colors.RED)
        if exc.request_id:
            typer.secho(f"Request id: {exc.request_id}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(exclude_unset=True), ensure_ascii=False, indent=2))
    else:
        typer.echo(render_result(result))

    if speak:
        _speak(build_playback(settings.tts_command, rate=settings.speech_rate), result)


@app.command()
def status(
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Proxy base URL"),
) -> None:
    """Show whether the proxy is online and its API key is configured."""

    settings = ClientSettings()
    data = asyncio.run(_status(settings, base_url))
    typer.echo(json.dumps(data, indent=2))
    if data.get("status") != "online":
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Run the proxy web service."""

    import uvicorn

    from vocab_teacher.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "vocab_teacher.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    app()
