from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from typing import Protocol

logger = logging.getLogger(__name__)

BASE_WORDS_PER_MINUTE = 175
_STOP_TIMEOUT_SECONDS = 2.0


class SpeechPlayback(Protocol):
    def start(self, text: str) -> None:
        ...

    def stop(self) -> None:
        ...

    def wait(self) -> None:
        ...


class NullPlayback(SpeechPlayback):
    def start(self, text: str) -> None:  # noqa: ARG002
        return

    def stop(self) -> None:
        return

    def wait(self) -> None:
        return


class CommandPlayback(SpeechPlayback):
    """Speaks text through an external TTS command, one utterance at a time.

    The text is appended as the last argument. Starting a new utterance stops
    the one in progress.
    """

    def __init__(
        self,
        command: Sequence[str],
        *,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ) -> None:
        if not command:
            raise ValueError("TTS command must not be empty")
        self._command = list(command)
        self._popen = popen
        self._proc: subprocess.Popen | None = None

    @property
    def active(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def start(self, text: str) -> None:
        self.stop()
        if not text.strip():
            return
        try:
            self._proc = self._popen(
                [*self._command, text],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning("speech_start_failed", extra={"reason": str(exc)})
            self._proc = None

    def stop(self) -> None:
        proc, self._proc = self._proc, None
        if proc is None or proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=_STOP_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()

    def wait(self) -> None:
        proc = self._proc
        if proc is None:
            return
        proc.wait()
        self._proc = None


def build_playback(tts_command: str | None, *, rate: float = 0.8) -> SpeechPlayback:
    """``{wpm}`` in the command is replaced with the words-per-minute for ``rate``."""
    if not tts_command or not tts_command.strip():
        return NullPlayback()
    wpm = max(1, round(BASE_WORDS_PER_MINUTE * rate))
    return CommandPlayback(shlex.split(tts_command.replace("{wpm}", str(wpm))))
