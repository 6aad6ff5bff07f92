from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AppError(Exception):
    message: str
    http_status: int
    detail: str | None = None
    log_detail: str | None = None

    def __str__(self) -> str:
        return self.log_detail or self.message

    def payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"error": self.message}
        if self.detail is not None:
            out["detail"] = self.detail
        return out


class WordsRequiredError(AppError):
    def __init__(self, log_detail: str | None = None) -> None:
        super().__init__(message="words[] is required", http_status=400, log_detail=log_detail)


class MethodNotAllowedError(AppError):
    def __init__(self) -> None:
        super().__init__(message="Method not allowed", http_status=405)


class ApiKeyMissingError(AppError):
    def __init__(self) -> None:
        super().__init__(message="OpenAI API key is not configured", http_status=500)


class UpstreamError(AppError):
    def __init__(self, http_status: int, detail: str) -> None:
        super().__init__(
            message="Upstream error",
            http_status=http_status,
            detail=detail,
            log_detail=f"upstream returned {http_status}",
        )


class UpstreamUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(message="Server error", http_status=500, detail=detail, log_detail="upstream request failed")


class NoContentError(AppError):
    def __init__(self) -> None:
        super().__init__(message="No content received from OpenAI", http_status=500)


class ParseFailureError(AppError):
    def __init__(self, content: str) -> None:
        super().__init__(
            message="Failed to parse response",
            http_status=500,
            detail=content,
            log_detail="upstream content is not valid json",
        )


class InternalError(AppError):
    def __init__(self, log_detail: str | None = None) -> None:
        super().__init__(message="Server error", http_status=500, log_detail=log_detail)
