from __future__ import annotations


class ClientError(Exception):
    """Base class for failures surfaced by the vocabulary API client."""

    request_id: str | None = None


class ApiError(ClientError):
    def __init__(self, status_code: int, upstream_message: str | None = None, *, request_id: str | None = None) -> None:
        self.status_code = status_code
        self.upstream_message = upstream_message or "Unknown error"
        self.request_id = request_id
        super().__init__(f"API error: {status_code} - {self.upstream_message}")


class InvalidResponseError(ClientError):
    def __init__(self, message: str = "Invalid response format from API", *, request_id: str | None = None) -> None:
        self.request_id = request_id
        super().__init__(message)


class ApiConnectionError(ClientError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"network error: {reason}")
