from __future__ import annotations

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from vocab_teacher.core.context import REQUEST_ID_HEADER, client_ip_ctx_var, request_id_ctx_var

logger = logging.getLogger(__name__)

_REQ_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9\-_.]{7,63}$")

# set by routes on request.state, copied onto the access line when present
_STATE_FIELDS = ("word_count", "age", "upstream_ms")


def is_valid_request_id(value: str) -> bool:
    return bool(_REQ_ID_RE.fullmatch(value))


def _client_ip(request: Request, *, trusted_proxy_headers: bool) -> str:
    if trusted_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
        if forwarded:
            return forwarded
    if request.client and request.client.host:
        return request.client.host
    return "-"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id and client address to every proxy call.

    A well-formed incoming ``X-Request-ID`` is reused, otherwise a new one is
    minted. The id is echoed on the response and forwarded on the upstream
    completion call. One ``http_request`` line is logged per call.
    """

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        settings = request.app.state.settings

        incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
        rid = incoming if incoming and is_valid_request_id(incoming) else uuid.uuid4().hex
        request.state.request_id = rid
        request_id_ctx_var.set(rid)
        client_ip_ctx_var.set(_client_ip(request, trusted_proxy_headers=settings.trusted_proxy_headers))

        start = time.monotonic()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            extra = {
                "http_method": request.method,
                "http_path": request.url.path,
                "http_status": status_code,
                "duration_ms": int((time.monotonic() - start) * 1000),
            }
            for field in _STATE_FIELDS:
                value = getattr(request.state, field, None)
                if value is not None:
                    extra[field] = value
            logger.info("http_request", extra=extra)
