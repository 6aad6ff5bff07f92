from __future__ import annotations

from contextvars import ContextVar

REQUEST_ID_HEADER = "X-Request-ID"

request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")
client_ip_ctx_var: ContextVar[str] = ContextVar("client_ip", default="-")


def current_request_id() -> str | None:
    """Id of the proxy request being served, or None outside of one."""
    rid = request_id_ctx_var.get()
    return None if rid == "-" else rid
