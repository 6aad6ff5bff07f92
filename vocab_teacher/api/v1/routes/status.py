from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from vocab_teacher.core.config import Settings
from vocab_teacher.core.deps import settings_dep
from vocab_teacher.core.errors import MethodNotAllowedError
from vocab_teacher.domain.schemas import ApiKeyStatus, StatusResponse

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}

router = APIRouter()

_ANY_METHOD = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.api_route("/status", methods=_ANY_METHOD, response_model=StatusResponse)
async def status(request: Request, settings: Settings = Depends(settings_dep)) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    if request.method != "GET":
        err = MethodNotAllowedError()
        return JSONResponse(status_code=err.http_status, content=err.payload(), headers=CORS_HEADERS)

    try:
        body = StatusResponse(
            timestamp=_utc_timestamp(),
            api_key=ApiKeyStatus(
                configured=settings.api_key_configured(),
                valid_format=settings.api_key_valid_format(),
            ),
            environment=settings.app_env,
        )
        content = body.model_dump(by_alias=True)
    except Exception:  # noqa: BLE001
        logger.exception("status_check_failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "timestamp": _utc_timestamp(), "error": "Status check failed"},
            headers=CORS_HEADERS,
        )

    return JSONResponse(status_code=200, content=content, headers=CORS_HEADERS)
