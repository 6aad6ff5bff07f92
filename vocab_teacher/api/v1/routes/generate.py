from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from vocab_teacher.core.config import Settings
from vocab_teacher.core.deps import settings_dep, vocabulary_service_dep
from vocab_teacher.core.errors import AppError, InternalError
from vocab_teacher.domain.schemas import ErrorResponse, GenerateRequestBody, VocabularyResult
from vocab_teacher.services.vocabulary_service import VocabularyService, parse_generate_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=VocabularyResult,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": GenerateRequestBody.model_json_schema()}}}},
)
async def generate(
    request: Request,
    settings: Settings = Depends(settings_dep),
    service: VocabularyService = Depends(vocabulary_service_dep),
) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = None

    vocab_request = parse_generate_request(body, default_age=settings.default_age)
    request.state.word_count = len(vocab_request.words)
    request.state.age = vocab_request.age

    start = time.monotonic()
    try:
        result = await service.generate(vocab_request)
    except AppError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("generate_failed")
        raise InternalError(log_detail="generate failed") from exc
    finally:
        request.state.upstream_ms = int((time.monotonic() - start) * 1000)

    # upstream json is passed through verbatim
    return JSONResponse(status_code=200, content=result)
