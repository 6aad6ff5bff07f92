from __future__ import annotations

from fastapi import APIRouter

from vocab_teacher.domain.schemas import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse()
