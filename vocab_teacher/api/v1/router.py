from __future__ import annotations

from fastapi import APIRouter

from vocab_teacher.api.v1.routes.generate import router as generate_router
from vocab_teacher.api.v1.routes.health import router as health_router
from vocab_teacher.api.v1.routes.status import router as status_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(status_router, tags=["status"])
router.include_router(generate_router, tags=["vocabulary"])
