from __future__ import annotations

from fastapi import Depends, Request

from vocab_teacher.core.config import Settings
from vocab_teacher.domain.ports.llm import ChatCompletionClient
from vocab_teacher.services.vocabulary_service import VocabularyService


def settings_dep(request: Request) -> Settings:
    settings: Settings | None = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings are not initialized")
    return settings


def llm_client_dep(request: Request) -> ChatCompletionClient:
    client: ChatCompletionClient | None = getattr(request.app.state, "llm_client", None)
    if client is None:
        raise RuntimeError("LLM client is not initialized")
    return client


def vocabulary_service_dep(llm: ChatCompletionClient = Depends(llm_client_dep)) -> VocabularyService:
    return VocabularyService(llm=llm)
