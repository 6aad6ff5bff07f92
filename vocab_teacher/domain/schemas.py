from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class WordExplanation(BaseModel):
    model_config = ConfigDict(extra="allow")

    word: Any = None
    definition: Any = None
    example: Any = None


class VocabularyResult(BaseModel):
    """Proxy payload as returned. Only the top-level shape is enforced."""

    model_config = ConfigDict(extra="allow")

    explanations: list[Any]
    story: Any

    def entries(self) -> list[WordExplanation]:
        return [WordExplanation.model_validate(e) for e in self.explanations if isinstance(e, dict)]


class GenerateRequestBody(BaseModel):
    words: list[str]
    age: int | None = None


class ApiKeyStatus(BaseModel):
    configured: bool
    valid_format: bool = Field(serialization_alias="validFormat")


class StatusResponse(BaseModel):
    status: Literal["online"] = "online"
    timestamp: str
    api_key: ApiKeyStatus = Field(serialization_alias="apiKey")
    environment: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
