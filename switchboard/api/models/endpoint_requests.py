"""Endpoint request DTOs.

Type-safe data containers for endpoint parameters, extracted from FastAPI's
dependency injection for cleaner service layer integration.
"""

from dataclasses import dataclass

from fastapi import Query
from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True, slots=True)
class ModelsListRequest:
    """Parameters for /api/models/available."""

    provider: str | None

    @classmethod
    def from_fastapi(
        cls,
        provider: str | None = Query(
            None,
            description="Only return models served by this provider",
        ),
    ) -> "ModelsListRequest":
        """Create request from FastAPI dependencies.

        Usage:
            @router.get("/api/models/available")
            async def available_models(
                request: ModelsListRequest = Depends(ModelsListRequest.from_fastapi),
                ...
            ):
        """
        return cls(provider=provider.strip().lower() if provider else None)


class GenerateRequest(BaseModel):
    """Body of POST /api/generate."""

    model_id: str | None = Field(
        None, min_length=1, description="Model to generate with; the default model when omitted"
    )
    input_text: str = Field(..., min_length=1, description="Prompt text")
    system_prompt: str | None = Field(None, description="Optional system instruction")
    max_tokens: int | None = Field(None, gt=0, le=32768)
    temperature: float | None = Field(None, ge=0.0, le=2.0)

    @field_validator("model_id")
    @classmethod
    def strip_model_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("model_id must not be blank")
        return value
