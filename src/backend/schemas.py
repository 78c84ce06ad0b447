"""Pydantic schemas for the web API."""

from __future__ import annotations

from pydantic import BaseModel

from core.schemas import GenerationOptions, GenerationPhase, GenerationResult


class SessionResponse(BaseModel):
    """Response for session creation."""

    session_id: str
    created_at: str


class SessionStateResponse(BaseModel):
    """Current state of a session."""

    session_id: str
    created_at: str
    has_source: bool
    has_target: bool
    ready: bool
    options: GenerationOptions
    credential_configured: bool
    env_key_available: bool
    result: GenerationResult


class ImageUploadResponse(BaseModel):
    """Response for image upload."""

    role: str
    filename: str
    mime_type: str
    size_bytes: int


class ApiKeyRequest(BaseModel):
    """Session-only API key entered by the user."""

    api_key: str = ""


class ApiKeyResponse(BaseModel):
    credential_configured: bool


class GenerateRequest(BaseModel):
    """Request for face swap generation.

    Options and key are optional; when given they replace the session's values
    before the request is sent.
    """

    options: GenerationOptions | None = None
    api_key: str | None = None


class GenerateResponse(BaseModel):
    """Outcome of a generation request."""

    phase: GenerationPhase
    image_url: str | None = None
    error: str | None = None
    needs_credential: bool = False

    @classmethod
    def from_result(cls, result: GenerationResult) -> GenerateResponse:
        return cls(
            phase=result.phase,
            image_url=result.image_url,
            error=result.error,
            needs_credential=result.needs_credential,
        )


class OptionChoice(BaseModel):
    """One selectable value of an option picker."""

    value: str
    label: str
    description: str = ""


class OptionsCatalogResponse(BaseModel):
    """All selectable option values, in display order."""

    aspect_ratios: list[OptionChoice]
    image_sizes: list[OptionChoice]
    skin_tones: list[OptionChoice]
    lighting_modes: list[OptionChoice]
    face_scales: list[OptionChoice]
    defaults: GenerationOptions
