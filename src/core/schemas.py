"""Pydantic models for Face Swap Studio generation requests and results."""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Enums
# ============================================================================


class AspectRatio(str, Enum):
    """Output aspect ratios supported by the image model."""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    STORY = "9:16"
    WIDESCREEN = "16:9"


class ImageSize(str, Enum):
    """Output resolution tiers."""

    SIZE_1K = "1K"
    SIZE_2K = "2K"
    SIZE_4K = "4K"


class SkinTone(str, Enum):
    """How the swapped face's skin tone is blended."""

    MATCH_TARGET = "match_target"
    PRESERVE_SOURCE = "preserve_source"
    LIGHTER = "lighter"
    DARKER = "darker"


class LightingMode(str, Enum):
    """Lighting treatment applied to the swapped face."""

    NATURAL = "natural"
    WARM = "warm"
    COOL = "cool"
    HIGH_CONTRAST = "contrast"


class FaceScale(str, Enum):
    """Relative scale of facial features on the target head."""

    DEFAULT = "default"
    SMALLER = "smaller"
    LARGER = "larger"


class GenerationPhase(str, Enum):
    """Lifecycle of a single generation request."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# ============================================================================
# Input Models
# ============================================================================


class GenerationOptions(BaseModel):
    """User-selected presentation options for one generation request.

    The modal fields (skin tone, lighting, face scale) are plain strings so that
    unrecognised values can fall back to their default prompt clause instead of
    being rejected.
    """

    model_config = ConfigDict(frozen=True)

    aspect_ratio: AspectRatio = Field(
        default=AspectRatio.SQUARE, description="Output aspect ratio"
    )
    image_size: ImageSize = Field(
        default=ImageSize.SIZE_2K, description="Output resolution tier"
    )
    skin_tone: str = Field(
        default=SkinTone.MATCH_TARGET.value, description="Skin tone blending mode"
    )
    lighting_mode: str = Field(
        default=LightingMode.NATURAL.value, description="Lighting treatment"
    )
    face_scale: str = Field(
        default=FaceScale.DEFAULT.value, description="Facial feature scale"
    )
    instructions: str = Field(
        default="", description="Free-text instruction appended to the prompt"
    )


class UploadedImage(BaseModel):
    """A user-supplied picture, encoded once at ingestion time."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="", description="Original file name")
    mime_type: str = Field(description="MIME type of the image")
    content: bytes = Field(repr=False, description="Raw image bytes")
    base64_data: str = Field(
        repr=False, description="Base64 payload without data URI prefix"
    )

    @classmethod
    def from_bytes(
        cls, content: bytes, mime_type: str, filename: str = ""
    ) -> UploadedImage:
        """Build an image with its base64 payload derived from ``content``."""
        return cls(
            filename=filename,
            mime_type=mime_type,
            content=content,
            base64_data=base64.b64encode(content).decode("ascii"),
        )

    @property
    def size_bytes(self) -> int:
        return len(self.content)


# ============================================================================
# Result Models
# ============================================================================


class GenerationResult(BaseModel):
    """Outcome of a generation request. Exactly one phase holds at a time."""

    model_config = ConfigDict(frozen=True)

    phase: GenerationPhase = Field(default=GenerationPhase.IDLE)
    image_url: str | None = Field(
        default=None, description="PNG data URI when the request succeeded"
    )
    error: str | None = Field(
        default=None, description="User-facing message when the request failed"
    )
    needs_credential: bool = Field(
        default=False,
        description="Whether the failure calls for (re)entering an API key",
    )

    @model_validator(mode="after")
    def _check_phase(self) -> GenerationResult:
        succeeded = self.phase == GenerationPhase.SUCCEEDED
        failed = self.phase == GenerationPhase.FAILED
        if succeeded != (self.image_url is not None):
            raise ValueError("image_url is set exactly when the phase is succeeded")
        if failed != (self.error is not None):
            raise ValueError("error is set exactly when the phase is failed")
        if self.needs_credential and not failed:
            raise ValueError("needs_credential only applies to failed results")
        return self

    @classmethod
    def idle(cls) -> GenerationResult:
        return cls(phase=GenerationPhase.IDLE)

    @classmethod
    def pending(cls) -> GenerationResult:
        return cls(phase=GenerationPhase.PENDING)

    @classmethod
    def succeeded(cls, image_url: str) -> GenerationResult:
        return cls(phase=GenerationPhase.SUCCEEDED, image_url=image_url)

    @classmethod
    def failed(cls, message: str, needs_credential: bool = False) -> GenerationResult:
        return cls(
            phase=GenerationPhase.FAILED,
            error=message,
            needs_credential=needs_credential,
        )
