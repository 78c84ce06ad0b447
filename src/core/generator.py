"""Face swap generator that wraps a single Gemini image generation call."""

from __future__ import annotations

import logging
from typing import Any, Callable

from google.genai import types

from core.config import get_model_id
from core.exceptions import EmptyResponseError, ModelRefusalError
from core.images import png_data_uri
from core.model_provider import get_client, resolve_api_key
from core.prompt_compiler import compile_prompt
from core.schemas import GenerationOptions, UploadedImage

logger = logging.getLogger(__name__)


class FaceSwapGenerator:
    """Builds the multimodal request, calls the model once, and reads back the image."""

    def __init__(
        self,
        model_id: str | None = None,
        client_factory: Callable[[str], Any] = get_client,
    ):
        """Initialize the generator.

        Args:
            model_id: Model ID to call. Defaults to the configured model.
            client_factory: Builds a client from an API key
        """
        self.model_id = model_id or get_model_id()
        self.client_factory = client_factory

    @staticmethod
    def build_contents(
        source: UploadedImage, target: UploadedImage, prompt: str
    ) -> list[types.Content]:
        """Source image, target image, then the prompt as the trailing text part."""
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=source.content, mime_type=source.mime_type),
                    types.Part.from_bytes(data=target.content, mime_type=target.mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
        ]

    @staticmethod
    def build_config(options: GenerationOptions) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            image_config=types.ImageConfig(
                aspect_ratio=options.aspect_ratio.value,
                image_size=options.image_size.value,
            )
        )

    @staticmethod
    def extract_image_url(response: Any) -> str:
        """Read the generated image out of the first candidate.

        Returns:
            A PNG data URI built from the first inline data part

        Raises:
            ModelRefusalError: If the candidate holds text but no image
            EmptyResponseError: If the candidate holds neither
        """
        candidates = getattr(response, "candidates", None) or []
        content = getattr(candidates[0], "content", None) if candidates else None
        parts = getattr(content, "parts", None) or []

        for part in parts:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return png_data_uri(inline_data.data)

        for part in parts:
            text = getattr(part, "text", None)
            if text:
                raise ModelRefusalError(text)

        raise EmptyResponseError()

    def generate(
        self,
        source: UploadedImage,
        target: UploadedImage,
        options: GenerationOptions,
        api_key: str | None = None,
    ) -> str:
        """Generate a face swap image.

        Faults raised by the client are propagated unchanged.

        Args:
            source: Image supplying the face
            target: Image supplying the body and scene
            options: Presentation options
            api_key: Key entered by the user; the environment key is used otherwise

        Returns:
            The generated image as a PNG data URI
        """
        key = resolve_api_key(api_key)
        client = self.client_factory(key)

        logger.info(
            "Requesting face swap: model=%s aspect_ratio=%s image_size=%s "
            "skin_tone=%s lighting=%s face_scale=%s",
            self.model_id,
            options.aspect_ratio.value,
            options.image_size.value,
            options.skin_tone,
            options.lighting_mode,
            options.face_scale,
        )

        response = client.models.generate_content(
            model=self.model_id,
            contents=self.build_contents(source, target, compile_prompt(options)),
            config=self.build_config(options),
        )

        try:
            image_url = self.extract_image_url(response)
        except (ModelRefusalError, EmptyResponseError) as e:
            logger.warning("No image in Gemini response: %s", e)
            raise

        logger.info("Face swap image received (%d chars)", len(image_url))
        return image_url
