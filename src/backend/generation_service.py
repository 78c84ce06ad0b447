"""Generation service that runs the face swap for a session and records the outcome."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from core.exceptions import GenerationError, MissingCredentialError, describe_fault
from core.generator import FaceSwapGenerator
from core.schemas import GenerationResult

if TYPE_CHECKING:
    from backend.session_manager import Session

logger = logging.getLogger(__name__)


class ImagesNotReadyError(Exception):
    """Raised when generation is requested before both images are uploaded."""

    pass


class GenerationService:
    """Wraps FaceSwapGenerator for async web execution."""

    def __init__(self, generator: FaceSwapGenerator | None = None):
        self._generator = generator

    @property
    def generator(self) -> FaceSwapGenerator:
        """Get or create the face swap generator."""
        if self._generator is None:
            self._generator = FaceSwapGenerator()
        return self._generator

    async def generate(self, session: Session) -> GenerationResult:
        """Run one generation for the session.

        The session moves to pending, and to succeeded or failed once the call
        returns. If the session was reset in the meantime the late outcome is
        dropped and the session's current result is returned.

        Raises:
            ImagesNotReadyError: If either input image is missing
            GenerationInProgressError: If a generation is already pending
        """
        if not session.ready:
            raise ImagesNotReadyError("Both a source face and a target body are required")

        token = session.begin_generation()
        source = session.source_image
        target = session.target_image
        options = session.options
        api_key = session.api_key or None

        # Run the blocking SDK call in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        try:
            image_url = await loop.run_in_executor(
                None,
                lambda: self.generator.generate(source, target, options, api_key),
            )
        except MissingCredentialError as e:
            session.fail_generation(token, str(e), needs_credential=True)
        except GenerationError as e:
            session.fail_generation(token, str(e))
        except Exception as e:
            logger.error("Gemini API error for session %s: %s", session.session_id, e)
            message, needs_credential = describe_fault(e)
            session.fail_generation(token, message, needs_credential)
        else:
            if not session.complete_generation(token, image_url):
                logger.info(
                    "Discarding late result for session %s", session.session_id
                )

        return session.result


# Global generation service instance
generation_service = GenerationService()
