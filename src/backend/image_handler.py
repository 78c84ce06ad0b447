"""Image upload handling and validation."""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path

from fastapi import UploadFile

from core.config import (
    get_allowed_image_extensions,
    get_allowed_mime_types,
    get_max_image_size_mb,
)
from core.schemas import UploadedImage

# Allowed image types
ALLOWED_EXTENSIONS = get_allowed_image_extensions()
ALLOWED_MIME_TYPES = get_allowed_mime_types()
MAX_FILE_SIZE = get_max_image_size_mb() * 1024 * 1024


class ImageValidationError(Exception):
    """Raised when image validation fails."""

    pass


def guess_mime_type(filename: str | None) -> str | None:
    if not filename:
        return None
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type


class ImageHandler:
    """Turns uploaded or local files into encoded images ready for generation."""

    def validate_file(
        self, filename: str | None, content_type: str | None, content: bytes
    ) -> str:
        """Validate an image and determine its MIME type.

        Args:
            filename: Original file name, if known
            content_type: Declared MIME type, if known
            content: File content bytes

        Returns:
            The MIME type to send with the image

        Raises:
            ImageValidationError: If validation fails
        """
        if not content:
            raise ImageValidationError("File is empty")

        # Check file size
        if len(content) > MAX_FILE_SIZE:
            raise ImageValidationError(
                f"File size {len(content)} exceeds maximum {MAX_FILE_SIZE} bytes"
            )

        # Check extension
        if filename:
            ext = Path(filename).suffix.lower()
            if ext not in ALLOWED_EXTENSIONS:
                raise ImageValidationError(
                    f"File extension '{ext}' not allowed. Allowed: {sorted(ALLOWED_EXTENSIONS)}"
                )

        # Check MIME type
        mime_type = content_type
        if not mime_type or mime_type == "application/octet-stream":
            mime_type = guess_mime_type(filename)
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ImageValidationError(
                f"MIME type '{mime_type}' not allowed. Allowed: {sorted(ALLOWED_MIME_TYPES)}"
            )

        return mime_type

    async def process_upload(self, file: UploadFile) -> UploadedImage:
        """Read, validate and encode an uploaded image."""
        content = await file.read()
        mime_type = self.validate_file(file.filename, file.content_type, content)
        return UploadedImage.from_bytes(content, mime_type, file.filename or "")

    def load_file(self, path: str | Path) -> UploadedImage:
        """Read, validate and encode an image from disk."""
        path = Path(path)
        content = path.read_bytes()
        mime_type = self.validate_file(path.name, guess_mime_type(path.name), content)
        return UploadedImage.from_bytes(content, mime_type, path.name)

    async def load_pair(
        self, source_path: str | Path, target_path: str | Path
    ) -> tuple[UploadedImage, UploadedImage]:
        """Encode the source and target images concurrently."""
        loop = asyncio.get_running_loop()
        source, target = await asyncio.gather(
            loop.run_in_executor(None, self.load_file, source_path),
            loop.run_in_executor(None, self.load_file, target_path),
        )
        return source, target


# Global image handler instance
image_handler = ImageHandler()
