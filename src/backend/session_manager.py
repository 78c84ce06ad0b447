"""Session management for multi-user support.

Sessions live in process memory only. Images and API keys are never written to
disk and disappear when the session is cleaned up or the server stops.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from core.config import get_session_max_age_hours
from core.schemas import (
    GenerationOptions,
    GenerationPhase,
    GenerationResult,
    UploadedImage,
)


class ImageRole(str, Enum):
    """Which of the two input slots an image fills."""

    SOURCE = "source"
    TARGET = "target"


class GenerationInProgressError(Exception):
    """Raised when a generation is requested while another is pending."""

    pass


@dataclass
class Session:
    """Represents one user's in-memory face swap workspace."""

    session_id: str
    created_at: datetime
    source_image: UploadedImage | None = None
    target_image: UploadedImage | None = None
    options: GenerationOptions = field(default_factory=GenerationOptions)
    api_key: str = field(default="", repr=False)
    result: GenerationResult = field(default_factory=GenerationResult.idle)
    _request_token: str | None = field(default=None, repr=False)

    @property
    def phase(self) -> GenerationPhase:
        return self.result.phase

    @property
    def ready(self) -> bool:
        """Both input images are present."""
        return self.source_image is not None and self.target_image is not None

    def credential_configured(self, env_key_available: bool) -> bool:
        return env_key_available or bool(self.api_key)

    def get_image(self, role: ImageRole) -> UploadedImage | None:
        if role == ImageRole.SOURCE:
            return self.source_image
        return self.target_image

    def set_image(self, role: ImageRole, image: UploadedImage | None) -> None:
        """Replace (or clear) an input image and return to idle."""
        if role == ImageRole.SOURCE:
            self.source_image = image
        else:
            self.target_image = image
        self.reset()

    def reset(self) -> None:
        """Drop the last result. A pending request's late result will be ignored."""
        self._request_token = None
        self.result = GenerationResult.idle()

    def begin_generation(self) -> str:
        """Move to pending and return the token identifying this request."""
        if self.phase == GenerationPhase.PENDING:
            raise GenerationInProgressError("A generation is already in progress")
        self._request_token = uuid.uuid4().hex
        self.result = GenerationResult.pending()
        return self._request_token

    def complete_generation(self, token: str, image_url: str) -> bool:
        """Record a successful result if ``token`` is still current."""
        if token != self._request_token:
            return False
        self._request_token = None
        self.result = GenerationResult.succeeded(image_url)
        return True

    def fail_generation(
        self, token: str, message: str, needs_credential: bool = False
    ) -> bool:
        """Record a failed result if ``token`` is still current."""
        if token != self._request_token:
            return False
        self._request_token = None
        self.result = GenerationResult.failed(message, needs_credential)
        return True


class SessionManager:
    """Manages user sessions in memory."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self) -> Session:
        """Create a new empty session."""
        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=datetime.now(),
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get an existing session by ID."""
        return self._sessions.get(session_id)

    def cleanup_session(self, session_id: str) -> bool:
        """Forget a session along with its images and key."""
        return self._sessions.pop(session_id, None) is not None

    def cleanup_old_sessions(self, max_age_hours: int | None = None) -> int:
        """Remove sessions older than max_age_hours."""
        if max_age_hours is None:
            max_age_hours = get_session_max_age_hours()

        cleaned = 0
        cutoff = datetime.now()
        to_remove = []

        for session_id, session in self._sessions.items():
            age = (cutoff - session.created_at).total_seconds() / 3600
            if age > max_age_hours:
                to_remove.append(session_id)

        for session_id in to_remove:
            if self.cleanup_session(session_id):
                cleaned += 1

        return cleaned

    def __len__(self) -> int:
        return len(self._sessions)


# Global session manager instance
session_manager = SessionManager()
