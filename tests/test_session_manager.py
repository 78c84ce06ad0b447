from datetime import datetime, timedelta

import pytest

from backend.session_manager import (
    GenerationInProgressError,
    ImageRole,
    SessionManager,
)
from core.schemas import GenerationPhase


def test_session_lifecycle(source_image, target_image):
    session = SessionManager().create_session()
    assert session.phase == GenerationPhase.IDLE
    assert not session.ready

    session.set_image(ImageRole.SOURCE, source_image)
    session.set_image(ImageRole.TARGET, target_image)
    assert session.ready

    token = session.begin_generation()
    assert session.phase == GenerationPhase.PENDING

    assert session.complete_generation(token, "data:image/png;base64,AA==")
    assert session.phase == GenerationPhase.SUCCEEDED
    assert session.result.image_url == "data:image/png;base64,AA=="


def test_only_one_pending_generation():
    session = SessionManager().create_session()
    session.begin_generation()

    with pytest.raises(GenerationInProgressError):
        session.begin_generation()


def test_new_image_resets_and_drops_late_result(source_image, target_image):
    session = SessionManager().create_session()
    session.set_image(ImageRole.SOURCE, source_image)
    session.set_image(ImageRole.TARGET, target_image)
    token = session.begin_generation()

    session.set_image(ImageRole.TARGET, source_image)

    assert session.phase == GenerationPhase.IDLE
    assert not session.fail_generation(token, "too late")
    assert session.phase == GenerationPhase.IDLE


def test_failed_result_then_retry():
    session = SessionManager().create_session()
    token = session.begin_generation()
    session.fail_generation(token, "Invalid API Key", needs_credential=True)
    assert session.result.needs_credential

    session.begin_generation()
    assert session.phase == GenerationPhase.PENDING
    assert session.result.error is None


def test_credential_configured():
    session = SessionManager().create_session()
    assert not session.credential_configured(env_key_available=False)
    assert session.credential_configured(env_key_available=True)

    session.api_key = "user-key"
    assert session.credential_configured(env_key_available=False)


def test_cleanup_old_sessions():
    manager = SessionManager()
    old = manager.create_session()
    fresh = manager.create_session()
    old.created_at = datetime.now() - timedelta(hours=30)

    assert manager.cleanup_old_sessions(max_age_hours=24) == 1
    assert manager.get_session(old.session_id) is None
    assert manager.get_session(fresh.session_id) is fresh
    assert manager.cleanup_session(fresh.session_id)
    assert len(manager) == 0
