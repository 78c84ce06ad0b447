import asyncio

import pytest

from backend.generation_service import GenerationService, ImagesNotReadyError
from backend.session_manager import ImageRole, SessionManager
from conftest import FakeClientFactory, image_part, make_response, text_part
from core.exceptions import INVALID_CREDENTIAL_MESSAGE
from core.generator import FaceSwapGenerator
from core.schemas import GenerationPhase


def make_service(factory: FakeClientFactory) -> GenerationService:
    return GenerationService(
        FaceSwapGenerator(model_id="test-image-model", client_factory=factory)
    )


@pytest.fixture
def session(source_image, target_image):
    session = SessionManager().create_session()
    session.set_image(ImageRole.SOURCE, source_image)
    session.set_image(ImageRole.TARGET, target_image)
    session.api_key = "user-key"
    return session


def test_success(session):
    factory = FakeClientFactory(response=make_response(image_part(b"png")))

    result = asyncio.run(make_service(factory).generate(session))

    assert result.phase == GenerationPhase.SUCCEEDED
    assert result.image_url == "data:image/png;base64,cG5n"
    assert session.result == result


def test_forbidden_fault_is_invalid_credential(session):
    factory = FakeClientFactory(error=RuntimeError("403 Forbidden"))

    result = asyncio.run(make_service(factory).generate(session))

    assert result.phase == GenerationPhase.FAILED
    assert result.error == INVALID_CREDENTIAL_MESSAGE
    assert result.needs_credential


def test_other_fault_shows_raw_message(session):
    factory = FakeClientFactory(error=ConnectionError("Network is unreachable"))

    result = asyncio.run(make_service(factory).generate(session))

    assert result.error == "Network is unreachable"
    assert not result.needs_credential


def test_refusal_is_reported(session):
    factory = FakeClientFactory(response=make_response(text_part("I can't help with that")))

    result = asyncio.run(make_service(factory).generate(session))

    assert result.phase == GenerationPhase.FAILED
    assert "I can't help with that" in result.error
    assert not result.needs_credential


def test_missing_credential_asks_for_key(session):
    session.api_key = ""
    factory = FakeClientFactory(response=make_response(image_part(b"png")))

    result = asyncio.run(make_service(factory).generate(session))

    assert result.needs_credential
    assert "API Key is missing" in result.error
    assert factory.models.calls == []


def test_requires_both_images():
    session = SessionManager().create_session()

    with pytest.raises(ImagesNotReadyError):
        asyncio.run(make_service(FakeClientFactory()).generate(session))
    assert session.phase == GenerationPhase.IDLE


def test_late_result_after_reset_is_dropped(session, source_image):
    class ResettingModels:
        def generate_content(self, **kwargs):
            session.set_image(ImageRole.TARGET, source_image)
            return make_response(image_part(b"png"))

    class Client:
        models = ResettingModels()

    service = GenerationService(
        FaceSwapGenerator(model_id="m", client_factory=lambda key: Client())
    )

    result = asyncio.run(service.generate(session))

    assert result.phase == GenerationPhase.IDLE
    assert result.image_url is None
