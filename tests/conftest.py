import pytest
from google.genai import types

from core.config import get_api_key_env_var
from core.schemas import UploadedImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


class FakeModels:
    """Stands in for ``client.models`` and records every call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    def __init__(self, models: FakeModels):
        self.models = models


class FakeClientFactory:
    """Client factory that records the keys it was asked to use."""

    def __init__(self, response=None, error=None):
        self.models = FakeModels(response=response, error=error)
        self.keys = []

    def __call__(self, api_key: str) -> FakeClient:
        self.keys.append(api_key)
        return FakeClient(self.models)


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=list(parts)))
        ]
    )


def image_part(data: bytes) -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type="image/png"))


def text_part(text: str) -> types.Part:
    return types.Part(text=text)


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch):
    monkeypatch.delenv(get_api_key_env_var(), raising=False)


@pytest.fixture
def source_image() -> UploadedImage:
    return UploadedImage.from_bytes(PNG_BYTES, "image/png", "face.png")


@pytest.fixture
def target_image() -> UploadedImage:
    return UploadedImage.from_bytes(JPEG_BYTES, "image/jpeg", "body.jpg")
