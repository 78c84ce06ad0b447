import pytest
from fastapi.testclient import TestClient

import backend.api as api
from backend.generation_service import GenerationService
from conftest import JPEG_BYTES, PNG_BYTES, FakeClientFactory, image_part, make_response
from core.exceptions import INVALID_CREDENTIAL_MESSAGE
from core.generator import FaceSwapGenerator

client = TestClient(api.app)


def use_factory(monkeypatch, factory: FakeClientFactory) -> None:
    service = GenerationService(
        FaceSwapGenerator(model_id="test-image-model", client_factory=factory)
    )
    monkeypatch.setattr(api, "generation_service", service)


@pytest.fixture
def session_id():
    response = client.post("/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


def upload_both(session_id: str) -> None:
    source = client.put(
        f"/sessions/{session_id}/images/source",
        files={"file": ("face.png", PNG_BYTES, "image/png")},
    )
    target = client.put(
        f"/sessions/{session_id}/images/target",
        files={"file": ("body.jpg", JPEG_BYTES, "image/jpeg")},
    )
    assert source.status_code == 200
    assert target.status_code == 200


def test_new_session_state(session_id):
    state = client.get(f"/sessions/{session_id}").json()

    assert state["ready"] is False
    assert state["credential_configured"] is False
    assert state["result"]["phase"] == "idle"
    assert state["options"]["aspect_ratio"] == "1:1"


def test_unknown_session_is_404():
    assert client.get("/sessions/missing").status_code == 404
    assert client.post("/sessions/missing/generate").status_code == 404


def test_upload_rejects_unsupported_files(session_id):
    response = client.put(
        f"/sessions/{session_id}/images/source",
        files={"file": ("face.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 400

    response = client.put(
        f"/sessions/{session_id}/images/sideways",
        files={"file": ("face.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 422


def test_upload_and_preview(session_id):
    upload_both(session_id)

    preview = client.get(f"/sessions/{session_id}/images/source/preview")
    assert preview.content == PNG_BYTES
    assert preview.headers["content-type"] == "image/png"
    assert client.get(f"/sessions/{session_id}").json()["ready"] is True

    assert client.delete(f"/sessions/{session_id}/images/target").status_code == 200
    assert client.get(f"/sessions/{session_id}").json()["ready"] is False


def test_generate_requires_images(session_id):
    response = client.post(f"/sessions/{session_id}/generate")
    assert response.status_code == 400


def test_generate_and_download(monkeypatch, session_id):
    factory = FakeClientFactory(response=make_response(image_part(b"generated")))
    use_factory(monkeypatch, factory)
    upload_both(session_id)

    response = client.post(
        f"/sessions/{session_id}/generate",
        json={
            "options": {"aspect_ratio": "9:16", "image_size": "1K"},
            "api_key": "  user-key  ",
        },
    )

    body = response.json()
    assert response.status_code == 200
    assert body["phase"] == "succeeded"
    assert body["image_url"] == "data:image/png;base64,Z2VuZXJhdGVk"
    assert factory.keys == ["user-key"]
    assert factory.models.calls[0]["config"].image_config.aspect_ratio == "9:16"

    download = client.get(f"/sessions/{session_id}/download")
    assert download.content == b"generated"
    assert download.headers["content-type"] == "image/png"
    assert 'filename="gemini-faceswap-' in download.headers["content-disposition"]

    result = client.get(f"/sessions/{session_id}/result").json()
    assert result["phase"] == "succeeded"


def test_forbidden_asks_for_new_key(monkeypatch, session_id):
    use_factory(monkeypatch, FakeClientFactory(error=RuntimeError("403 PERMISSION_DENIED")))
    upload_both(session_id)
    client.put(f"/sessions/{session_id}/api-key", json={"api_key": "bad-key"})

    body = client.post(f"/sessions/{session_id}/generate").json()

    assert body["phase"] == "failed"
    assert body["error"] == INVALID_CREDENTIAL_MESSAGE
    assert body["needs_credential"] is True
    assert client.get(f"/sessions/{session_id}/download").status_code == 404

    saved = client.put(f"/sessions/{session_id}/api-key", json={"api_key": "new-key"})
    assert saved.json() == {"credential_configured": True}
    assert client.get(f"/sessions/{session_id}/result").json()["phase"] == "idle"


def test_update_options(session_id):
    response = client.put(
        f"/sessions/{session_id}/options",
        json={"skin_tone": "darker", "lighting_mode": "contrast"},
    )
    assert response.status_code == 200
    assert response.json()["skin_tone"] == "darker"

    response = client.put(f"/sessions/{session_id}/options", json={"image_size": "8K"})
    assert response.status_code == 422


def test_options_catalog():
    catalog = client.get("/options").json()

    assert [c["value"] for c in catalog["aspect_ratios"]] == [
        "1:1",
        "3:4",
        "4:3",
        "9:16",
        "16:9",
    ]
    assert [c["value"] for c in catalog["image_sizes"]] == ["1K", "2K", "4K"]
    assert catalog["defaults"]["skin_tone"] == "match_target"


def test_delete_session(session_id):
    assert client.delete(f"/sessions/{session_id}").status_code == 200
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_health():
    assert client.get("/health").json() == {"status": "healthy"}
