import base64

import pytest
from pydantic import ValidationError

from core.images import decode_data_uri, download_filename, png_data_uri
from core.schemas import (
    AspectRatio,
    GenerationOptions,
    GenerationPhase,
    GenerationResult,
    ImageSize,
    UploadedImage,
)


def test_options_defaults():
    options = GenerationOptions()

    assert options.aspect_ratio == AspectRatio.SQUARE
    assert options.image_size == ImageSize.SIZE_2K
    assert options.skin_tone == "match_target"
    assert options.lighting_mode == "natural"
    assert options.face_scale == "default"
    assert options.instructions == ""


def test_options_reject_unsupported_output_format():
    with pytest.raises(ValidationError):
        GenerationOptions(aspect_ratio="2:1")
    with pytest.raises(ValidationError):
        GenerationOptions(image_size="8K")


def test_options_accept_unknown_modal_values():
    assert GenerationOptions(skin_tone="teal").skin_tone == "teal"


def test_options_are_immutable():
    with pytest.raises(ValidationError):
        GenerationOptions().skin_tone = "darker"


def test_uploaded_image_derives_payload():
    image = UploadedImage.from_bytes(b"abc", "image/jpeg", "me.jpg")

    assert image.base64_data == base64.b64encode(b"abc").decode()
    assert image.size_bytes == 3


def test_result_states_are_exclusive():
    assert GenerationResult.succeeded("data:image/png;base64,AA==").phase == (
        GenerationPhase.SUCCEEDED
    )
    assert GenerationResult.failed("nope", needs_credential=True).needs_credential

    with pytest.raises(ValidationError):
        GenerationResult(phase=GenerationPhase.SUCCEEDED)
    with pytest.raises(ValidationError):
        GenerationResult(phase=GenerationPhase.PENDING, error="boom")
    with pytest.raises(ValidationError):
        GenerationResult(phase=GenerationPhase.IDLE, needs_credential=True)


def test_png_data_uri_keeps_encoded_string():
    assert png_data_uri("QUJD") == "data:image/png;base64,QUJD"


def test_decode_data_uri():
    assert decode_data_uri("data:image/png;base64,QUJD") == (b"ABC", "image/png")

    with pytest.raises(ValueError):
        decode_data_uri("https://example.com/image.png")
    with pytest.raises(ValueError):
        decode_data_uri("data:image/png;base64,@@@")


def test_download_filename_uses_milliseconds():
    assert download_filename(now=1700000000.5) == "gemini-faceswap-1700000000500.png"
