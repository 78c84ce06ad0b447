"""FastAPI application for the Face Swap Studio web interface."""

from __future__ import annotations

from typing import Annotated

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from backend.generation_service import ImagesNotReadyError, generation_service
from backend.image_handler import ImageValidationError, image_handler
from backend.schemas import (
    ApiKeyRequest,
    ApiKeyResponse,
    GenerateRequest,
    GenerateResponse,
    ImageUploadResponse,
    OptionChoice,
    OptionsCatalogResponse,
    SessionResponse,
    SessionStateResponse,
)
from backend.session_manager import (
    GenerationInProgressError,
    ImageRole,
    Session,
    session_manager,
)
from core.config import configure_logging, get_env_api_key
from core.images import decode_data_uri, download_filename
from core.schemas import (
    AspectRatio,
    FaceScale,
    GenerationOptions,
    GenerationPhase,
    ImageSize,
    LightingMode,
    SkinTone,
)

load_dotenv()
configure_logging()

app = FastAPI(
    title="Face Swap Studio API",
    description="Two-image face swap powered by the Gemini image model",
    version="1.0.0",
)

# Add CORS middleware for Streamlit
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

OPTIONS_CATALOG = OptionsCatalogResponse(
    aspect_ratios=[OptionChoice(value=r.value, label=r.value) for r in AspectRatio],
    image_sizes=[
        OptionChoice(value=ImageSize.SIZE_1K.value, label="1K", description="Fast"),
        OptionChoice(value=ImageSize.SIZE_2K.value, label="2K", description="Balanced"),
        OptionChoice(value=ImageSize.SIZE_4K.value, label="4K", description="Ultra"),
    ],
    skin_tones=[
        OptionChoice(
            value=SkinTone.MATCH_TARGET.value, label="Match Body", description="Best Blend"
        ),
        OptionChoice(
            value=SkinTone.PRESERVE_SOURCE.value,
            label="Orig. Face",
            description="Keep Tone",
        ),
        OptionChoice(value=SkinTone.LIGHTER.value, label="Lighter", description="Bright"),
        OptionChoice(value=SkinTone.DARKER.value, label="Darker", description="Deep"),
    ],
    lighting_modes=[
        OptionChoice(value=LightingMode.NATURAL.value, label="Natural"),
        OptionChoice(value=LightingMode.WARM.value, label="Warm"),
        OptionChoice(value=LightingMode.COOL.value, label="Cool"),
        OptionChoice(value=LightingMode.HIGH_CONTRAST.value, label="Drama"),
    ],
    face_scales=[
        OptionChoice(value=FaceScale.SMALLER.value, label="Smaller"),
        OptionChoice(value=FaceScale.DEFAULT.value, label="Auto Fit"),
        OptionChoice(value=FaceScale.LARGER.value, label="Larger"),
    ],
    defaults=GenerationOptions(),
)


# ============================================================================
# Helper Functions
# ============================================================================


def get_session_or_404(session_id: str) -> Session:
    """Get session or raise 404."""
    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def build_session_state(session: Session) -> SessionStateResponse:
    env_key_available = get_env_api_key() is not None
    return SessionStateResponse(
        session_id=session.session_id,
        created_at=session.created_at.isoformat(),
        has_source=session.source_image is not None,
        has_target=session.target_image is not None,
        ready=session.ready,
        options=session.options,
        credential_configured=session.credential_configured(env_key_available),
        env_key_available=env_key_available,
        result=session.result,
    )


# ============================================================================
# Session Endpoints
# ============================================================================


@app.post("/sessions", response_model=SessionResponse)
async def create_session():
    """Create a new session."""
    session_manager.cleanup_old_sessions()
    session = session_manager.create_session()
    return SessionResponse(
        session_id=session.session_id,
        created_at=session.created_at.isoformat(),
    )


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Delete a session and forget its images and key."""
    if session_manager.cleanup_session(session_id):
        return {"status": "deleted"}
    raise HTTPException(status_code=404, detail="Session not found")


@app.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str):
    """Get session info."""
    session = get_session_or_404(session_id)
    return build_session_state(session)


# ============================================================================
# Image Endpoints
# ============================================================================


@app.put("/sessions/{session_id}/images/{role}", response_model=ImageUploadResponse)
async def upload_image(
    session_id: str,
    role: ImageRole,
    file: Annotated[UploadFile, File()],
):
    """Set the source face or target body image."""
    session = get_session_or_404(session_id)

    try:
        image = await image_handler.process_upload(file)
    except ImageValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session.set_image(role, image)

    return ImageUploadResponse(
        role=role.value,
        filename=image.filename,
        mime_type=image.mime_type,
        size_bytes=image.size_bytes,
    )


@app.delete("/sessions/{session_id}/images/{role}")
async def delete_image(session_id: str, role: ImageRole):
    """Remove an uploaded image."""
    session = get_session_or_404(session_id)

    if session.get_image(role) is None:
        raise HTTPException(status_code=404, detail="Image not found")

    session.set_image(role, None)
    return {"status": "deleted"}


@app.get("/sessions/{session_id}/images/{role}/preview")
async def get_image_preview(session_id: str, role: ImageRole):
    """Get the uploaded image bytes."""
    session = get_session_or_404(session_id)

    image = session.get_image(role)
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return Response(content=image.content, media_type=image.mime_type)


# ============================================================================
# Options and Credential Endpoints
# ============================================================================


@app.get("/options", response_model=OptionsCatalogResponse)
async def list_options():
    """List selectable option values with their display labels."""
    return OPTIONS_CATALOG


@app.put("/sessions/{session_id}/options", response_model=GenerationOptions)
async def update_options(session_id: str, options: GenerationOptions):
    """Replace the session's generation options."""
    session = get_session_or_404(session_id)
    session.options = options
    return session.options


@app.put("/sessions/{session_id}/api-key", response_model=ApiKeyResponse)
async def set_api_key(session_id: str, request: ApiKeyRequest):
    """Set the session-only API key. A blank key clears it."""
    session = get_session_or_404(session_id)
    session.api_key = request.api_key.strip()
    if session.result.needs_credential:
        session.reset()
    return ApiKeyResponse(
        credential_configured=session.credential_configured(
            get_env_api_key() is not None
        )
    )


# ============================================================================
# Generation Endpoints
# ============================================================================


@app.post("/sessions/{session_id}/generate", response_model=GenerateResponse)
async def generate_face_swap(
    session_id: str,
    request: GenerateRequest | None = None,
):
    """Generate a face swap from the session's images and options."""
    session = get_session_or_404(session_id)

    if session.phase == GenerationPhase.PENDING:
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    if request is not None:
        if request.options is not None:
            session.options = request.options
        if request.api_key is not None:
            session.api_key = request.api_key.strip()

    try:
        result = await generation_service.generate(session)
    except ImagesNotReadyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return GenerateResponse.from_result(result)


@app.get("/sessions/{session_id}/result", response_model=GenerateResponse)
async def get_result(session_id: str):
    """Get the session's latest generation result."""
    session = get_session_or_404(session_id)
    return GenerateResponse.from_result(session.result)


# ============================================================================
# Download Endpoints
# ============================================================================


@app.get("/sessions/{session_id}/download")
async def download_result(session_id: str):
    """Download the generated image as a PNG file."""
    session = get_session_or_404(session_id)

    if session.result.image_url is None:
        raise HTTPException(status_code=404, detail="No generated image")

    content, _ = decode_data_uri(session.result.image_url)
    return Response(
        content=content,
        media_type="image/png",
        headers={
            "Content-Disposition": f'attachment; filename="{download_filename()}"'
        },
    )


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Face Swap Studio API",
        "docs": "/docs",
    }
