"""Streamlit frontend for Face Swap Studio."""

import requests
import streamlit as st

from core.config import get_api_base_url, get_request_timeout
from core.images import decode_data_uri, download_filename

# Configuration
API_BASE_URL = get_api_base_url()

# Page configuration
st.set_page_config(
    page_title="Gemini Face Swap Pro",
    page_icon="🎭",
    layout="wide",
)


# ============================================================================
# Session Management
# ============================================================================


def init_session():
    """Initialize a new API session."""
    try:
        response = requests.post(f"{API_BASE_URL}/sessions", timeout=10)
        if response.status_code == 200:
            return response.json()
        return None
    except requests.exceptions.RequestException:
        return None


def get_or_create_session():
    """Get existing session or create new one."""
    if "api_session" not in st.session_state:
        session_data = init_session()
        if session_data:
            st.session_state.api_session = session_data
            st.session_state.uploaded = {"source": None, "target": None}
            st.session_state.result = None
            st.session_state.show_key_config = False
        else:
            st.error("Failed to connect to API server. Is it running?")
            st.stop()
    return st.session_state.api_session


# ============================================================================
# API Functions
# ============================================================================


def fetch_options():
    """Get the selectable option values."""
    try:
        response = requests.get(f"{API_BASE_URL}/options", timeout=10)
        if response.status_code == 200:
            return response.json()
        return None
    except requests.exceptions.RequestException:
        return None


def fetch_session_state(session_id: str):
    try:
        response = requests.get(f"{API_BASE_URL}/sessions/{session_id}", timeout=10)
        if response.status_code == 200:
            return response.json()
        return None
    except requests.exceptions.RequestException:
        return None


def upload_image(session_id: str, role: str, file):
    """Upload the source or target image."""
    try:
        files = {"file": (file.name, file.getvalue(), file.type)}
        response = requests.put(
            f"{API_BASE_URL}/sessions/{session_id}/images/{role}",
            files=files,
            timeout=30,
        )

        if response.status_code == 200:
            return response.json()
        else:
            st.error(f"Upload failed: {response.json().get('detail', response.text)}")
            return None
    except requests.exceptions.RequestException as e:
        st.error(f"Upload error: {e}")
        return None


def fetch_image_preview(session_id: str, role: str):
    """Get the stored bytes of an uploaded image."""
    try:
        response = requests.get(
            f"{API_BASE_URL}/sessions/{session_id}/images/{role}/preview",
            timeout=10,
        )
        if response.status_code == 200:
            return response.content
        return None
    except requests.exceptions.RequestException:
        return None


def delete_image(session_id: str, role: str):
    """Remove an uploaded image."""
    try:
        response = requests.delete(
            f"{API_BASE_URL}/sessions/{session_id}/images/{role}",
            timeout=10,
        )
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


def save_api_key(session_id: str, api_key: str):
    try:
        response = requests.put(
            f"{API_BASE_URL}/sessions/{session_id}/api-key",
            json={"api_key": api_key},
            timeout=10,
        )
        if response.status_code == 200:
            return response.json()
        return None
    except requests.exceptions.RequestException:
        return None


def generate_face_swap(session_id: str, options: dict):
    """Request a face swap and return the result payload."""
    try:
        response = requests.post(
            f"{API_BASE_URL}/sessions/{session_id}/generate",
            json={"options": options},
            timeout=get_request_timeout(),
        )

        if response.status_code == 200:
            return response.json()
        detail = response.json().get("detail", response.text)
        return {"phase": "failed", "error": f"API error: {detail}"}
    except requests.exceptions.RequestException as e:
        return {"phase": "failed", "error": str(e)}


# ============================================================================
# UI Components
# ============================================================================


def render_sidebar(session_state: dict):
    """Render the sidebar with API key configuration."""
    with st.sidebar:
        st.header("🎭 Gemini Face Swap Pro")
        st.caption("Powered by Gemini 3 Pro Image")

        st.subheader("API Configuration")
        if session_state["credential_configured"]:
            st.success("API Key Configured")
        else:
            st.error("Enter API Key")

        if session_state["env_key_available"]:
            st.caption("A deployment key is available. A key entered here takes priority.")

        with st.expander(
            "Configure API Key",
            expanded=st.session_state.get("show_key_config", False)
            or not session_state["credential_configured"],
        ):
            api_key = st.text_input(
                "Google Gemini API Key",
                type="password",
                value=st.session_state.get("api_key", ""),
                help="Kept in memory for this session only, never stored",
                placeholder="AIza...",
            )
            if st.button("Save Key"):
                session = get_or_create_session()
                if save_api_key(session["session_id"], api_key) is not None:
                    st.session_state.api_key = api_key.strip()
                    st.session_state.show_key_config = False
                    st.session_state.result = None
                    st.rerun()


def render_uploader(session_id: str, role: str, label: str):
    """Render one image slot with preview."""
    uploaded_file = st.file_uploader(
        label,
        type=["png", "jpg", "jpeg", "webp", "heic", "heif"],
        key=f"uploader_{role}",
    )

    current = st.session_state.uploaded.get(role)
    if uploaded_file is None:
        if current is not None:
            delete_image(session_id, role)
            st.session_state.uploaded[role] = None
            st.session_state.result = None
        return

    file_key = (uploaded_file.name, uploaded_file.size)
    if current != file_key:
        if upload_image(session_id, role, uploaded_file):
            st.session_state.uploaded[role] = file_key
            st.session_state.result = None

    preview = fetch_image_preview(session_id, role)
    if preview is not None:
        st.image(preview, caption="Preview", use_container_width=True)


def render_option_picker(label: str, choices: list, default: str, key: str) -> str:
    values = [choice["value"] for choice in choices]
    labels = {
        choice["value"]: (
            f"{choice['label']} | {choice['description']}"
            if choice.get("description")
            else choice["label"]
        )
        for choice in choices
    }
    return st.radio(
        label,
        options=values,
        index=values.index(default) if default in values else 0,
        format_func=lambda v: labels[v],
        horizontal=True,
        key=key,
    )


def render_controls(session_id: str, catalog: dict):
    """Render the upload and option controls."""
    st.subheader("1. Upload Images")
    render_uploader(session_id, "source", "Source Face (The Face)")
    st.caption("swaps to")
    render_uploader(session_id, "target", "Target Body (The Scene)")

    st.subheader("2. Refine & Generate")
    defaults = catalog["defaults"]
    options = {
        "aspect_ratio": render_option_picker(
            "Aspect Ratio", catalog["aspect_ratios"], defaults["aspect_ratio"], "aspect_ratio"
        ),
        "image_size": render_option_picker(
            "Resolution (Quality)", catalog["image_sizes"], defaults["image_size"], "image_size"
        ),
        "skin_tone": render_option_picker(
            "Skin Tone", catalog["skin_tones"], defaults["skin_tone"], "skin_tone"
        ),
        "lighting_mode": render_option_picker(
            "Lighting", catalog["lighting_modes"], defaults["lighting_mode"], "lighting_mode"
        ),
        "face_scale": render_option_picker(
            "Face Scale", catalog["face_scales"], defaults["face_scale"], "face_scale"
        ),
        "instructions": st.text_area(
            "Additional Instructions (optional)",
            placeholder="e.g. Keep the target's glasses, add a slight smile...",
        ),
    }
    return options


def render_result():
    """Render the generated image, or the last error."""
    st.subheader("Result")
    result = st.session_state.get("result")

    if not result:
        st.info("Upload both images and press Generate to see the swap here.")
        return

    if result.get("phase") == "failed":
        st.error(result.get("error") or "An unexpected error occurred.")
        return

    if result.get("image_url"):
        image_bytes, mime_type = decode_data_uri(result["image_url"])
        st.image(image_bytes, use_container_width=True)
        st.download_button(
            label="⬇️ Download Image",
            data=image_bytes,
            file_name=download_filename(),
            mime=mime_type,
            type="primary",
        )


# ============================================================================
# Main App
# ============================================================================


def main():
    """Main application."""
    session = get_or_create_session()
    session_id = session["session_id"]

    catalog = fetch_options()
    session_state = fetch_session_state(session_id)
    if catalog is None or session_state is None:
        st.error("Failed to reach API server. Is it running?")
        st.stop()

    render_sidebar(session_state)

    left, right = st.columns([5, 7])
    with left:
        options = render_controls(session_id, catalog)
        ready = all(st.session_state.uploaded.values())
        if st.button("✨ Generate Swap", type="primary", disabled=not ready):
            if not session_state["credential_configured"]:
                st.session_state.show_key_config = True
                st.rerun()
            with st.spinner("Generating..."):
                result = generate_face_swap(session_id, options)
            st.session_state.result = result
            if result.get("needs_credential"):
                st.session_state.show_key_config = True
                st.rerun()

    with right:
        render_result()


if __name__ == "__main__":
    main()
