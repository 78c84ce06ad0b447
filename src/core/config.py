"""Configuration settings for Face Swap Studio."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

# =============================================================================
# Path Configuration (always relative to project structure)
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_FILE = PROJECT_ROOT / "configs" / "config.yaml"

DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"


# =============================================================================
# Config Loading
# =============================================================================


def load_config() -> dict[str, Any]:
    """Load configuration from config.yaml."""
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_config(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'api.port')."""
    config = load_config()
    keys = key.split(".")
    value = config
    for k in keys:
        if isinstance(value, dict):
            value = value.get(k)
        else:
            return default
    return value if value is not None else default


# =============================================================================
# Convenience accessors
# =============================================================================


def get_api_host() -> str:
    return get_config("api.host", "0.0.0.0")


def get_api_port() -> int:
    return get_config("api.port", 8000)


def get_api_base_url() -> str:
    return f"http://localhost:{get_api_port()}"


def get_model_id() -> str:
    return get_config("model.id", "gemini-3-pro-image-preview")


def get_api_key_env_var() -> str:
    return get_config("credentials.env_var", "GEMINI_API_KEY")


def get_env_api_key() -> str | None:
    """Return the deployment-provided API key, if any."""
    value = os.getenv(get_api_key_env_var(), "").strip()
    return value or None


def get_session_max_age_hours() -> int:
    return get_config("sessions.max_age_hours", 24)


def get_request_timeout() -> int:
    return get_config("timeouts.request", 300)


def get_allowed_image_extensions() -> set[str]:
    extensions = get_config("uploads.allowed_extensions", [])
    return (
        set(extensions)
        if extensions
        else {".png", ".jpg", ".jpeg", ".webp", ".heic", ".heif"}
    )


def get_allowed_mime_types() -> set[str]:
    mime_types = get_config("uploads.allowed_mime_types", [])
    return (
        set(mime_types)
        if mime_types
        else {"image/png", "image/jpeg", "image/webp", "image/heic", "image/heif"}
    )


def get_max_image_size_mb() -> int:
    return get_config("uploads.max_image_size_mb", 10)


def get_log_level() -> str:
    return str(get_config("logging.level", "INFO")).upper()


def configure_logging() -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
