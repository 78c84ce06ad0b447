"""Core module for Face Swap Studio business logic."""

from core.config import (
    DEFAULT_OUTPUT_DIR,
    PROJECT_ROOT,
    get_api_base_url,
    get_api_host,
    get_api_port,
    get_model_id,
)

__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "PROJECT_ROOT",
    "get_api_base_url",
    "get_api_host",
    "get_api_port",
    "get_model_id",
]
