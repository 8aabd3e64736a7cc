"""Model package for highlight-ai."""

from highlight_ai.models.app_config import DEFAULT_BASE_URL, DEFAULT_MODEL_NAME, AppConfig
from highlight_ai.models.chat import ChatMessage

__all__ = [
    "AppConfig",
    "ChatMessage",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL_NAME",
]
