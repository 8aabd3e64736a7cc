"""System-wide text selection capture."""

from highlight_ai.selection.backends import (
    BACKENDS,
    ClipboardBackend,
    MacOSBackend,
    WaylandBackend,
    X11Backend,
    escape_applescript_string,
)
from highlight_ai.selection.capture import SETTLE_DELAY_SECONDS, SelectionCapture, capture_selection
from highlight_ai.selection.detection import detect_backend

__all__ = [
    "BACKENDS",
    "ClipboardBackend",
    "MacOSBackend",
    "SETTLE_DELAY_SECONDS",
    "SelectionCapture",
    "WaylandBackend",
    "X11Backend",
    "capture_selection",
    "detect_backend",
    "escape_applescript_string",
]
