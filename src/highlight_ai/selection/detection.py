"""Clipboard backend detection."""

import logging
import os
import shutil
import sys

from highlight_ai.errors import SelectionCaptureError
from highlight_ai.selection.backends import BACKENDS, ClipboardBackend

log = logging.getLogger(__name__)


def _classify_platform() -> str | None:
    """Return the backend kind for the running desktop session."""
    override = os.environ.get("HIGHLIGHT_AI_CLIPBOARD", "").strip().lower()
    if override:
        return override
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("linux") or "bsd" in sys.platform:
        if os.environ.get("WAYLAND_DISPLAY"):
            return "wayland"
        if os.environ.get("DISPLAY"):
            return "x11"
    return None


def detect_backend() -> ClipboardBackend:
    """Pick a clipboard backend for this platform and check its tools exist."""
    kind = _classify_platform()
    if kind is None:
        raise SelectionCaptureError(
            "No supported clipboard mechanism found. Run under macOS, X11 or Wayland, "
            "or set HIGHLIGHT_AI_CLIPBOARD to one of: " + ", ".join(sorted(BACKENDS))
        )
    backend_cls = BACKENDS.get(kind)
    if backend_cls is None:
        raise SelectionCaptureError(
            f"Unknown clipboard backend {kind!r}. Choose one of: " + ", ".join(sorted(BACKENDS))
        )

    missing = [tool for tool in backend_cls.required_tools if shutil.which(tool) is None]
    if missing:
        raise SelectionCaptureError(
            f"The {kind} clipboard backend needs {', '.join(missing)} on PATH"
        )
    log.debug("using %s clipboard backend", kind)
    return backend_cls()
