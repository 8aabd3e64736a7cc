"""Platform clipboard and synthetic-copy backends.

Every external process is started from an argument list, never through a
shell. The macOS restore step is the one place where clipboard content is
embedded in a script (AppleScript has no argv channel for ``set the
clipboard``); that text goes through ``escape_applescript_string`` first.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from highlight_ai.errors import SelectionCaptureError

log = logging.getLogger(__name__)

MACOS_COPY_SCRIPT = 'tell application "System Events" to keystroke "c" using command down'

_APPLESCRIPT_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


def escape_applescript_string(text: str) -> str:
    """Escape text for use inside a double-quoted AppleScript string literal."""
    for raw, escaped in _APPLESCRIPT_ESCAPES:
        text = text.replace(raw, escaped)
    return text


async def run_process(
    argv: list[str], input_text: str | None = None, *, capture_output: bool = True
) -> str:
    """Run an external command and return its decoded stdout.

    Raises ``SelectionCaptureError`` when the command cannot be started or
    exits non-zero. With ``capture_output=False`` stdout and stderr are
    discarded; clipboard writers such as ``xclip`` and ``wl-copy`` keep a
    forked child holding the output pipes open.
    """
    output = asyncio.subprocess.PIPE if capture_output else asyncio.subprocess.DEVNULL
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
            stdout=output,
            stderr=output,
        )
    except OSError as e:
        raise SelectionCaptureError(f"could not start {argv[0]}: {e}") from e

    payload = input_text.encode("utf-8") if input_text is not None else None
    stdout, stderr = await proc.communicate(payload)
    if proc.returncode != 0:
        message = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
        raise SelectionCaptureError(
            f"{argv[0]} exited with code {proc.returncode}" + (f": {message}" if message else "")
        )
    return stdout.decode("utf-8", errors="replace") if stdout else ""


class ClipboardBackend(ABC):
    """Read and write the system clipboard and send the platform copy shortcut."""

    name = "abstract"
    required_tools: tuple[str, ...] = ()

    @abstractmethod
    async def read(self) -> str:
        """Return the current clipboard text."""

    @abstractmethod
    async def write(self, text: str) -> None:
        """Replace the clipboard content with text."""

    @abstractmethod
    async def clear(self) -> None:
        """Empty the clipboard."""

    @abstractmethod
    async def send_copy(self) -> None:
        """Send the platform copy shortcut to the focused application."""


class MacOSBackend(ClipboardBackend):
    name = "macos"
    required_tools = ("pbpaste", "osascript")

    async def read(self) -> str:
        return await run_process(["pbpaste"])

    async def write(self, text: str) -> None:
        script = f'set the clipboard to "{escape_applescript_string(text)}"'
        # Script goes on stdin; large clipboards would overflow the argument list.
        await run_process(["osascript", "-"], script)

    async def clear(self) -> None:
        await run_process(["osascript", "-e", 'set the clipboard to ""'])

    async def send_copy(self) -> None:
        await run_process(["osascript", "-e", MACOS_COPY_SCRIPT])


class X11Backend(ClipboardBackend):
    name = "x11"
    required_tools = ("xclip", "xdotool")

    async def read(self) -> str:
        return await run_process(["xclip", "-selection", "clipboard", "-o"])

    async def write(self, text: str) -> None:
        await run_process(
            ["xclip", "-selection", "clipboard", "-i"], text, capture_output=False
        )

    async def clear(self) -> None:
        await self.write("")

    async def send_copy(self) -> None:
        await run_process(["xdotool", "key", "--clearmodifiers", "ctrl+c"])


class WaylandBackend(ClipboardBackend):
    name = "wayland"
    required_tools = ("wl-paste", "wl-copy", "wtype")

    async def read(self) -> str:
        return await run_process(["wl-paste", "--no-newline"])

    async def write(self, text: str) -> None:
        await run_process(["wl-copy"], text, capture_output=False)

    async def clear(self) -> None:
        await run_process(["wl-copy", "--clear"], capture_output=False)

    async def send_copy(self) -> None:
        await run_process(["wtype", "-M", "ctrl", "c", "-m", "ctrl"])


BACKENDS: dict[str, type[ClipboardBackend]] = {
    MacOSBackend.name: MacOSBackend,
    X11Backend.name: X11Backend,
    WaylandBackend.name: WaylandBackend,
}
