"""Capture the current text selection through the clipboard.

The clipboard is borrowed: its content is read, the platform copy shortcut
is sent, the clipboard is read again after a fixed settling delay, and the
original content is put back in the background. The delay is an empirical
trade-off; the OS applies the copy asynchronously and nothing here checks
that it has landed.
"""

import asyncio
import logging

from highlight_ai.errors import SelectionCaptureError
from highlight_ai.selection.backends import ClipboardBackend
from highlight_ai.selection.detection import detect_backend

log = logging.getLogger(__name__)

SETTLE_DELAY_SECONDS = 0.25


class SelectionCapture:
    """Capture the foreground application's selection.

    Calls must not overlap: a second capture started before the previous
    restore finishes would snapshot the wrong clipboard content. The
    caller serialises triggers.
    """

    def __init__(
        self,
        backend: ClipboardBackend | None = None,
        *,
        settle_delay: float = SETTLE_DELAY_SECONDS,
    ) -> None:
        self._backend = backend
        self._settle_delay = settle_delay
        self._restore_tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_restores(self) -> int:
        return len(self._restore_tasks)

    async def capture(self) -> str:
        """Return the trimmed selected text, or "" when nothing could be captured."""
        try:
            if self._backend is None:
                self._backend = detect_backend()
            return await self._capture(self._backend)
        except Exception as e:
            log.warning("selection capture failed: %s", e)
            return ""

    async def _capture(self, backend: ClipboardBackend) -> str:
        try:
            prior_content = await backend.read()
        except SelectionCaptureError as e:
            log.debug("clipboard read before copy failed: %s", e)
            prior_content = ""

        await backend.send_copy()
        await asyncio.sleep(self._settle_delay)

        try:
            selected = await backend.read()
        except SelectionCaptureError as e:
            log.debug("clipboard read after copy failed: %s", e)
            selected = ""

        self._schedule_restore(backend, prior_content)

        text = selected.strip()
        log.debug("selected text length: %d", len(text))
        return text

    def _schedule_restore(self, backend: ClipboardBackend, prior_content: str) -> None:
        task = asyncio.create_task(self._restore(backend, prior_content))
        self._restore_tasks.add(task)
        task.add_done_callback(self._restore_tasks.discard)

    async def _restore(self, backend: ClipboardBackend, prior_content: str) -> None:
        try:
            if prior_content:
                await backend.write(prior_content)
            else:
                await backend.clear()
        except Exception as e:
            log.debug("clipboard restore failed: %s", e)

    async def wait_for_restore(self) -> None:
        """Wait until every scheduled clipboard restore has finished."""
        if self._restore_tasks:
            await asyncio.gather(*self._restore_tasks)


async def capture_selection(backend: ClipboardBackend | None = None) -> str:
    """Capture the selection once and wait for the clipboard to be restored."""
    capturer = SelectionCapture(backend)
    text = await capturer.capture()
    await capturer.wait_for_restore()
    return text
