"""`highlight-ai listen`: run the pipeline from a global hotkey."""

import argparse
import asyncio
import logging
import sys

from highlight_ai.cli.shared import configure_logging, format_heading
from highlight_ai.pipeline import Pipeline, PresentationRequest
from highlight_ai.prompt import ACTIONS

log = logging.getLogger(__name__)

PREVIEW_LENGTH = 80


def default_hotkey() -> str:
    if sys.platform == "darwin":
        return "<cmd>+<shift>+a"
    return "<ctrl>+<shift>+a"


class TerminalPresenter:
    """Presents each cycle as plain text on the terminal."""

    def __init__(self, action: str | None = None, instruction: str | None = None) -> None:
        self._action = action
        self._instruction = instruction

    def notify_no_selection(self) -> None:
        print("No text selected. Select text first, then press the hotkey.", file=sys.stderr)

    async def present(self, selection: str) -> PresentationRequest | None:
        preview = selection.replace("\n", " ")
        if len(preview) > PREVIEW_LENGTH:
            preview = preview[:PREVIEW_LENGTH] + "..."
        print(format_heading(f"Selection: {preview}"))
        return PresentationRequest(action=self._action, instruction=self._instruction)

    def show_result(self, text: str) -> None:
        print(f"\n{text}\n")

    def show_error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)

    def close(self) -> None:
        pass


async def listen(pipeline: Pipeline, hotkey: str) -> None:
    """Trigger the pipeline on every hotkey press until cancelled."""
    from pynput import keyboard

    loop = asyncio.get_running_loop()
    tasks: set[asyncio.Task] = set()

    def start_cycle() -> None:
        task = loop.create_task(pipeline.trigger())
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    def on_activate() -> None:
        # pynput calls this from its listener thread.
        loop.call_soon_threadsafe(start_cycle)

    listener = keyboard.GlobalHotKeys({hotkey: on_activate})
    listener.start()
    log.debug("listening for %s", hotkey)
    try:
        await asyncio.Event().wait()
    finally:
        listener.stop()


def run(argv: list[str]) -> int:
    """Execute listen mode."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai listen",
        description="Wait for a global hotkey, then ask the model about the selection",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--hotkey",
        default=default_hotkey(),
        help="Hotkey in pynput format (default: %(default)s)",
    )
    parser.add_argument("-a", "--action", choices=list(ACTIONS), help="Action to apply")
    parser.add_argument("instruction", nargs="*", help="Custom instruction; overrides --action")
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    presenter = TerminalPresenter(args.action, " ".join(args.instruction) or None)
    pipeline = Pipeline(presenter)
    print(f"Select text anywhere and press {args.hotkey}. Ctrl+C to quit.")
    try:
        asyncio.run(listen(pipeline, args.hotkey))
    except ImportError as e:
        print(f"Error: global hotkeys are unavailable here ({e})", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("")
    return 0
