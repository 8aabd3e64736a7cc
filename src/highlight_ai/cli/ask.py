"""One-shot `ask`, `capture` and `actions` commands."""

import argparse
import asyncio
import sys

from highlight_ai import __version__
from highlight_ai.cli.shared import configure_logging
from highlight_ai.client import LMClient
from highlight_ai.config import load_config
from highlight_ai.errors import CompletionError
from highlight_ai.prompt import ACTIONS, DEFAULT_ACTION, build_prompt
from highlight_ai.selection import SelectionCapture
from highlight_ai.wait_indicator import WaitIndicator

NO_SELECTION_MESSAGE = "No text selected. Select some text first, then try again."


def build_parser() -> argparse.ArgumentParser:
    """Build parser for one-shot ask mode."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai",
        description="Ask a local LLM about the currently selected text",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-a",
        "--action",
        choices=list(ACTIONS),
        help=f"Built-in action to apply to the selection (default: {DEFAULT_ACTION})",
    )
    parser.add_argument(
        "--text",
        help="Use this text instead of capturing the current selection",
    )
    parser.add_argument(
        "instruction",
        nargs="*",
        help="Custom instruction; overrides --action",
    )
    return parser


async def _read_selection() -> str:
    capturer = SelectionCapture()
    selection = await capturer.capture()
    await capturer.wait_for_restore()
    return selection


async def _ask(client: LMClient, selection: str, action: str | None, instruction: str) -> str:
    prompt = build_prompt(selection, action, instruction)
    with WaitIndicator(f"Asking {client.model_name}..."):
        return await client.send_chat(prompt)


def run(argv: list[str]) -> int:
    """Execute one-shot ask mode."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    selection = args.text if args.text is not None else asyncio.run(_read_selection())
    if not selection.strip():
        print(NO_SELECTION_MESSAGE, file=sys.stderr)
        return 1

    client = LMClient(load_config())
    try:
        reply = asyncio.run(_ask(client, selection, args.action, " ".join(args.instruction)))
    except (CompletionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(reply)
    return 0


def run_capture(argv: list[str]) -> int:
    """Print the captured selection."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai capture",
        description="Capture and print the currently selected text",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    selection = asyncio.run(_read_selection())
    if not selection:
        print(NO_SELECTION_MESSAGE, file=sys.stderr)
        return 1
    print(selection)
    return 0


def run_actions(argv: list[str]) -> int:
    """List the built-in actions."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai actions",
        description="List the built-in actions",
    )
    parser.parse_args(argv)
    for name, instruction in ACTIONS.items():
        print(f"  {name:<14} {instruction}")
    return 0
