"""Shared CLI helpers."""

import logging
import os
import sys

from highlight_ai.constants import BOLD, CYAN, GREEN, RED, RESET


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


def supports_color() -> bool:
    """Return whether ANSI color output should be used."""
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return sys.stdout.isatty()


def format_heading(text: str) -> str:
    if supports_color():
        return f"{BOLD}{CYAN}{text}{RESET}"
    return text


def format_status(ok: bool, text: str) -> str:
    """Return a check line prefixed with a pass/fail mark."""
    mark = "✔" if ok else "✘"
    if supports_color():
        color = GREEN if ok else RED
        return f"{color}{mark}{RESET} {text}"
    return f"{mark} {text}"
