"""Command-line interface for highlight-ai."""

from highlight_ai.cli.app import entrypoint, main

__all__ = ["entrypoint", "main"]
