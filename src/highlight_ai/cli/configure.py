"""`highlight-ai configure` command implementation."""

import argparse
import sys

from highlight_ai.cli.shared import configure_logging
from highlight_ai.config import CONFIG_FILE, load_config, save_config
from highlight_ai.errors import ConfigIOError


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the configure command."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai configure",
        description="Configure the inference endpoint",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--base-url",
        help="Base URL of the chat-completions server (example: http://localhost:1234/v1)",
    )
    parser.add_argument("--model-name", help="Model identifier (example: qwen/qwen3-4b-2507)")
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the current configuration without changing it",
    )
    return parser


def _print_config(base_url: str, model_name: str) -> None:
    print(f"  baseURL: {base_url}")
    print(f"  modelName: {model_name}")


def run(argv: list[str]) -> int:
    """Execute the configure command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    existing = load_config()
    if args.show or (args.base_url is None and args.model_name is None):
        print(f"Configuration in {CONFIG_FILE}")
        _print_config(existing.base_url, existing.model_name)
        return 0

    candidate = existing.to_record()
    if args.base_url is not None:
        candidate["baseURL"] = args.base_url
    if args.model_name is not None:
        candidate["modelName"] = args.model_name

    try:
        updated = save_config(candidate)
    except ConfigIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nConfiguration saved to {CONFIG_FILE}")
    _print_config(updated.base_url, updated.model_name)
    print("")
    return 0
