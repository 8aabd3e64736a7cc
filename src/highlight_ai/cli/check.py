"""`highlight-ai check` command implementation."""

import argparse
import asyncio

from highlight_ai.cli.shared import configure_logging, format_heading, format_status
from highlight_ai.client import check_setup
from highlight_ai.config import load_config


def run(argv: list[str]) -> int:
    """Check that the inference server is up and the configured model answers."""
    parser = argparse.ArgumentParser(
        prog="highlight-ai check",
        description="Verify the inference server and model configuration",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    config = load_config()
    print(format_heading(f"Checking {config.base_url} with model {config.model_name}"))
    results = asyncio.run(check_setup(config))
    for result in results:
        print(f"  {format_status(result.ok, result.message)}")

    if len(results) == 2 and all(result.ok for result in results):
        print("\nAll checks passed.")
        return 0
    return 1
