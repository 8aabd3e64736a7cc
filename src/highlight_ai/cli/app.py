"""Top-level CLI router."""

import sys

from . import ask as ask_cmd
from . import check as check_cmd
from . import configure as configure_cmd
from . import listen as listen_cmd

SUBCOMMANDS = {
    "actions": ask_cmd.run_actions,
    "ask": ask_cmd.run,
    "capture": ask_cmd.run_capture,
    "check": check_cmd.run,
    "configure": configure_cmd.run,
    "listen": listen_cmd.run,
}


def main(argv: list[str] | None = None) -> int:
    """Route to a subcommand; anything else is treated as `ask`."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in SUBCOMMANDS:
        return SUBCOMMANDS[args[0]](args[1:])
    return ask_cmd.run(args)


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
