"""
neo4j-admin - Main entry point.

Usage:
    neo4j-admin dump [--database=<name>] --to=<destination-path>
    neo4j-admin help [<command>]

Configuration comes from the environment (NEO4J_HOME, NEO4J_CONF,
NEO4J_DEBUG) and from neo4j.conf. See config.py.

Exit status:
    0   success
    1   the command failed (CommandFailed)
    64  incorrect usage
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from .commands import DumpCommandProvider
from .config import AdminEnvironment
from .errors import CommandFailed, IncorrectUsage
from .usage import render_command_usage, render_tool_usage

logger = logging.getLogger(__name__)

SCRIPT_NAME = "neo4j-admin"

STATUS_SUCCESS = 0
STATUS_FAILED = 1
STATUS_USAGE = 64

PROVIDERS = {provider.name: provider for provider in (DumpCommandProvider(),)}


def setup_logging(debug: bool) -> None:
    """Configure logging for a command-line run.

    Args:
        debug: Log at DEBUG instead of INFO
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def run(
    argv: Sequence[str],
    environment: AdminEnvironment,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Dispatch ``argv`` to a command and return the exit status.

    Args:
        argv: Arguments after the script name
        environment: NEO4J_* environment
        stdout: Stream for help output (default: sys.stdout)
        stderr: Stream for errors (default: sys.stderr)
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if not argv or argv[0] in ("help", "--help", "-h"):
        topic = argv[1] if len(argv) > 1 else None
        if topic is None:
            print(render_tool_usage(SCRIPT_NAME, list(PROVIDERS.values())), end="", file=stdout)
            return STATUS_SUCCESS
        if topic not in PROVIDERS:
            print(f"unrecognized command: {topic}", file=stderr)
            return STATUS_USAGE
        print(render_command_usage(SCRIPT_NAME, PROVIDERS[topic]), end="", file=stdout)
        return STATUS_SUCCESS

    name, args = argv[0], list(argv[1:])
    provider = PROVIDERS.get(name)
    if provider is None:
        print(f"unrecognized command: {name}", file=stderr)
        print(render_tool_usage(SCRIPT_NAME, list(PROVIDERS.values())), end="", file=stderr)
        return STATUS_USAGE

    if "--help" in args or "-h" in args:
        print(render_command_usage(SCRIPT_NAME, provider), end="", file=stdout)
        return STATUS_SUCCESS

    command = provider.create(environment.home, environment.config_dir)
    try:
        command.execute(args)
    except IncorrectUsage as e:
        print(e.message, file=stderr)
        print(render_command_usage(SCRIPT_NAME, provider), end="", file=stderr)
        return STATUS_USAGE
    except CommandFailed as e:
        if environment.debug_enabled:
            logger.error("Command failed", exc_info=True)
        print(f"command failed: {e.message}", file=stderr)
        return STATUS_FAILED

    return STATUS_SUCCESS


def main() -> None:
    """CLI entry point for neo4j-admin."""
    environment = AdminEnvironment()
    setup_logging(environment.debug_enabled)
    sys.exit(run(sys.argv[1:], environment))


if __name__ == "__main__":
    main()
