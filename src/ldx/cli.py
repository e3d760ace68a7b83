"""Command line interface: ``ldx <command> [args...]``."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Sequence

from ldx.command_runner import CommandError, CommandRunner, Invocation
from ldx.config import CONFIG_FILE_NAME, ConfigError, load_rules

logger = logging.getLogger(__name__)

BANNER = "Thank you for using LDX! Collaborate or report issues at https://github.com/leog/ldx \n"
LOG_LEVEL_ENV = "LDX_LOG_LEVEL"


def configure_logging() -> None:
    """Send log records to stderr at the level named by LDX_LOG_LEVEL."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the wrapped command. ``argv`` excludes the program name."""
    configure_logging()
    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        rules = load_rules()
    except ConfigError as e:
        logger.debug("Config load failed: %s", e)
        print(f"Oops, no {CONFIG_FILE_NAME} file found!", file=sys.stderr)
        return 1

    print(BANNER)
    sys.stdout.flush()

    runner = CommandRunner(Invocation(tuple(argv)), rules)
    try:
        asyncio.run(runner.run())
    except CommandError as e:
        print(f"Error executing command: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, child process terminated")
        return 130

    print("Command executed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
