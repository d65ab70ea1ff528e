# src/taskkeeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either runs one command given on
the command line (e.g. `taskkeeper /list open`) or starts the console loop.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..storage.kv_store import StorageWriteError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()

    # choose console log level from settings.log_level (console stays at WARNING+ unless DEBUG)
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    console_level = logging.DEBUG if file_level <= logging.DEBUG else logging.WARNING

    setup_logging(log_dir=settings.data_dir, console_level=console_level, file_level=file_level)
    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except StorageWriteError:
        logger.exception("Cannot initialize the task list.")
        print("Cannot initialize the task list (storage error). See the log for details.", file=sys.stderr)
        return 1

    if argv:
        line = " ".join(argv)
        if not line.startswith("/"):
            line = "/" + line
        reply = command_registry.handle(state, line)
        if reply is not None:
            print(reply)
        return 0

    run_console_loop(state)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
