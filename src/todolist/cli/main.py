# src/todolist/cli/main.py

"""
CLI entrypoint.

Initializes logging, restores the task list, then runs the console REPL in the
main thread until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        run_console_loop(state)
    except Exception:
        logger.exception("Console loop crashed.")
        raise
    finally:
        # Every mutation already saved itself; nothing is flushed here.
        logger.info("Bye. %d tasks in %s", len(state.store), state.gateway.path)


if __name__ == "__main__":
    main()
