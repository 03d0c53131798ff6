# src/tasker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the console adapter, and saves on
exit (the close checkpoint).
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_config
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()

    level_name = str(getattr(config, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=config.log_dir, file_level=file_level)

    logger.info("Starting %s %s (build %s)...", config.app_name, config.app_version, config.build_number)

    state = create_initial_state(config=config)

    try:
        # SIGTERM ends the console like Ctrl+C, so the final save still runs.
        signal.signal(signal.SIGTERM, signal.default_int_handler)
    except (ValueError, OSError, AttributeError):
        # Not on the main thread, or no SIGTERM on this platform.
        logger.debug("SIGTERM handler not installed.", exc_info=True)

    try:
        run_console_loop(state)
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
