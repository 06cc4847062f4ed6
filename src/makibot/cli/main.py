# src/makibot/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, asks for the startup overrides, loads
the save file, then runs the console loop in the main thread.
"""

from __future__ import annotations

import logging

from ..cli import messages
from ..cli.bootstrap import create_initial_state, load_task_list
from ..cli.prompts import prompt_save_file, prompt_timezone
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.ports import InputSource, StdinInput
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(source: InputSource | None = None) -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    source = source or StdinInput()
    state = create_initial_state(settings=settings)

    if settings.prompt_on_start:
        state.display_zone = prompt_timezone(source, print, state.display_zone)
        state.store.path = prompt_save_file(source, print, state.store.path)

    result = load_task_list(state)
    print(messages.load_summary(result))
    print(messages.greeting(state.app_name))

    run_console_loop(state, source)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
