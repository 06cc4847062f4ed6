# src/makibot/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli import messages
from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.ports import InputSource
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("bye", "exit", "quit")


def run_console_loop(
    state: AppState,
    source: InputSource,
    emit: Callable[[str], None] = print,
    registry: CommandRegistry = command_registry,
) -> None:
    """
    Read one command at a time and print its reply.

    Each command runs to completion (including the save-file rewrite) before
    the next line is read. Ends on bye/exit/quit or end of input.
    """
    logger.info("Console connector started.")

    while True:
        try:
            user_input = source.read_line("> ")
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            emit("")
            break

        if user_input is None:
            logger.info("Console EOF received, exiting.")
            break

        user_input = user_input.strip()
        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed on %r.", user_input)
            reply = messages.error("Internal error while handling that command.")

        if reply is not None:
            emit(reply)

    emit(messages.goodbye())
    logger.info("Console connector finished.")
