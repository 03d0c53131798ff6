# src/tasker/connectors/console_connector.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def run_console_loop(state: AppState, *, input_fn: InputFn = input) -> None:
    """
    Interactive presentation adapter for the task store.

    Each line is one gesture: plain text adds a task (like submitting the input
    field), "/..." runs a command. The list is re-rendered after any line that
    changed it, driven by the store's change notification.
    """
    logger.info("Console connector started (tasks=%d).", len(state.store))

    # Bug report outcomes arrive from a background thread.
    print_lock = threading.Lock()
    dirty = False

    def emit(text: str) -> None:
        with print_lock:
            print(f"[{_ts_local()}] {text}", flush=True)

    def on_change(_snapshot) -> None:
        nonlocal dirty
        dirty = True

    unsubscribe = state.store.subscribe(on_change)

    emit("Type a task and press Enter to add it. Use /help for commands, /exit to quit.")
    emit(render_task_list(state.store.tasks))

    try:
        while True:
            try:
                line = input_fn("> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not line:
                continue

            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            dirty = False
            try:
                reply = command_registry.handle(state, line, emit=emit)
                if reply is None:
                    state.store.draft = line
                    state.store.submit_draft()
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply:
                emit(reply)
            if dirty:
                emit(render_task_list(state.store.tasks))
    finally:
        unsubscribe()
        logger.info("Console connector finished.")
