# src/tasker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import cast

from ..bugreport.reporter import EnvironmentInfo, ReportOutcome
from ..core.state import AppState
from ..prefs.colors import ACCENT_PALETTE, RGBColor
from ..prefs.layout import LayoutMetrics, popover_size
from ..prefs.record import AddTaskPosition, ColorScheme, Theme
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /done, /mv, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other text adds a task.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "No tasks yet!"
    lines = []
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.is_completed else " "
        lines.append(f"{i:>2}. [{mark}] {task.title}")
    return "\n".join(lines)


def _resolve(state: AppState, token: str) -> Task | None:
    """Map a 1-based display number to the task shown there."""
    try:
        n = int(token)
    except ValueError:
        return None
    tasks = state.store.tasks
    if not 1 <= n <= len(tasks):
        return None
    return tasks[n - 1]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.store.tasks)


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.store.add(" ".join(args))
    if task is None:
        return "Nothing to add."
    return f"Added: {task.title}"


def cmd_done(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args[0]) if args else None
    if task is None:
        return "Usage: /done N (N = task number from /list)."
    state.store.toggle_completion(task.id)
    return f"{'Done' if task.is_completed else 'Not done'}: {task.title}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args[0]) if args else None
    if task is None:
        return "Usage: /rm N (N = task number from /list)."
    state.store.delete(task.id)
    return f"Deleted: {task.title}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    task = _resolve(state, args[0]) if args else None
    if task is None:
        return "Usage: /edit N new title"
    if not state.store.edit_title(task.id, " ".join(args[1:])):
        return f"Title unchanged: {task.title}"
    return f"Renamed: {task.title}"


def cmd_mv(state: AppState, args: list[str]) -> str:
    """
    /mv N above M  -> place task N just above task M
    /mv N below M  -> place task N just below task M
    """
    usage = "Usage: /mv N above|below M"
    if len(args) != 3 or args[1].lower() not in ("above", "below"):
        return usage
    source = _resolve(state, args[0])
    target = _resolve(state, args[2])
    if source is None or target is None:
        return usage
    if not state.store.move(source.id, target.id, place_above=args[1].lower() == "above"):
        return "Nothing to move."
    return f"Moved: {source.title}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = state.store.clear_completed()
    if not removed:
        return "No completed tasks."
    return f"Removed {removed} completed task(s)."


def cmd_clearall(state: AppState, args: list[str]) -> str:
    if not state.store.tasks:
        return "No tasks yet!"
    if not args or args[0].lower() not in _ON:
        return "This removes every task and cannot be undone. Use /clearall yes to confirm."
    removed = state.store.clear_all()
    return f"Removed {removed} task(s)."


def _settings_summary(state: AppState) -> str:
    s = state.settings
    width, height = popover_size(len(state.store), LayoutMetrics.for_font_size(s.font_size))
    return (
        "Settings:\n"
        f"  font      : {s.font_size:g}\n"
        f"  accent    : {s.accent_color.to_hex()}\n"
        f"  theme     : {s.theme.value}\n"
        f"  scheme    : {s.color_scheme.value}\n"
        f"  position  : {s.add_task_position.name.lower()}\n"
        f"  retain    : {'on' if s.retain_tasks_on_close else 'off'}\n"
        f"  window    : {width:.0f}x{height:.0f}"
    )


def cmd_settings(state: AppState, args: list[str]) -> str:
    """
    /settings                 -> show settings
    /settings font 14         -> font size (10..30)
    /settings accent #FF9500  -> accent color (hex or palette name)
    /settings theme dark      -> system | light | dark
    /settings scheme dark     -> light | dark
    /settings position bottom -> where new tasks go (top | bottom)
    /settings retain off      -> keep tasks between runs (on | off)
    """
    if not args:
        return _settings_summary(state)
    if len(args) != 2:
        return "Usage: /settings [font|accent|theme|scheme|position|retain] VALUE"

    s = state.settings
    field, value = args[0].lower(), args[1]

    if field == "font":
        try:
            s.font_size = float(value)
        except ValueError:
            return "Font size must be a number."
    elif field == "accent":
        color = ACCENT_PALETTE.get(value.lower()) or RGBColor.parse(value)
        if color is None:
            names = ", ".join(ACCENT_PALETTE)
            return f"Accent must be #RRGGBB or one of: {names}."
        s.accent_color = color
    elif field == "theme":
        if value.lower() not in {t.value for t in Theme}:
            return "Theme must be system, light or dark."
        s.theme = Theme(value.lower())
    elif field == "scheme":
        if value.lower() not in {c.value for c in ColorScheme}:
            return "Scheme must be light or dark."
        s.color_scheme = ColorScheme(value.lower())
    elif field == "position":
        if value.upper() not in AddTaskPosition.__members__:
            return "Position must be top or bottom."
        s.add_task_position = AddTaskPosition[value.upper()]
    elif field == "retain":
        if value.lower() in _ON:
            s.retain_tasks_on_close = True
        elif value.lower() in _OFF:
            s.retain_tasks_on_close = False
        else:
            return "Use /settings retain on or /settings retain off."
    else:
        return f"Unknown setting: {field}."

    return _settings_summary(state)


def cmd_bug(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    description = " ".join(args).strip()
    if not description:
        return "Usage: /bug what went wrong"

    def _done(outcome: ReportOutcome) -> None:
        if emit is not None:
            emit(f"[{outcome.title}] {outcome.message}")

    logger.debug("Bug report requested (%d chars)", len(description))
    env = EnvironmentInfo.from_config(state.config)
    state.reporter.send_in_background(description, env, on_done=_done)
    return "Sending bug report..."


def cmd_save(state: AppState, args: list[str]) -> str:
    state.autosaver.checkpoint()
    if not state.settings.retain_tasks_on_close:
        return "Settings saved. Tasks are not kept between runs (/settings retain on)."
    return "Saved."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add title.")
registry.register("done", cmd_done, help_text="Toggle completion: /done N.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm N.", aliases=["del"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit N new title.")
registry.register("mv", cmd_mv, help_text="Reorder: /mv N above|below M.", aliases=["move"])
registry.register("clear", cmd_clear, help_text="Remove completed tasks.")
registry.register("clearall", cmd_clearall, help_text="Remove every task: /clearall yes.")
registry.register("settings", cmd_settings, help_text="Show or change settings: /settings FIELD VALUE.")
registry.register("bug", cmd_bug, help_text="Send a bug report: /bug description.")
registry.register("save", cmd_save, help_text="Save now.")
