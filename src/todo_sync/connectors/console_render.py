# src/todo_sync/connectors/console_render.py

from __future__ import annotations

from dataclasses import dataclass

from ..core.state import AppState, visible_tasks


@dataclass(frozen=True, slots=True)
class Palette:
    text: str
    muted: str
    accent: str
    reset: str = "\033[0m"


LIGHT = Palette(text="\033[30m", muted="\033[90m", accent="\033[34m")
DARK = Palette(text="\033[97m", muted="\033[37m", accent="\033[96m")
PLAIN = Palette(text="", muted="", accent="", reset="")


def palette_for(state: AppState, *, color: bool = True) -> Palette:
    if not color:
        return PLAIN
    return DARK if state.dark_mode else LIGHT


def render_state(state: AppState, *, color: bool = True) -> str:
    """
    Render the filtered list with 1-based row numbers.

    Row numbers index the *visible* list; commands like /done 2 use them.
    """
    p = palette_for(state, color=color)
    rows = visible_tasks(state)

    header = f"{p.accent}To-Do List [{state.filter.value.upper()}]{p.reset}"
    lines = [header]

    if not rows:
        lines.append(f"{p.muted}  (no tasks){p.reset}")

    for i, task in enumerate(rows, start=1):
        mark = "[x]" if task.completed else "[ ]"
        style = p.muted if task.completed else p.text
        lines.append(f"{style}{i:>3}. {mark} {task.title}{p.reset}")

    if state.edit_session is not None:
        lines.append(f"{p.accent}Editing: {state.edit_session.task.title!r} -> {state.title_input!r}{p.reset}")

    return "\n".join(lines)
