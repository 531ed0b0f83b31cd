"""Colour, style and cursor-control helpers.

Decisions:
- Plain 8-colour SGR codes (30-37 foreground, 40-47 background) via click.style.
- Foreground colour is chosen by task state only; UNDEFINED keeps the terminal default.
- The cursor row is highlighted with a background colour.
- NO_COLOR (see config) turns every style into plain text; cursor control is unaffected.
"""
from __future__ import annotations
from typing import Dict, Optional

import click

from models import TaskState

ESC = "\033"
CLEAR_SCREEN = f"{ESC}[2J{ESC}[H"
CLEAR_LINE = f"{ESC}[2K"
HIDE_CURSOR = f"{ESC}[?25l"
SHOW_CURSOR = f"{ESC}[?25h"
ENTER_ALT_SCREEN = f"{ESC}[?1049h"
LEAVE_ALT_SCREEN = f"{ESC}[?1049l"

STATE_COLOR: Dict[TaskState, str] = {
    TaskState.DONE: 'green',
    TaskState.TODO: 'blue',
    TaskState.DOING: 'magenta',
    TaskState.REJECTED: 'red',
}
HIGHLIGHT_BG = 'white'


def goto(column: int, row: int) -> str:
    """Move the terminal cursor; both coordinates are 1-based."""
    return f"{ESC}[{row};{column}H"


def style(text: str, fg: Optional[str] = None, bg: Optional[str] = None, enabled: bool = True) -> str:
    if not enabled or (fg is None and bg is None):
        return text
    return click.style(text, fg=fg, bg=bg)


def state_style(text: str, state: TaskState, highlighted: bool = False, enabled: bool = True) -> str:
    return style(text, fg=STATE_COLOR.get(state), bg=HIGHLIGHT_BG if highlighted else None, enabled=enabled)


__all__ = [
    'goto', 'style', 'state_style', 'STATE_COLOR', 'HIGHLIGHT_BG',
    'CLEAR_SCREEN', 'CLEAR_LINE', 'HIDE_CURSOR', 'SHOW_CURSOR', 'ENTER_ALT_SCREEN', 'LEAVE_ALT_SCREEN',
]
