"""Rendering of the task list: one terminal row per task, full redraw each call.

Task at list index i is drawn on row i + 1. While a cycle edit is in
progress the row under the cursor is indented and shows the current and
next state; that suffix is display-only and never saved.
"""
import sys
from typing import List, Optional, TextIO

from models import Cursor, Task
from storage import TaskList
from theme import CLEAR_LINE, goto, state_style

BASE_COLUMN = 1
EDIT_COLUMN = 3


class Board:
    def __init__(self, task_list: TaskList, cursor: Optional[Cursor] = None, color: bool = True):
        self.task_list: TaskList = task_list
        self.cursor: Cursor = cursor if cursor is not None else Cursor()
        self.color: bool = color

    # -------------------- display --------------------
    def display(self, out: Optional[TextIO] = None) -> None:
        out = out if out is not None else sys.stdout
        out.write(self.render())
        out.flush()

    def render(self) -> str:
        parts: List[str] = [self._render_row(i, task) for i, task in enumerate(self.task_list)]
        # clear the row below the list so nothing stale is left behind
        parts.append(goto(BASE_COLUMN, len(self.task_list) + 1) + CLEAR_LINE)
        return ''.join(parts)

    def _render_row(self, index: int, task: Task) -> str:
        row = index + 1
        on_cursor = row == self.cursor.row
        column = BASE_COLUMN
        text = task.text
        if self.task_list.editing and on_cursor:
            column = EDIT_COLUMN
            text += self.edit_suffix(task)
        styled = state_style(text, task.state, highlighted=on_cursor, enabled=self.color)
        return goto(BASE_COLUMN, row) + CLEAR_LINE + goto(column, row) + styled

    @staticmethod
    def edit_suffix(task: Task) -> str:
        return f" (Current: {task.state.label}, Next: {task.state.next().label})"

    def __str__(self) -> str:
        return f'Board({self.task_list}, row={self.cursor.row}, editing={self.task_list.editing})'
