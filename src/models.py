"""Data models for the terminal to-do list.

A stored line looks like ``[X] wash car``: a 3-character state prefix
followed by free-form description text. Tasks keep the state and the
description apart; the prefix is only composed when a line is written.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

PREFIX_LEN = 3


class TaskState(IntEnum):
    """Lifecycle state. Member order is the sort order used on save."""
    TODO = 0
    DOING = 1
    DONE = 2
    REJECTED = 3
    UNDEFINED = 4

    def next(self) -> "TaskState":
        """Successor in the todo -> doing -> done -> rejected cycle."""
        return _NEXT[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


_NEXT: Dict[TaskState, TaskState] = {
    TaskState.TODO: TaskState.DOING,
    TaskState.DOING: TaskState.DONE,
    TaskState.DONE: TaskState.REJECTED,
    TaskState.REJECTED: TaskState.TODO,
    TaskState.UNDEFINED: TaskState.UNDEFINED,  # dead state, outside the cycle
}

PREFIXES: Dict[str, TaskState] = {
    "[ ]": TaskState.TODO,
    "[+]": TaskState.DOING,
    "[X]": TaskState.DONE,
    "[-]": TaskState.REJECTED,
}
_STATE_PREFIX: Dict[TaskState, str] = {state: prefix for prefix, state in PREFIXES.items()}


def decode_prefix(line: str) -> TaskState:
    """Map the first 3 characters of ``line`` to a state; unknown -> UNDEFINED."""
    return PREFIXES.get(line[:PREFIX_LEN], TaskState.UNDEFINED)


def encode_prefix(state: TaskState) -> str:
    # UNDEFINED shares the todo prefix, so it never round-trips
    return _STATE_PREFIX.get(state, "[ ]")


def next_state(state: TaskState) -> TaskState:
    return state.next()


@dataclass
class Task:
    """A single to-do entry.

    Fields:
        description: Text after the prefix, usually starting with a space.
            For UNDEFINED tasks this is the whole stored line.
        state: Lifecycle state; drives the prefix, the colour and the sort.
    """
    description: str
    state: TaskState = TaskState.TODO

    @classmethod
    def from_line(cls, line: str) -> "Task":
        state = decode_prefix(line)
        if state is TaskState.UNDEFINED:
            return cls(description=line, state=state)
        return cls(description=line[PREFIX_LEN:], state=state)

    @property
    def text(self) -> str:
        """Stored form of the task (prefix + description)."""
        if self.state is TaskState.UNDEFINED:
            return self.description
        return encode_prefix(self.state) + self.description

    def cycle(self) -> TaskState:
        self.state = self.state.next()
        return self.state

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(state={self.state.label}, text={self.text!r})"


MIN_COLUMN = 1
MAX_COLUMN = 10
MIN_ROW = 1


@dataclass
class Cursor:
    """Screen position; row ``r`` selects task index ``r - 1``."""
    column: int = MIN_COLUMN
    row: int = MIN_ROW

    def __post_init__(self) -> None:
        self.move(0, 0)

    def move(self, dx: int, dy: int, max_row: Optional[int] = None) -> None:
        self.column = min(MAX_COLUMN, max(MIN_COLUMN, self.column + dx))
        row = self.row + dy
        if max_row is not None:
            row = min(row, max_row)
        self.row = max(MIN_ROW, row)

    @property
    def index(self) -> int:
        return self.row - 1
