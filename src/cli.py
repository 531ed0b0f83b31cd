"""Keyboard loop for the to-do list.

Up/Down move the cursor, Right cycles the state of the task under the
cursor (entering edit mode), Left leaves edit mode and saves, q saves and
quits. Every key is followed by a full redraw.
"""
import contextlib
import logging
import os
import signal
import sys
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, TextIO, Union

import click

from board import Board
from models import Cursor
from storage import TaskIndexError, TaskList
from theme import CLEAR_SCREEN, ENTER_ALT_SCREEN, HIDE_CURSOR, LEAVE_ALT_SCREEN, SHOW_CURSOR, goto

logger = logging.getLogger(__name__)

KEY_UP = 'up'
KEY_DOWN = 'down'
KEY_LEFT = 'left'
KEY_RIGHT = 'right'
KEY_QUIT = 'q'

TERMINATION_SIGNALS = ('SIGTERM', 'SIGHUP')

# POSIX terminals send CSI or SS3 sequences; Windows sends a 0xe0/0x00 lead byte
KEY_SEQUENCES = {
    '\x1b[A': KEY_UP, '\x1bOA': KEY_UP, '\xe0H': KEY_UP, '\x00H': KEY_UP,
    '\x1b[B': KEY_DOWN, '\x1bOB': KEY_DOWN, '\xe0P': KEY_DOWN, '\x00P': KEY_DOWN,
    '\x1b[D': KEY_LEFT, '\x1bOD': KEY_LEFT, '\xe0K': KEY_LEFT, '\x00K': KEY_LEFT,
    '\x1b[C': KEY_RIGHT, '\x1bOC': KEY_RIGHT, '\xe0M': KEY_RIGHT, '\x00M': KEY_RIGHT,
}


def translate_key(raw: str) -> str:
    """Map a raw key read to a key name; unknown input is returned as-is."""
    return KEY_SEQUENCES.get(raw, raw)


def read_key() -> str:
    """Block until a key is pressed. Ctrl-C / Ctrl-D raise KeyboardInterrupt / EOFError."""
    raw = click.getchar()
    if not raw:
        raise EOFError
    return translate_key(raw)


# --- terminal control helpers ---
def _enter_raw_mode() -> Optional[Callable[[], None]]:
    """Switch stdin to raw mode; returns the function that undoes it (None if not a tty)."""
    if os.name != 'posix' or not sys.stdin.isatty():
        return None
    import termios
    import tty
    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)

    def restore() -> None:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
    return restore


def _exit_on_signal(signum: int, frame: object) -> None:
    raise SystemExit(128 + signum)


@contextlib.contextmanager
def _release_on_signals() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into SystemExit so enclosing ``finally`` blocks run."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous: Dict[int, Any] = {}
    for name in TERMINATION_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, _exit_on_signal)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


@contextlib.contextmanager
def terminal_session(out: TextIO, alt_screen: bool = True, raw: bool = True) -> Iterator[None]:
    """Own the terminal for the duration of the block.

    Raw input, hidden cursor and (optionally) the alternate screen are
    released on every exit path: normal exit, exceptions, and SIGTERM/SIGHUP.
    """
    with _release_on_signals():
        restore = _enter_raw_mode() if raw else None
        try:
            if alt_screen:
                out.write(ENTER_ALT_SCREEN)
            out.write(CLEAR_SCREEN + HIDE_CURSOR)
            out.flush()
            yield
        finally:
            try:
                out.write(SHOW_CURSOR)
                if alt_screen:
                    out.write(LEAVE_ALT_SCREEN)
                out.flush()
            finally:
                if restore is not None:
                    restore()


class CLI:
    def __init__(self, task_list: TaskList, path: Union[str, Path],
                 key_reader: Callable[[], str] = read_key,
                 out: Optional[TextIO] = None,
                 color: bool = True, alt_screen: bool = True, raw: bool = True):
        self.task_list: TaskList = task_list
        self.path: Path = Path(path)
        self.cursor: Cursor = Cursor()
        self.board: Board = Board(task_list, self.cursor, color=color)
        self.key_reader = key_reader
        self.out: TextIO = out if out is not None else sys.stdout
        self.alt_screen: bool = alt_screen
        self.raw: bool = raw

    def run(self) -> None:
        """Main key loop; the list is saved once more on the way out.

        An OSError from saving propagates after the terminal is restored.
        """
        with terminal_session(self.out, alt_screen=self.alt_screen, raw=self.raw):
            self.board.display(self.out)
            try:
                while True:
                    key = self.key_reader()
                    if key == KEY_QUIT:
                        break
                    self.handle_key(key)
                    self.board.display(self.out)
            except (KeyboardInterrupt, EOFError):
                logger.info("Interrupted, saving and exiting")
            self.task_list.editing = False
            self.task_list.save(self.path)
            if not self.alt_screen:
                # leave the shell prompt below the list
                self.out.write(goto(1, len(self.task_list) + 1))
        logger.info("Saved %d tasks to %s", len(self.task_list), self.path)

    # -------------------- key dispatch --------------------
    def handle_key(self, key: str) -> None:
        if key == KEY_UP:
            self.cursor.move(0, -1)
        elif key == KEY_DOWN:
            self.cursor.move(0, 1, max_row=max(len(self.task_list), 1))
        elif key == KEY_RIGHT:
            self._cycle_current()
        elif key == KEY_LEFT:
            self._commit()
        else:
            logger.debug("Ignoring key %r", key)

    def _cycle_current(self) -> None:
        try:
            task = self.task_list.change_state(self.cursor.index)
        except TaskIndexError as exc:
            logger.debug("Nothing to cycle: %s", exc)
            return
        self.task_list.editing = True
        logger.debug("Editing row %d, now %s", self.cursor.row, task.state.label)

    def _commit(self) -> None:
        self.task_list.editing = False
        self.task_list.save(self.path)
        logger.debug("Committed edit: %s", self.board)
