"""Persistence for the to-do list: one task per line in a plain text file.

The list is re-sorted by state every time it is saved (sort-on-save);
loading never reorders anything. The line ending of the first line read
(LF or CRLF) is used for every line written back.
"""
import logging
from pathlib import Path
from typing import Iterator, List, Union

from models import Task, TaskState

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SAMPLE_TASKS = ("Buy milk", "Buy eggs", "Buy bread")


class TaskIndexError(IndexError):
    """Raised when a task position does not exist in the list."""

    def __init__(self, index: int, size: int):
        super().__init__(f"No task at index {index} (list has {size} tasks).")
        self.index = index
        self.size = size


class TaskList:
    def __init__(self) -> None:
        self.tasks: List[Task] = []
        self.editing: bool = False
        self.newline: str = '\n'

    # -------------------- loading --------------------
    def load(self, path: PathLike) -> None:
        """Replace the in-memory list with the contents of ``path``.

        A missing file is created empty first. Lines that are not valid
        UTF-8 are skipped.
        """
        path = Path(path)
        if not path.exists():
            logger.info("Task file %s not found, creating it", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        loaded: List[Task] = []
        newline = None
        with open(path, 'rb') as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    line = raw.decode('utf-8')
                except UnicodeDecodeError:
                    logger.debug("Skipping undecodable line %d in %s", lineno, path)
                    continue
                if newline is None and line.endswith('\n'):
                    newline = '\r\n' if line.endswith('\r\n') else '\n'
                loaded.append(Task.from_line(_strip_newline(line)))
        self.tasks = loaded
        self.newline = newline or '\n'
        logger.debug("Loaded %d tasks from %s", len(loaded), path)

    # -------------------- task operations --------------------
    def add(self, description: str, state: TaskState = TaskState.TODO) -> Task:
        """Append a task; ``description`` is the text after the prefix."""
        if description and not description.startswith(' '):
            description = ' ' + description
        task = Task(description=description, state=state)
        self.tasks.append(task)
        return task

    def add_line(self, line: str) -> Task:
        """Append a task given in its stored form (prefix included)."""
        task = Task.from_line(line)
        self.tasks.append(task)
        return task

    def seed_samples(self) -> None:
        for title in SAMPLE_TASKS:
            self.add(title)

    def change_state(self, index: int) -> Task:
        if index < 0 or index >= len(self.tasks):
            raise TaskIndexError(index, len(self.tasks))
        task = self.tasks[index]
        before = task.state
        task.cycle()
        logger.debug("Task %d: %s -> %s", index, before.label, task.state.label)
        return task

    # -------------------- saving --------------------
    def save(self, path: PathLike) -> None:
        """Sort by state (stable) and write every task to ``path``.

        OSError from an unwritable destination propagates to the caller.
        """
        self.tasks.sort(key=lambda t: t.state)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            for task in self.tasks:
                f.write(task.text + self.newline)
        logger.debug("Saved %d tasks to %s", len(self.tasks), path)

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]

    def __str__(self) -> str:
        counts = {state: 0 for state in TaskState}
        for task in self.tasks:
            counts[task.state] += 1
        return ', '.join(f'{state.label}: {n}' for state, n in counts.items() if n)


def _strip_newline(line: str) -> str:
    if line.endswith('\n'):
        line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]
    return line
