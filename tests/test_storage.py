# tests/test_storage.py

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from models import TaskState
from storage import SAMPLE_TASKS, TaskIndexError, TaskList


def _loaded(path: Path) -> TaskList:
    task_list = TaskList()
    task_list.load(path)
    return task_list


def test_save_sorts_by_state(task_file: Callable[..., Path]) -> None:
    path = task_file("[X] wash car", "[ ] buy milk", "[+] write report")
    task_list = _loaded(path)
    task_list.save(path)
    assert path.read_text(encoding="utf-8") == "[ ] buy milk\n[+] write report\n[X] wash car\n"
    # the in-memory order follows the file
    assert [t.state for t in task_list] == [TaskState.TODO, TaskState.DOING, TaskState.DONE]


def test_sort_is_stable(task_file: Callable[..., Path]) -> None:
    path = task_file("[X] first done", "[ ] first todo", "[X] second done", "[ ] second todo")
    task_list = _loaded(path)
    task_list.save(path)
    assert path.read_text(encoding="utf-8").splitlines() == [
        "[ ] first todo",
        "[ ] second todo",
        "[X] first done",
        "[X] second done",
    ]


def test_save_load_round_trip_is_idempotent(task_file: Callable[..., Path]) -> None:
    path = task_file("[-] call bank", "[+] write report", "notes", "[ ] buy milk")
    first = _loaded(path)
    first.save(path)
    once = path.read_bytes()

    second = _loaded(path)
    assert [(t.state, t.text) for t in second] == [(t.state, t.text) for t in first]
    second.save(path)
    assert path.read_bytes() == once


def test_change_state_wraps_rejected_to_todo(task_file: Callable[..., Path]) -> None:
    task_list = _loaded(task_file("[-] call bank"))
    task = task_list.change_state(0)
    assert task.state is TaskState.TODO
    assert task.text == "[ ] call bank"


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_change_state_out_of_range(task_file: Callable[..., Path], index: int) -> None:
    task_list = _loaded(task_file("[ ] a", "[ ] b"))
    with pytest.raises(TaskIndexError):
        task_list.change_state(index)
    assert [t.text for t in task_list] == ["[ ] a", "[ ] b"]


def test_index_error_is_an_index_error() -> None:
    with pytest.raises(IndexError, match="No task at index 0"):
        TaskList().change_state(0)


def test_missing_file_is_created_empty(tmp_path: Path) -> None:
    path = tmp_path / "missing.txt"
    task_list = _loaded(path)
    assert len(task_list) == 0
    assert path.exists()
    assert path.read_bytes() == b""


def test_missing_file_in_new_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "todo.txt"
    _loaded(path)
    assert path.exists()


def test_empty_list_saves_zero_bytes(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    TaskList().save(path)
    assert path.read_bytes() == b""


def test_unprefixed_line_is_kept_byte_for_byte(task_file: Callable[..., Path]) -> None:
    path = task_file("call bank")
    task_list = _loaded(path)
    assert task_list[0].state is TaskState.UNDEFINED
    task_list.save(path)
    assert path.read_text(encoding="utf-8") == "call bank\n"


def test_undefined_tasks_sort_last(task_file: Callable[..., Path]) -> None:
    path = task_file("call bank", "[-] nope", "[ ] buy milk")
    task_list = _loaded(path)
    task_list.save(path)
    assert path.read_text(encoding="utf-8") == "[ ] buy milk\n[-] nope\ncall bank\n"


def test_undecodable_lines_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    path.write_bytes(b"[ ] ok\n\xff\xfe broken\n[X] done\n")
    task_list = _loaded(path)
    assert [t.text for t in task_list] == ["[ ] ok", "[X] done"]


def test_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    path.write_bytes(b"[+] one\r\n[ ] two\r\n")
    task_list = _loaded(path)
    assert [t.text for t in task_list] == ["[+] one", "[ ] two"]


def test_crlf_file_keeps_crlf_on_save(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    path.write_bytes(b"call bank\r\n[X] wash car\r\n[ ] buy milk\r\n")
    task_list = _loaded(path)
    task_list.save(path)
    assert path.read_bytes() == b"[ ] buy milk\r\n[X] wash car\r\ncall bank\r\n"


def test_unprefixed_crlf_line_is_kept_byte_for_byte(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    path.write_bytes(b"call bank\r\n")
    _loaded(path).save(path)
    assert path.read_bytes() == b"call bank\r\n"


def test_new_list_saves_with_lf(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    task_list = TaskList()
    task_list.add("buy milk")
    task_list.save(path)
    assert path.read_bytes() == b"[ ] buy milk\n"


def test_load_replaces_previous_contents(task_file: Callable[..., Path]) -> None:
    task_list = _loaded(task_file("[ ] a", "[ ] b", name="first.txt"))
    task_list.load(task_file("[X] c", name="second.txt"))
    assert [t.text for t in task_list] == ["[X] c"]


def test_add_appends_in_insertion_order() -> None:
    task_list = TaskList()
    task_list.add("buy milk")
    task_list.add(" write report", TaskState.DOING)
    task_list.add_line("[X] wash car")
    assert [t.text for t in task_list] == ["[ ] buy milk", "[+] write report", "[X] wash car"]


def test_seed_samples(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    task_list = TaskList()
    task_list.seed_samples()
    task_list.save(path)
    assert path.read_text(encoding="utf-8").splitlines() == [f"[ ] {t}" for t in SAMPLE_TASKS]


def test_save_to_unwritable_destination_raises(tmp_path: Path) -> None:
    task_list = TaskList()
    task_list.add("anything")
    with pytest.raises(OSError):
        task_list.save(tmp_path)


def test_str_counts_states(task_file: Callable[..., Path]) -> None:
    task_list = _loaded(task_file("[ ] a", "[ ] b", "[X] c"))
    assert str(task_list) == "Todo: 2, Done: 1"
