# tests/test_task_store.py

from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path

from taskm.tasks.codec import load_tasks
from taskm.tasks.id_generator import IdGenerator
from taskm.tasks.task_models import Priority, Task
from taskm.tasks.task_store import MarkDoneStatus, TaskStore


def _seeded(n: int) -> TaskStore:
    ts = datetime(2024, 1, 1, 12, 0, 0)
    return TaskStore([Task(i, f"t{i}", False, ts, Priority.LOW) for i in range(1, n + 1)])


def test_add_allocates_from_id_generator(store: TaskStore) -> None:
    a = store.add("first")
    b = store.add("second", Priority.HIGH)
    c = store.add("third", "nonsense")

    assert (a.id, b.id, c.id) == (1, 2, 3)
    assert a.priority is Priority.MEDIUM
    assert b.priority is Priority.HIGH
    assert c.priority is Priority.MEDIUM
    assert len(store) == 3


def test_add_continues_after_loaded_ids() -> None:
    store = TaskStore([], id_gen=IdGenerator(15))
    assert store.add("x").id == 16


def test_list_returns_copies(store: TaskStore) -> None:
    store.add("one")
    snapshot = store.list()
    snapshot[0].done = True
    snapshot.clear()

    again = store.list()
    assert len(again) == 1
    assert again[0].done is False


def test_mark_done_statuses(store: TaskStore) -> None:
    t = store.add("finish me")
    created = t.created_at

    status, marked = store.mark_done(t.id)
    assert status is MarkDoneStatus.MARKED
    assert marked is not None and marked.done

    status, again = store.mark_done(t.id)
    assert status is MarkDoneStatus.ALREADY_DONE
    assert again is not None and again.created_at == created

    assert store.mark_done(999) == (MarkDoneStatus.NOT_FOUND, None)


def test_delete_swaps_with_last() -> None:
    store = _seeded(4)

    removed = store.delete(2)

    assert removed is not None and removed.id == 2
    assert [t.id for t in store.list()] == [1, 4, 3]
    assert store.delete(2) is None


def test_delete_does_not_reuse_ids(store: TaskStore) -> None:
    store.add("a")
    last = store.add("b")
    store.delete(last.id)
    assert store.add("c").id == last.id + 1


def test_completed_only_returns_done_tasks(store: TaskStore) -> None:
    for title in ("a", "b", "c"):
        store.add(title)
    store.mark_done(1)
    store.mark_done(3)

    assert [t.id for t in store.completed()] == [1, 3]
    assert len(store) == 3


def test_save_writes_current_state(store: TaskStore, tmp_path: Path) -> None:
    store.add("keep", Priority.HIGH)
    store.add("done")
    store.mark_done(2)
    path = tmp_path / "tasks.txt"

    store.save(path)

    loaded, max_id = load_tasks(path)
    assert loaded == store.list()
    assert max_id == 2


def test_concurrent_adds_get_unique_ids(store: TaskStore) -> None:
    def worker() -> None:
        for i in range(100):
            store.add(f"task {i}")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [t.id for t in store.list()]
    assert len(ids) == 800
    assert sorted(ids) == list(range(1, 801))
