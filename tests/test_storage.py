import re
import threading

from todo_service.models import IdCounter, Todo
from todo_service.storage import MemoryStore


def test_counter_is_monotonic_across_threads():
    counter = IdCounter()
    seen = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = counter.next()
            with lock:
                seen.append(value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(seen) == list(range(1600))
    assert counter.peek() == 1600


def test_todo_create_stamps_date():
    todo = Todo.create("hello", IdCounter(start=7))
    assert todo.id == 7
    assert re.fullmatch(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}", todo.date_created)


def test_reconstructed_todo_has_no_date():
    assert Todo(3, "x").to_dict() == {"id": 3, "message": "x", "dateCreated": None}


def test_memory_store_seed_and_clear():
    store = MemoryStore(seed_message="first")
    assert [t.message for t in store.values()] == ["first"]
    store.clear()
    assert store.values() == []
    # ids keep counting after a clear
    assert store.create("again").id == 1


def test_memory_store_keeps_insertion_order():
    store = MemoryStore()
    for msg in ("c", "a", "b"):
        store.create(msg)
    store.put(Todo(1, "a2", "2020/01/01 00:00:00"))
    assert [t.message for t in store.values()] == ["c", "a2", "b"]


def test_update_message_keeps_id_and_date():
    store = MemoryStore()
    todo = store.create("old")
    stamp = todo.date_created
    updated = store.update_message(todo.id, "new")
    assert updated.id == todo.id
    assert updated.date_created == stamp
    assert store.get(todo.id).message == "new"
    assert store.update_message(12345, "nope") is None


def test_concurrent_creates_do_not_lose_todos():
    store = MemoryStore()
    threads = [threading.Thread(target=lambda: [store.create("x") for _ in range(100)]) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.values()) == 400
