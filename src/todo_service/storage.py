"""Todo storage capability and the in-memory backend."""
from __future__ import annotations
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .models import IdCounter, Todo, now_stamp

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class StoreUnavailable(StoreError):
    """The backing service could not be reached or rejected a command."""


class TodoStore(ABC):
    """Mapping of integer id to Todo, selected at startup by STORAGE_BACKEND."""

    def __init__(self, counter: IdCounter | None = None):
        self.counter = counter or IdCounter()

    @abstractmethod
    def put(self, todo: Todo) -> None:
        """Insert or overwrite by id."""
        ...

    @abstractmethod
    def get(self, todo_id: int) -> Optional[Todo]: ...

    @abstractmethod
    def values(self) -> List[Todo]: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def validate_store(self) -> Tuple[bool, str]: ...

    def new_todo(self, message: Optional[str]) -> Todo:
        return Todo.create(message, self.counter)

    def create(self, message: Optional[str], todo_id: int | None = None) -> Todo:
        todo = self.new_todo(message)
        self.put(todo)
        return todo

    def update_message(self, todo_id: int, message: Optional[str]) -> Optional[Todo]:
        todo = self.get(todo_id)
        if todo is None:
            return None
        todo.message = message
        self.put(todo)
        return todo


class MemoryStore(TodoStore):
    def __init__(self, seed_message: str | None = None, counter: IdCounter | None = None):
        super().__init__(counter)
        self._todos: Dict[int, Todo] = {}
        self._lock = threading.Lock()
        if seed_message is not None:
            self.create(seed_message)

    def put(self, todo: Todo) -> None:
        with self._lock:
            self._todos[todo.id] = todo

    def get(self, todo_id: int) -> Optional[Todo]:
        with self._lock:
            return self._todos.get(todo_id)

    def values(self) -> List[Todo]:
        with self._lock:
            return list(self._todos.values())  # insertion order

    def clear(self) -> None:
        with self._lock:
            count = len(self._todos)
            self._todos.clear()
        logger.info("Cleared %d todos", count)

    def validate_store(self) -> Tuple[bool, str]:
        return True, "ok"

    def create(self, message: Optional[str], todo_id: int | None = None) -> Todo:
        # A client-supplied id is trusted as given and may overwrite an
        # existing todo; the counter is not advanced past it.
        if todo_id is None:
            return super().create(message)
        todo = Todo(id=todo_id, message=message, date_created=now_stamp())
        with self._lock:
            if todo_id in self._todos:
                logger.warning("Todo %d overwritten by client-supplied id", todo_id)
            self._todos[todo_id] = todo
        return todo

    def update_message(self, todo_id: int, message: Optional[str]) -> Optional[Todo]:
        with self._lock:
            todo = self._todos.get(todo_id)
            if todo is None:
                return None
            todo.message = message
            return todo
