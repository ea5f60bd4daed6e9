from __future__ import annotations
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

# yyyy/MM/dd HH:mm:ss
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def now_stamp() -> str:
    return datetime.now().strftime(DATE_FORMAT)


class IdCounter:
    """Monotonic id source owned by a store. Ids are never reused."""

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        with self._lock:
            return self._next


@dataclass
class Todo:
    id: int
    message: Optional[str]
    date_created: Optional[str] = None

    @classmethod
    def create(cls, message: Optional[str], counter: IdCounter) -> "Todo":
        return cls(id=counter.next(), message=message, date_created=now_stamp())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "dateCreated": self.date_created,
        }
