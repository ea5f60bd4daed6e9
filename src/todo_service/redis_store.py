"""Redis storage backend. Keys are decimal ids, values are messages."""
from __future__ import annotations
import logging
from functools import wraps
from typing import List, Optional, Tuple

import redis

from .models import IdCounter, Todo
from .storage import StoreUnavailable, TodoStore

logger = logging.getLogger(__name__)


def _remote(op):
    @wraps(op)
    def wrapper(self, *args, **kwargs):
        try:
            return op(self, *args, **kwargs)
        except redis.exceptions.RedisError as e:
            logger.error("Redis %s failed: %s", op.__name__, e)
            raise StoreUnavailable(f"redis {op.__name__} failed: {e}") from e
    return wrapper


class RedisStore(TodoStore):
    """Redis-backed storage.

    Only id -> message is persisted, so todos read back have no dateCreated.
    The id counter lives in this process and restarts at 0 with it.
    """

    def __init__(self, client: redis.Redis, counter: IdCounter | None = None):
        super().__init__(counter)
        self.client = client

    @classmethod
    def from_config(cls, config) -> "RedisStore":
        client = redis.Redis(
            host=config["REDIS_HOST"],
            port=int(config["REDIS_PORT"]),
            db=int(config["REDIS_DB"]),
            socket_timeout=float(config["REDIS_TIMEOUT"]),
            socket_connect_timeout=float(config["REDIS_TIMEOUT"]),
            decode_responses=True,
        )
        logger.info("Using Redis at %s:%s/%s", config["REDIS_HOST"], config["REDIS_PORT"], config["REDIS_DB"])
        return cls(client)

    @_remote
    def put(self, todo: Todo) -> None:
        self.client.set(str(todo.id), todo.message if todo.message is not None else "")

    @_remote
    def get(self, todo_id: int) -> Optional[Todo]:
        message = self.client.get(str(todo_id))
        if message is None:
            return None
        return Todo(id=todo_id, message=message)

    @_remote
    def values(self) -> List[Todo]:
        # Best-effort enumeration: keys are listed first and fetched after,
        # so concurrent writers may leave the result neither before nor after.
        keys = self.client.keys("*")
        ids = []
        for key in keys:
            # Only keys written by put() are todos: str(id), no padding.
            try:
                tid = int(key)
            except ValueError:
                tid = None
            if tid is None or str(tid) != key:
                logger.warning("Skipping non-todo key %r", key)
                continue
            ids.append(tid)
        ids.sort()
        if not ids:
            return []
        pipe = self.client.pipeline(transaction=False)
        for tid in ids:
            pipe.get(str(tid))
        messages = pipe.execute()
        return [Todo(id=tid, message=msg) for tid, msg in zip(ids, messages) if msg is not None]

    @_remote
    def clear(self) -> None:
        # FLUSHDB empties the whole database, not just todo keys.
        self.client.flushdb()
        logger.info("Flushed redis database")

    def create(self, message: Optional[str], todo_id: int | None = None) -> Todo:
        # Ids always come from the server-side counter here.
        return super().create(message)

    def validate_store(self) -> Tuple[bool, str]:
        try:
            self.client.ping()
            return True, "ok"
        except redis.exceptions.RedisError as e:
            return False, str(e)
