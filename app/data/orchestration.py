"""
Data access layer used by the controller.

Every call returns the full, current collection so callers never re-fetch.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Union

from data.broker import TodoBroker
from data.models import Todo, TodoId
from data.service import TodoService
from data.storage import Storage


class TodoOrchestration:
    def __init__(self, service: TodoService):
        self.service = service
        # One mutate-then-read at a time across sessions sharing the storage
        self._lock = threading.RLock()

    def retrieve(self) -> tuple[Todo, ...]:
        with self._lock:
            return tuple(self.service.list_todos())

    def upsert_retrieve(self, record: Union[Todo, Mapping[str, Any]]) -> tuple[Todo, ...]:
        with self._lock:
            self.service.upsert_todo(record)
            return self.retrieve()

    def delete_retrieve(self, todo_id: TodoId) -> tuple[Todo, ...]:
        with self._lock:
            self.service.delete_todo(todo_id)
            return self.retrieve()


def build_orchestration(storage: Storage, table: str = "todos") -> TodoOrchestration:
    return TodoOrchestration(TodoService(TodoBroker(storage, table)))
