from __future__ import annotations

from typing import Any, Optional

from data.models import TodoId
from data.storage import Storage


class TodoBroker:
    """Table-scoped access to a Storage. No rules live here."""

    def __init__(self, storage: Storage, table: str = "todos"):
        self.storage = storage
        self.table = table

    def select_all(self) -> list[dict[str, Any]]:
        return self.storage.get(self.table)

    def select_by_id(self, todo_id: TodoId) -> Optional[dict[str, Any]]:
        for record in self.select_all():
            if record.get("id") == todo_id:
                return record
        return None

    def insert(self, record: dict[str, Any]) -> None:
        self.storage.put(self.table, record)

    def update(self, record: dict[str, Any]) -> None:
        self.storage.put(self.table, record)

    def delete(self, todo_id: TodoId) -> None:
        self.storage.delete(self.table, todo_id)
