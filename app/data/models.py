"""
Todo record + domain errors.

Records cross the Storage boundary as plain dicts; everything above the broker
works with the frozen `Todo` dataclass.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

TodoId = Union[str, int]

DEFAULT_STATUS = "open"
STATUSES = ("open", "in progress", "done")


class ValidationError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


def new_todo_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Todo:
    id: Optional[TodoId]
    task: str
    status: str = DEFAULT_STATUS

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Todo":
        return cls(
            id=record.get("id"),
            task=str(record.get("task") or ""),
            status=str(record.get("status") or DEFAULT_STATUS),
        )

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "task": self.task, "status": self.status}


def record_id(record: Union[Todo, Mapping[str, Any]]) -> Optional[TodoId]:
    """Identifier of a Todo or mapping; a blank string id counts as unset."""
    todo_id = record.id if isinstance(record, Todo) else record.get("id")
    if isinstance(todo_id, str) and not todo_id.strip():
        return None
    return todo_id


def coerce_todo(record: Union[Todo, Mapping[str, Any]], existing: Optional[Todo] = None) -> Todo:
    """
    Accept a full Todo or a partial mapping such as {"task": "..."}.

    Text is trimmed. Fields a mapping leaves out come from `existing`; a blank
    status keeps the existing one, or falls back to the default for new records.
    """
    if isinstance(record, Todo):
        task, status = record.task, record.status
    else:
        task = record.get("task", existing.task if existing else "")
        status = record.get("status", "")

    task = str(task or "").strip()
    status = str(status or "").strip()
    if not status:
        status = existing.status if existing else DEFAULT_STATUS
    return Todo(id=record_id(record), task=task, status=status)
