"""
Business rules for todo records.

- Empty task text (after trimming) is rejected.
- A record without an id is new and gets a fresh identifier.
- A blank string id counts as no id.
- Fields a partial update leaves out (or a blank status) keep their stored value.
- A record whose id is unknown is rejected instead of being inserted, so a
  stale or mistyped id can never collide with a new record.
- Deleting an unknown id is a no-op.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from data.broker import TodoBroker
from data.models import NotFoundError, Todo, TodoId, ValidationError, coerce_todo, new_todo_id, record_id


logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, broker: TodoBroker):
        self.broker = broker

    def list_todos(self) -> list[Todo]:
        return [Todo.from_record(r) for r in self.broker.select_all()]

    def upsert_todo(self, record: Union[Todo, Mapping[str, Any]]) -> Todo:
        todo_id = record_id(record)
        existing = None
        if todo_id is not None:
            found = self.broker.select_by_id(todo_id)
            if found is None:
                raise NotFoundError(f"Todo {todo_id} does not exist")
            existing = Todo.from_record(found)

        todo = coerce_todo(record, existing)
        if not todo.task:
            raise ValidationError("Task text must not be empty")

        if existing is None:
            todo = Todo(id=new_todo_id(), task=todo.task, status=todo.status)
            self.broker.insert(todo.to_record())
            logger.info("Created todo %s", todo.id)
            return todo

        self.broker.update(todo.to_record())
        logger.info("Updated todo %s", todo.id)
        return todo

    def delete_todo(self, todo_id: TodoId) -> bool:
        if self.broker.select_by_id(todo_id) is None:
            logger.debug("Delete of unknown todo %s ignored", todo_id)
            return False
        self.broker.delete(todo_id)
        logger.info("Deleted todo %s", todo_id)
        return True
