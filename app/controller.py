"""
UI-facing state for the ToDo page.

The view never mutates state. It sends intents through `TodoController.dispatch`;
each intent runs to completion, produces a new `TodoState` snapshot, and
subscribers are told once per completed transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from data.models import NotFoundError, Todo, TodoId, ValidationError
from data.orchestration import TodoOrchestration


logger = logging.getLogger(__name__)

CREATE = "create"
SELECT = "select"
UPDATE = "update"
DELETE = "delete"
REFRESH = "refresh"

Listener = Callable[["TodoState", "TodoState"], None]


@dataclass(frozen=True)
class TodoState:
    todos: tuple[Todo, ...] = ()
    selected: Optional[Todo] = None
    error: Optional[str] = None

    @property
    def is_selected_visible(self) -> bool:
        return self.selected is not None

    def find(self, todo_id: Optional[TodoId]) -> Optional[Todo]:
        if todo_id is None:
            return None
        return next((t for t in self.todos if t.id == todo_id), None)

    def as_render_state(self) -> dict[str, Any]:
        return {
            "todos": self.todos,
            "selected": self.selected,
            "is_selected_visible": self.is_selected_visible,
        }


class TodoController:
    def __init__(self, orchestration: TodoOrchestration):
        self.orchestration = orchestration
        self._state = TodoState(todos=orchestration.retrieve())
        self._listeners: list[Listener] = []
        self._handlers: dict[str, Callable[..., TodoState]] = {
            CREATE: self._on_create,
            SELECT: self._on_select,
            UPDATE: self._on_update,
            DELETE: self._on_delete,
            REFRESH: self._on_refresh,
        }

    @property
    def state(self) -> TodoState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, intent: str, *args: Any, **kwargs: Any) -> TodoState:
        handler = self._handlers.get(intent)
        if handler is None:
            raise ValueError(f"Unknown intent: {intent}")

        old = self._state
        try:
            new = handler(old, *args, **kwargs)
        except (ValidationError, NotFoundError) as e:
            logger.warning("Intent %s rejected: %s", intent, e)
            new = replace(old, error=str(e))

        if new is not old:
            self._state = new
            for listener in list(self._listeners):
                listener(old, new)
        return self._state

    # Intents (what the view calls)

    def create(self, text: Optional[str]) -> TodoState:
        return self.dispatch(CREATE, text)

    def select(self, todo_id: Optional[TodoId]) -> TodoState:
        return self.dispatch(SELECT, todo_id)

    def update(self, task: str, status: str) -> TodoState:
        return self.dispatch(UPDATE, task, status)

    def delete(self) -> TodoState:
        return self.dispatch(DELETE)

    def refresh(self) -> TodoState:
        return self.dispatch(REFRESH)

    # Handlers: old snapshot in, new snapshot out

    def _on_create(self, state: TodoState, text: Optional[str]) -> TodoState:
        if not text or not text.strip():
            return state
        todos = self.orchestration.upsert_retrieve({"task": text})
        return replace(state, todos=todos, error=None)

    def _on_select(self, state: TodoState, todo_id: Optional[TodoId]) -> TodoState:
        selected = state.find(todo_id)
        if selected == state.selected and state.error is None:
            return state
        return replace(state, selected=selected, error=None)

    def _on_update(self, state: TodoState, task: str, status: str) -> TodoState:
        if state.selected is None:
            return state
        edited = Todo(id=state.selected.id, task=task, status=status)
        todos = self.orchestration.upsert_retrieve(edited)
        refreshed = TodoState(todos=todos)
        return TodoState(todos=todos, selected=refreshed.find(edited.id))

    def _on_delete(self, state: TodoState) -> TodoState:
        if state.selected is None:
            return state
        todos = self.orchestration.delete_retrieve(state.selected.id)
        return TodoState(todos=todos, selected=None)

    def _on_refresh(self, state: TodoState) -> TodoState:
        todos = self.orchestration.retrieve()
        refreshed = TodoState(todos=todos)
        selected = refreshed.find(state.selected.id) if state.selected else None
        return TodoState(todos=todos, selected=selected)
