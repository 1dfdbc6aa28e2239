from __future__ import annotations

import zlib
from functools import partial

import pandas as pd
import streamlit as st

from components.narrative import render_callout, render_tab_intro
from controller import TodoController, TodoState
from data.models import STATUSES, Todo
from data.storage import StorageResult


TABLE_REV_KEY = "todo_table_rev"
NEW_TASK_KEY = "new_task_text"


def bump_table_revision(old: TodoState, new: TodoState) -> None:
    """Controller listener: a new table widget drops row selections that no longer apply."""
    if old.todos != new.todos or (old.selected is not None and new.selected is None):
        st.session_state[TABLE_REV_KEY] = st.session_state.get(TABLE_REV_KEY, 0) + 1


def todos_frame(todos: tuple[Todo, ...]) -> pd.DataFrame:
    return pd.DataFrame([t.to_record() for t in todos], columns=["id", "task", "status"])


def _table_key() -> str:
    return f"todo_table_{st.session_state.get(TABLE_REV_KEY, 0)}"


def _on_submit_new(controller: TodoController) -> None:
    controller.create(st.session_state.get(NEW_TASK_KEY, ""))


def _on_row_selected(controller: TodoController, key: str, todos: tuple[Todo, ...]) -> None:
    event = st.session_state.get(key)
    rows = event.selection.rows if event is not None else []
    controller.select(todos[rows[0]].id if rows and rows[0] < len(todos) else None)


def edit_key(todo: Todo) -> str:
    """Widget key suffix for the edit form; changes whenever the stored record does."""
    digest = zlib.crc32(f"{todo.task}\x1f{todo.status}".encode("utf-8"))
    return f"{todo.id}_{digest:08x}"


def _on_update(controller: TodoController, key: str) -> None:
    controller.update(
        st.session_state.get(f"edit_task_{key}", ""),
        st.session_state.get(f"edit_status_{key}", ""),
    )


def _render_edit_panel(controller: TodoController, selected: Todo) -> None:
    st.markdown('<div class="edit-panel-title">Edit selected task</div>', unsafe_allow_html=True)
    options = list(STATUSES)
    if selected.status not in options:
        options.append(selected.status)

    # Streamlit ignores value=/index= once a key has state, so the key tracks the record's content
    key = edit_key(selected)
    with st.form(f"edit_{key}"):
        st.text_input("Task", value=selected.task, key=f"edit_task_{key}")
        st.selectbox("Status", options, index=options.index(selected.status), key=f"edit_status_{key}")
        c1, c2 = st.columns(2)
        with c1:
            st.form_submit_button("Update", on_click=_on_update, args=(controller, key), use_container_width=True)
        with c2:
            st.form_submit_button("Delete", on_click=controller.delete, use_container_width=True)


def render(controller: TodoController, storage: StorageResult) -> None:
    st.title("ToDo")
    render_tab_intro(
        question="What needs doing, and what is already done?",
        context="Add a task below, then select a row to edit or delete it.",
    )
    if storage.warning:
        st.warning(storage.warning)

    state = controller.state
    if state.error:
        st.error(state.error)

    with st.form("new_todo", clear_on_submit=True):
        c1, c2 = st.columns([4, 1])
        with c1:
            st.text_input("New task", key=NEW_TASK_KEY, placeholder="e.g. Call the supplier", label_visibility="collapsed")
        with c2:
            st.form_submit_button("Add", on_click=_on_submit_new, args=(controller,), use_container_width=True)

    left, right = st.columns([3, 2])
    with left:
        st.button("Refresh", on_click=controller.refresh)
        if state.todos:
            key = _table_key()
            st.dataframe(
                todos_frame(state.todos),
                key=key,
                on_select=partial(_on_row_selected, controller, key, state.todos),
                selection_mode="single-row",
                hide_index=True,
                use_container_width=True,
                column_config={"id": None},
            )
        else:
            st.info("Nothing to do yet. Add a task above.")

    with right:
        if state.is_selected_visible:
            _render_edit_panel(controller, state.selected)
        else:
            render_callout(title="No task selected", body="Select a row in the table to edit its text or status.")
