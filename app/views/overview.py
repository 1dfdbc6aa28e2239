from __future__ import annotations

import pandas as pd
import streamlit as st

from components.metrics import Kpi, bar_chart, render_kpi_row
from components.narrative import render_tab_intro
from controller import TodoController
from data.models import STATUSES, Todo
from data.storage import StorageResult


def status_counts(todos: tuple[Todo, ...]) -> pd.DataFrame:
    """Counts per status; known statuses always appear (zero-filled) and come first."""
    df = pd.DataFrame([t.to_record() for t in todos], columns=["id", "task", "status"])
    counts = df.groupby("status")["id"].count() if len(df) else pd.Series(dtype="int64")
    extra = sorted(s for s in counts.index if s not in STATUSES)
    order = list(STATUSES) + extra
    counts = counts.reindex(order, fill_value=0).astype(int)
    return counts.rename_axis("status").reset_index(name="count")


def render(controller: TodoController, storage: StorageResult) -> None:
    st.title("Overview")
    render_tab_intro(
        question="How much is open, and how much is finished?",
        context=f"Counts come straight from the {storage.source} store.",
    )
    if storage.warning:
        st.warning(storage.warning)

    todos = controller.refresh().todos
    counts = status_counts(todos)
    by_status = dict(zip(counts["status"], counts["count"]))

    render_kpi_row(
        [Kpi("Total", str(len(todos)))]
        + [Kpi(s.capitalize(), str(by_status.get(s, 0))) for s in STATUSES]
    )

    st.divider()
    if len(todos):
        bar_chart(counts, x="status", y="count", title="Tasks by status")
    else:
        st.info("No tasks yet.")
