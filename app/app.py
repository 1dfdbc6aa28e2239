"""
Routing + session wiring.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.styles import apply_theme  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from components.header import render_header  # noqa: E402
from config import AppConfig, get_config  # noqa: E402
from controller import TodoController  # noqa: E402
from data.orchestration import TodoOrchestration, build_orchestration  # noqa: E402
from data.storage import StorageResult, open_storage  # noqa: E402

from views import overview, todos  # noqa: E402


@st.cache_resource(show_spinner=False)
def get_data_layer(cfg: AppConfig, use_mock: bool) -> tuple[StorageResult, TodoOrchestration]:
    # One store + one orchestration per process, shared by every browser session
    storage = open_storage(cfg, use_mock)
    return storage, build_orchestration(storage.storage, cfg.todo_table)


def get_controller(storage: StorageResult, orchestration: TodoOrchestration) -> TodoController:
    key = f"todo_controller::{storage.source}"
    controller = st.session_state.get(key)
    if controller is None or controller.orchestration is not orchestration:
        controller = TodoController(orchestration)
        controller.subscribe(todos.bump_table_revision)
        st.session_state[key] = controller
    return controller


def main() -> None:
    apply_theme()
    cfg = get_config()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = render_sidebar(cfg)

    storage, orchestration = get_data_layer(cfg, state.use_mock)
    controller = get_controller(storage, orchestration)

    render_header(
        app_name="ToDo Manager",
        subtitle="Layered UI / controller / data demo",
        right_pill=f"Storage: {'Mock (in-memory)' if storage.source == 'mock' else 'Databricks SQL'}",
        persistent=storage.source != "mock",
    )

    # Routing only
    if state.view == "todos":
        todos.render(controller, storage)
    elif state.view == "overview":
        overview.render(controller, storage)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
