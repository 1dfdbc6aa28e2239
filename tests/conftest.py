from __future__ import annotations

import pytest

from config import AppConfig
from data.orchestration import build_orchestration
from data.storage import MemoryStorage


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        databricks_host="https://example.cloud.databricks.com",
        databricks_http_path="/sql/1.0/warehouses/abc123",
        databricks_catalog="main",
        databricks_schema="todo_demo",
        databricks_token=None,
        todo_table="todos",
        default_use_mock=True,
        mock_seed_count=3,
        log_level="INFO",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    s = MemoryStorage()
    s.seed("todos", [{"id": 1, "task": "A", "status": "open"}])
    return s


@pytest.fixture
def orchestration(storage):
    return build_orchestration(storage, "todos")
