"""
Storage capability.

The data layer only ever talks to a `Storage`; swapping the in-memory mock for
the Databricks-backed table needs no change above the broker.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from config import AppConfig
from data import mock_data, queries
from data.connection import SqlClient, get_sql_client


logger = logging.getLogger(__name__)


class Storage(Protocol):
    def seed(self, table: str, records: Iterable[dict[str, Any]]) -> None: ...

    def get(self, table: str) -> list[dict[str, Any]]: ...

    def put(self, table: str, record: dict[str, Any]) -> None: ...

    def delete(self, table: str, record_id: Any) -> None: ...


class MemoryStorage:
    """Insertion-ordered records per table. Records are copied in and out."""

    def __init__(self) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def seed(self, table: str, records: Iterable[dict[str, Any]]) -> None:
        with self._lock:
            self._tables[table] = [dict(r) for r in records]

    def get(self, table: str) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._tables.get(table, []))

    def put(self, table: str, record: dict[str, Any]) -> None:
        with self._lock:
            rows = self._tables.setdefault(table, [])
            for i, row in enumerate(rows):
                if row.get("id") == record.get("id"):
                    rows[i] = dict(record)
                    return
            rows.append(dict(record))

    def delete(self, table: str, record_id: Any) -> None:
        with self._lock:
            rows = self._tables.get(table, [])
            self._tables[table] = [r for r in rows if r.get("id") != record_id]


@dataclass(frozen=True)
class DatabricksStorage:
    """Todo tables in Unity Catalog, reached through Databricks SQL."""

    cfg: AppConfig
    client: SqlClient

    def seed(self, table: str, records: Iterable[dict[str, Any]]) -> None:
        self.client.execute(queries.q_create_todo_table(self.cfg, table))
        counts = self.client.query(queries.q_count_todos(self.cfg, table))
        if len(counts) and int(counts.iloc[0, 0]) > 0:
            return
        for record in records:
            self.put(table, record)

    def get(self, table: str) -> list[dict[str, Any]]:
        df = self.client.query(queries.q_select_todos(self.cfg, table))
        return df.to_dict(orient="records")

    def put(self, table: str, record: dict[str, Any]) -> None:
        self.client.execute(
            queries.q_merge_todo(self.cfg, table),
            {"id": str(record["id"]), "task": record.get("task"), "status": record.get("status")},
        )

    def delete(self, table: str, record_id: Any) -> None:
        self.client.execute(queries.q_delete_todo(self.cfg, table), {"id": str(record_id)})


@dataclass(frozen=True)
class StorageResult:
    storage: Storage
    source: str  # "mock" | "databricks_sql"
    warning: Optional[str] = None


def mock_storage(cfg: AppConfig) -> MemoryStorage:
    storage = MemoryStorage()
    storage.seed(cfg.todo_table, mock_data.todos_mock(cfg.mock_seed_count))
    return storage


def open_storage(cfg: AppConfig, use_mock: bool) -> StorageResult:
    """
    Picks the backing store.
    - Mock mode: a seeded MemoryStorage.
    - Otherwise: Databricks SQL, falling back to mock on any failure.
    """
    if use_mock:
        return StorageResult(storage=mock_storage(cfg), source="mock")
    try:
        storage = DatabricksStorage(cfg=cfg, client=get_sql_client(cfg))
        storage.seed(cfg.todo_table, mock_data.todos_mock(cfg.mock_seed_count))
        return StorageResult(storage=storage, source="databricks_sql")
    except Exception as e:
        logger.warning("Databricks storage unavailable, using mock data: %s", e)
        return StorageResult(
            storage=mock_storage(cfg),
            source="mock",
            warning=f"Fell back to mock data: {type(e).__name__}",
        )
