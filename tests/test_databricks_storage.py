from __future__ import annotations

import pytest

from data import connection, queries
from data.connection import DatabricksAuthError, SqlClient
from data.storage import DatabricksStorage, open_storage


class FakeCursor:
    def __init__(self, db: "FakeDatabricks") -> None:
        self.db = db
        self.description = None
        self._rows: list[tuple] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement: str, params: dict) -> None:
        self.db.calls.append((" ".join(statement.split()), dict(params)))
        if "count(*)" in statement:
            self.description = [("n",)]
            self._rows = [(len(self.db.rows),)]
        elif statement.strip().startswith("SELECT"):
            self.description = [("id",), ("task",), ("status",)]
            self._rows = [(r["id"], r["task"], r["status"]) for r in self.db.rows]
        elif "MERGE INTO" in statement:
            self.db.rows = [r for r in self.db.rows if r["id"] != params["id"]] + [
                {"id": params["id"], "task": params["task"], "status": params["status"]}
            ]
        elif statement.startswith("DELETE"):
            self.db.rows = [r for r in self.db.rows if r["id"] != params["id"]]

    def fetchall(self) -> list[tuple]:
        return self._rows


class FakeConnection:
    def __init__(self, db: "FakeDatabricks") -> None:
        self.db = db

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self.db)


class FakeDatabricks:
    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.calls: list[tuple[str, dict]] = []
        self.connect_kwargs: dict = {}

    def connect(self, **kwargs) -> FakeConnection:
        self.connect_kwargs = kwargs
        return FakeConnection(self)


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabricks:
    db = FakeDatabricks()
    monkeypatch.delenv("DATABRICKS_APP_NAME", raising=False)
    monkeypatch.setattr(connection, "sql", db)
    return db


@pytest.fixture
def token_cfg(cfg):
    from dataclasses import replace

    return replace(cfg, databricks_token="dapi-test")


def test_missing_token_raises(cfg, fake_db) -> None:
    with pytest.raises(DatabricksAuthError):
        SqlClient(cfg).query("SELECT 1")


def test_connect_uses_host_without_scheme(token_cfg, fake_db) -> None:
    SqlClient(token_cfg).query("SELECT 1")
    assert fake_db.connect_kwargs == {
        "server_hostname": "example.cloud.databricks.com",
        "http_path": "/sql/1.0/warehouses/abc123",
        "access_token": "dapi-test",
    }


def test_put_get_delete_roundtrip(token_cfg, fake_db) -> None:
    storage = DatabricksStorage(cfg=token_cfg, client=SqlClient(token_cfg))

    storage.put("todos", {"id": 7, "task": "Ship it", "status": "open"})
    merge_sql, merge_params = fake_db.calls[-1]
    assert merge_sql.startswith("MERGE INTO `main`.`todo_demo`.`todos`")
    assert merge_params == {"id": "7", "task": "Ship it", "status": "open"}

    assert storage.get("todos") == [{"id": "7", "task": "Ship it", "status": "open"}]

    storage.delete("todos", 7)
    assert fake_db.calls[-1][1] == {"id": "7"}
    assert storage.get("todos") == []


def test_seed_only_fills_empty_table(token_cfg, fake_db) -> None:
    storage = DatabricksStorage(cfg=token_cfg, client=SqlClient(token_cfg))

    storage.seed("todos", [{"id": "a", "task": "A", "status": "open"}])
    storage.seed("todos", [{"id": "b", "task": "B", "status": "open"}])

    assert [r["id"] for r in fake_db.rows] == ["a"]
    assert fake_db.calls[0][0].startswith("CREATE TABLE IF NOT EXISTS")


def test_open_storage_uses_databricks_when_reachable(token_cfg, fake_db) -> None:
    res = open_storage(token_cfg, use_mock=False)
    assert res.source == "databricks_sql"
    assert res.warning is None
    assert len(res.storage.get("todos")) == token_cfg.mock_seed_count


def test_table_name_must_be_identifier(cfg) -> None:
    with pytest.raises(ValueError):
        queries.q_select_todos(cfg, "todos; DROP TABLE x")
    assert queries.fq_table(cfg, "todo_items") == "`main`.`todo_demo`.`todo_items`"
