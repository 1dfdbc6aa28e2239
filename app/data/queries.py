from __future__ import annotations

import re

from config import AppConfig


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def fq_table(cfg: AppConfig, table: str) -> str:
    # Table names are interpolated, so only plain identifiers are allowed
    if not _IDENTIFIER.match(table):
        raise ValueError(f"Invalid table name: {table!r}")
    return f"{cfg.fq_schema}.`{table}`"


def q_create_todo_table(cfg: AppConfig, table: str) -> str:
    return f"""
    CREATE TABLE IF NOT EXISTS {fq_table(cfg, table)} (
      id STRING NOT NULL,
      task STRING,
      status STRING,
      created_at TIMESTAMP
    )
    """


def q_select_todos(cfg: AppConfig, table: str) -> str:
    return f"""
    SELECT
      id,
      task,
      status
    FROM {fq_table(cfg, table)}
    ORDER BY created_at, id
    """


def q_count_todos(cfg: AppConfig, table: str) -> str:
    return f"SELECT count(*) AS n FROM {fq_table(cfg, table)}"


def q_merge_todo(cfg: AppConfig, table: str) -> str:
    # Upsert keyed by id; created_at is set once and keeps display order stable
    return f"""
    MERGE INTO {fq_table(cfg, table)} AS t
    USING (SELECT :id AS id, :task AS task, :status AS status) AS s
    ON t.id = s.id
    WHEN MATCHED THEN UPDATE SET t.task = s.task, t.status = s.status
    WHEN NOT MATCHED THEN INSERT (id, task, status, created_at)
      VALUES (s.id, s.task, s.status, current_timestamp())
    """


def q_delete_todo(cfg: AppConfig, table: str) -> str:
    return f"DELETE FROM {fq_table(cfg, table)} WHERE id = :id"
