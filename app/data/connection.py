from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd
from databricks import sql

from config import AppConfig


logger = logging.getLogger(__name__)


class DatabricksAuthError(RuntimeError):
    pass


def _is_databricks_apps() -> bool:
    """Check if running in Databricks Apps environment."""
    return bool(os.getenv("DATABRICKS_APP_NAME"))


@dataclass(frozen=True)
class SqlClient:
    cfg: AppConfig

    @property
    def server_hostname(self) -> str:
        return self.cfg.databricks_host.replace("https://", "").replace("http://", "")

    def query(self, statement: str, params: Optional[dict[str, Any]] = None) -> pd.DataFrame:
        """
        Returns a pandas.DataFrame from Databricks SQL.
        Supports both PAT auth (local dev) and Databricks Apps OAuth.
        """
        logger.debug("Databricks SQL query: %s", statement.strip())
        if _is_databricks_apps():
            try:
                return self._run_with_sdk(statement, params)
            except ImportError:
                pass  # Fall through to PAT auth
            except Exception as e:
                logger.warning("Databricks Apps OAuth failed, trying PAT: %s", e)

        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(statement, params or {})
                rows = cur.fetchall()
                cols = [d[0] for d in (cur.description or [])]
                return pd.DataFrame([tuple(r) for r in rows], columns=cols)

    def execute(self, statement: str, params: Optional[dict[str, Any]] = None) -> None:
        """Runs a statement that returns no rows (DDL, MERGE, DELETE, INSERT)."""
        logger.debug("Databricks SQL execute: %s", statement.strip())
        if _is_databricks_apps():
            try:
                self._run_with_sdk(statement, params)
                return
            except ImportError:
                pass
            except Exception as e:
                logger.warning("Databricks Apps OAuth failed, trying PAT: %s", e)

        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(statement, params or {})

    def _connect(self):
        if not self.cfg.databricks_token:
            raise DatabricksAuthError(
                "Missing DATABRICKS_TOKEN for Databricks SQL authentication. "
                "Set DATABRICKS_TOKEN (PAT) for local dev, or run in Databricks Apps for automatic auth."
            )
        return sql.connect(
            server_hostname=self.server_hostname,
            http_path=self.cfg.databricks_http_path,
            access_token=self.cfg.databricks_token,
        )

    def _run_with_sdk(self, statement: str, params: Optional[dict[str, Any]]) -> pd.DataFrame:
        from databricks.sdk import WorkspaceClient
        from databricks.sdk.service.sql import StatementParameterListItem, StatementState

        # Use SDK client which automatically picks up Apps OAuth
        w = WorkspaceClient()

        http_path = self.cfg.databricks_http_path
        warehouse_id = http_path.split("/")[-1] if "/" in http_path else http_path

        parameters = [
            StatementParameterListItem(name=k, value=None if v is None else str(v))
            for k, v in (params or {}).items()
        ]
        response = w.statement_execution.execute_statement(
            warehouse_id=warehouse_id,
            statement=statement,
            parameters=parameters or None,
            wait_timeout="30s",
        )

        if response.status and response.status.state == StatementState.SUCCEEDED:
            if response.result and response.result.data_array:
                cols = [c.name for c in response.manifest.schema.columns] if response.manifest else []
                return pd.DataFrame(response.result.data_array, columns=cols)
            return pd.DataFrame()
        error_msg = response.status.error.message if response.status and response.status.error else "Unknown error"
        raise RuntimeError(f"SQL execution failed: {error_msg}")


def get_sql_client(cfg: AppConfig) -> SqlClient:
    return SqlClient(cfg=cfg)
