from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so components/styles.py and the plotly theme read one source.
#
THEME = {
    # Backgrounds (Oat)
    "bg_primary": "#F4F3EE",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents
    "accent_primary": "#FF3621",
    "navy_900": "#0B1220",
    "navy_800": "#111C33",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E6E4E0",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}

DEFAULT_TODO_TABLE = "todos"
DEFAULT_SEED_COUNT = 5


@dataclass(frozen=True)
class AppConfig:
    # Only needed for the persistent backend (Databricks SQL)
    databricks_host: str
    databricks_http_path: str
    databricks_catalog: str
    databricks_schema: str

    # Optional auth. If unset outside Databricks Apps, the persistent backend fails and mock kicks in.
    databricks_token: Optional[str]

    todo_table: str

    # Defaults
    default_use_mock: bool
    mock_seed_count: int
    log_level: str

    @property
    def fq_schema(self) -> str:
        # Unity Catalog fully qualified schema name
        return f"`{self.databricks_catalog}`.`{self.databricks_schema}`"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level(raw: Optional[str]) -> str:
    level = (raw or "INFO").upper()
    return level if level in _LOG_LEVELS else "INFO"


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Works with Databricks Apps env var injection
    """
    load_dotenv(override=False)

    return AppConfig(
        databricks_host=_getenv("DATABRICKS_HOST") or "",
        databricks_http_path=_getenv("DATABRICKS_HTTP_PATH") or "",
        databricks_catalog=_getenv("DATABRICKS_CATALOG", "main") or "",
        databricks_schema=_getenv("DATABRICKS_SCHEMA", "todo_demo") or "",
        databricks_token=_getenv("DATABRICKS_TOKEN"),
        todo_table=_getenv("TODO_TABLE", DEFAULT_TODO_TABLE) or DEFAULT_TODO_TABLE,
        default_use_mock=(_getenv("USE_MOCK_DATA", "true") or "true").lower() == "true",
        mock_seed_count=_getenv_int("MOCK_SEED_COUNT", DEFAULT_SEED_COUNT),
        log_level=_log_level(_getenv("LOG_LEVEL", "INFO")),
    )
