"""Shared test fixtures for pytest.

Provides fake pyodbc connections and an isolated database configuration, so
no MySQL server or ODBC driver is needed.
"""

from pathlib import Path
import sys
from typing import Any, List, Optional

import pyodbc
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import database_utils
from config_manager import DatabaseConfig

CONFIG_VARS = (
    "DB_HOST", "DB_PORT", "DB_DATABASE", "DB_USERNAME", "DB_PASSWORD",
    "DB_DRIVER", "DB_QUERY", "SQL_PASSWORD_KEY_PATH", "SQL_PASSWORD_PATH",
)


class FakeCursor:
    def __init__(self, events: List[str], columns: Optional[List[str]], rows: List[tuple], error: Optional[Exception]):
        self.events = events
        self.columns = columns
        self.rows = rows
        self.error = error
        self.executed: List[str] = []

    @property
    def description(self):
        if self.columns is None:
            return None
        return [(name, str, None, None, None, None, True) for name in self.columns]

    def execute(self, query: str):
        self.events.append("execute")
        self.executed.append(query)
        if self.error is not None:
            raise self.error
        return self

    def fetchall(self):
        self.events.append("fetchall")
        return list(self.rows)

    def close(self):
        self.events.append("cursor.close")


class FakeConnection:
    def __init__(self, events: List[str], cursor: FakeCursor, close_error: Optional[Exception] = None,
                 cursor_error: Optional[Exception] = None):
        self.events = events
        self._cursor = cursor
        self.close_error = close_error
        self.cursor_error = cursor_error
        self.close_calls = 0

    def cursor(self):
        if self.cursor_error is not None:
            raise self.cursor_error
        return self._cursor

    def close(self):
        self.events.append("close")
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeDriver:
    """Stands in for pyodbc.connect and records what happened."""

    def __init__(self) -> None:
        self.events: List[str] = []
        self.connection_strings: List[str] = []
        self.connect_error: Optional[Exception] = None
        self.query_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.cursor_error: Optional[Exception] = None
        self.columns: Optional[List[str]] = ["id", "name"]
        self.rows: List[tuple] = [(1, "widget"), (2, "gadget")]
        self.connection: Optional[FakeConnection] = None

    def connect(self, connection_string: str, *args: Any, **kwargs: Any) -> FakeConnection:
        self.events.append("connect")
        self.connection_strings.append(connection_string)
        if self.connect_error is not None:
            raise self.connect_error
        cursor = FakeCursor(self.events, self.columns, self.rows, self.query_error)
        self.connection = FakeConnection(self.events, cursor, self.close_error, self.cursor_error)
        return self.connection

    @property
    def cursor(self) -> Optional[FakeCursor]:
        return self.connection._cursor if self.connection else None


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove every configuration variable from the environment."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def db_env(clean_env, monkeypatch) -> None:
    monkeypatch.setenv("DB_HOST", "db.example.com")
    monkeypatch.setenv("DB_USERNAME", "app")
    monkeypatch.setenv("DB_PASSWORD", "s3cret")
    monkeypatch.setenv("DB_DATABASE", "shop")


@pytest.fixture
def config(db_env) -> DatabaseConfig:
    return DatabaseConfig()


@pytest.fixture
def fake_driver(monkeypatch) -> FakeDriver:
    driver = FakeDriver()
    monkeypatch.setattr(database_utils.pyodbc, "connect", driver.connect)
    return driver


def odbc_error(sqlstate: str, message: str) -> pyodbc.Error:
    return pyodbc.Error(sqlstate, message)
