"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch
from datetime import datetime, timezone
from typing import Generator

from tests.factories import CatalogFactory

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None, log: list = None, failures: set = None):
        self._data = data or []
        self._count = count
        self._log = log if log is not None else []
        self._failures = failures or set()
        self._operation = "select"
        self._error = None

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        # Simulate insert - add ids and timestamps
        if isinstance(data, dict):
            data = [data]
        self._operation = "insert"
        # PostgREST takes the batch's columns from its rows; a batch where
        # only some rows carry "id" writes NULL ids for the others
        with_id = [item for item in data if "id" in item]
        if with_id and len(with_id) != len(data):
            self._error = 'null value in column "id" violates not-null constraint'
        now = datetime.now(timezone.utc).isoformat()
        rows = []
        for index, item in enumerate(data, start=1):
            row = dict(item)
            row.setdefault("id", f"test-uuid-{index}")
            row["created_at"] = now
            rows.append(row)
        self._log.append(("insert", [dict(item) for item in data]))
        self._data = rows
        return self

    def upsert(self, data):
        if isinstance(data, dict):
            data = [data]
        self._operation = "upsert"
        if any("id" not in item for item in data):
            self._error = 'null value in column "id" violates not-null constraint'
        rows = [dict(item) for item in data]
        self._log.append(("upsert", rows))
        self._data = rows
        return self

    def delete(self):
        self._operation = "delete"
        self._log.append(("delete", None))
        return self

    def eq(self, column, value):
        self._log.append(("eq", (column, value)))
        return self

    def in_(self, column, values):
        self._log.append(("in", (column, list(values))))
        return self

    def order(self, column, **kwargs):
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._operation in self._failures:
            raise Exception(f"{self._operation} failed")
        if self._error:
            raise Exception(self._error)
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None, log: list = None, failures: set = None):
        self._data = data or []
        self._count = count
        self._log = log
        self._failures = failures

    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(
            [dict(row) for row in self._data], self._count, self._log, self._failures
        )

    def select(self, *args, **kwargs):
        return self._query()

    def insert(self, data):
        return self._query().insert(data)

    def upsert(self, data):
        return self._query().upsert(data)

    def delete(self):
        return self._query().delete()


class MockSupabaseClient:
    """Mock Supabase client that records write calls per table."""

    def __init__(self):
        self._tables = {}
        self._failures: dict[str, set] = {}
        self.calls: dict[str, list] = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def fail_on(self, table_name: str, operation: str):
        """Make every `operation` ("insert", "upsert", "delete", "select") on a table raise."""
        self._failures.setdefault(table_name, set()).add(operation)

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(
            config["data"],
            config["count"],
            self.calls.setdefault(name, []),
            self._failures.get(name),
        )


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("variant_types", [
                {"id": "t-color", "name": "color", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("product_variants", [...])
    """
    with patch("services.attribute_catalog_service.get_supabase_client", return_value=mock_supabase):
        with patch("services.product_variant_service.get_supabase_client", return_value=mock_supabase):
            yield mock_supabase


@pytest.fixture
def color_size_catalog():
    """
    Color = {Red, Blue}, Size = {S, M}.

    Returns:
        (color_type, size_type, {"red": ..., "blue": ..., "s": ..., "m": ...})
    """
    return CatalogFactory.color_size()


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/attributes")
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
