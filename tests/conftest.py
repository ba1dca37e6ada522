"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time and require the Supabase credentials
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Generator, Optional

from models.user import User
from parsers.proposal_synthesizer import ImportContext

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

    def __init__(self, client: "MockSupabaseClient", table: str, data: list = None, count: int = None):
        self._client = client
        self._table = table
        self._data = data or []
        self._count = count
        self._is_single = False
        self._pending_insert: Optional[list] = None

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        if isinstance(data, dict):
            data = [data]
        self._pending_insert = list(data)
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, **kwargs):
        return self

    def limit(self, count):
        self._data = self._data[:count]
        return self

    def execute(self) -> MockSupabaseResponse:
        failure = self._client.failures.get(self._table)
        if failure is not None:
            raise failure

        if self._pending_insert is not None:
            self._client.inserted.setdefault(self._table, []).extend(self._pending_insert)
            self._client.insert_calls += 1
            return MockSupabaseResponse(data=self._pending_insert)

        if self._is_single:
            data = self._data[0] if self._data else None
            return MockSupabaseResponse(
                data=data,
                count=1 if data else 0
            )
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, client: "MockSupabaseClient", name: str, data: list = None, count: int = None):
        self._client = client
        self._name = name
        self._data = data or []
        self._count = count

    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(self._client, self._name, self._data.copy(), self._count)

    def select(self, *args, **kwargs):
        return self._query()

    def insert(self, data):
        return self._query().insert(data)


class MockSupabaseClient:
    """
    Mock Supabase client.

    Inserted rows are recorded per table in `inserted`; a table
    configured with set_failure raises on every execute().
    """

    def __init__(self):
        self._tables = {}
        self.inserted: dict[str, list] = {}
        self.insert_calls = 0
        self.failures: dict[str, Exception] = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def set_failure(self, table_name: str, error: Exception):
        """Make every request against a table raise."""
        self.failures[table_name] = error

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(self, name, config["data"], config["count"])


# ===================
# FIXTURES
# ===================

@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached services and previews between tests."""
    import services.proposal_service as proposal_service
    import services.user_service as user_service
    import services.audit_service as audit_service
    from services import preview_cache_service

    proposal_service._proposal_service = None
    user_service._user_service = None
    audit_service._audit_service = None
    preview_cache_service.clear()
    yield
    proposal_service._proposal_service = None
    user_service._user_service = None
    audit_service._audit_service = None
    preview_cache_service.clear()


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("proposals", [
                ProposalFactory.create(), ...
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("users", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.proposal_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.user_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase


@pytest.fixture
def sample_user_data() -> dict:
    """Users table row for an account executive."""
    return {
        "id": "user-exec-1",
        "nome": "Ana Souza",
        "email": "ana@example.com",
        "telefone": "11999990000",
        "cargo": "Executiva de Contas",
        "role": "exec",
        "praca_ids": ["SP", "CAMP"],
        "praca_padrao_id": "SP",
        "active": True,
    }


@pytest.fixture
def user(sample_user_data) -> User:
    return User(**sample_user_data)


@pytest.fixture
def admin_user() -> User:
    return User(
        id="user-admin-1",
        nome="Carlos Lima",
        email="carlos@example.com",
        role="admin",
        praca_ids=[],
        praca_padrao_id="SP",
    )


@pytest.fixture
def imported_at() -> datetime:
    """Fixed import time so candidate ids are predictable."""
    return datetime(2025, 3, 10, 14, 30, 0)


@pytest.fixture
def import_context(user, imported_at) -> ImportContext:
    return ImportContext(user=user, imported_at=imported_at, return_days=1, reminder_days=3)
