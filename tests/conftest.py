# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_user():
    return CurrentUser(
        id="admin-user-id",
        email="admin@obra.com.br",
        role="admin",
        empresa_id=1,
        nome="Ana Admin",
    )


@pytest.fixture
def member_user():
    return CurrentUser(
        id="member-user-id",
        email="membro@obra.com.br",
        role="membro",
        empresa_id=1,
        nome="Marcos Membro",
    )


@pytest.fixture
def viewer_user():
    return CurrentUser(
        id="viewer-user-id",
        email="visualizador@obra.com.br",
        role="visualizador",
        empresa_id=1,
    )


@pytest.fixture
def login_as(app):
    """Make every request authenticate as the given CurrentUser."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def mock_supabase_client():
    """Supabase client whose query builder returns itself for chaining."""
    mock_client = Mock()
    mock_query = Mock()
    for method in ("select", "eq", "limit", "order", "update"):
        getattr(mock_query, method).return_value = mock_query
    mock_client.table.return_value = mock_query
    return mock_client


@pytest.fixture
def usuario_row():
    """Factory for usuarios rows."""
    def _row(id="target-user-id", role="membro", permissoes=None, empresa_id=1, ativo=True):
        return {
            "id": id,
            "email": f"{id}@obra.com.br",
            "nome": id,
            "empresa_id": empresa_id,
            "role": role,
            "permissoes": permissoes,
            "ativo": ativo,
            "cargo": None,
            "avatar_url": None,
            "created_at": "2026-01-15T12:00:00+00:00",
        }
    return _row


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
