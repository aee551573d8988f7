"""
This file contains shared fixtures and configuration for the test suite.

The environment is pinned before any ``app`` module is imported: a throwaway
SQLite database, a fixed signing secret and a small account table.
"""

import json
import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="usuarios_api_tests_"))

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
os.environ["USUARIOS_AUTENTICACAO"] = json.dumps(
    {
        "admin": {"senha": "admin123", "role": "admin"},
        "operador": {"senha": "op-senha", "role": "operador"},
    }
)
os.environ["LOG_DIR"] = str(_TEST_DIR / "logs")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


@pytest_asyncio.fixture
async def database():
    """
    Make sure the tables exist and empty them after the test.
    """
    from app.db import app_engine, init_db
    from app.models.base import Base

    await init_db()
    yield
    async with app_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest_asyncio.fixture
async def client(database) -> AsyncClient:
    """
    HTTP client bound to a fresh application instance.
    Lifespan events are not run; ``database`` already prepared the schema.
    """
    from main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def token_service():
    from app.dependencies.auth import get_token_service

    return get_token_service()


@pytest.fixture
def auth_headers(token_service) -> dict[str, str]:
    token = token_service.issue({"login": "admin", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}
