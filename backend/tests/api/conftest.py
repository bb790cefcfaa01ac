"""
API-specific test fixtures.

Routes run against the mocked connection from the top-level conftest, so
repository functions are patched per test; tokens are signed with the
test settings.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from colors_api.config import Settings
from colors_api.schemas.auth import Identity
from colors_api.utils.auth import create_access_token


def bearer(identity: Identity, settings: Settings) -> dict[str, str]:
    """Authorization header for an identity."""
    return {"Authorization": f"Bearer {create_access_token(identity, settings)}"}


# =============================================================================
# App and Client
# =============================================================================


@pytest.fixture
def app(test_settings: Settings, mock_conn):
    """Application wired to the mocked connection."""
    from colors_api.database import get_db
    from colors_api.main import create_app

    application = create_app(test_settings)

    async def override_get_db():
        yield mock_conn

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an httpx AsyncClient for testing API routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def admin_headers(test_settings: Settings) -> dict[str, str]:
    return bearer(Identity(username="admin", is_admin=True), test_settings)


@pytest.fixture
def user_headers(test_settings: Settings) -> dict[str, str]:
    """Headers for the non-admin user "test"."""
    return bearer(Identity(username="test", is_admin=False), test_settings)


@pytest.fixture
def other_headers(test_settings: Settings) -> dict[str, str]:
    """Headers for a non-admin user who owns nothing under test."""
    return bearer(Identity(username="other", is_admin=False), test_settings)
