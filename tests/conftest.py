"""Root test fixtures.

Environment overrides are set BEFORE any app imports so that the app
configuration module picks up test values.
"""

import os

# ---------------------------------------------------------------------------
# Environment overrides: MUST be set before importing anything from `xsrf_guard`
# ---------------------------------------------------------------------------
os.environ["DEBUG"] = "1"
os.environ["COOKIE_SECRET"] = "test-cookie-secret-not-for-production"
os.environ["CSRF_COOKIE_SIGNED"] = "0"

import httpx
import pytest

# Now safe to import app modules
from xsrf_guard.main import app


@pytest.fixture
async def test_client():
    """Async HTTP test client backed by the demo FastAPI app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
