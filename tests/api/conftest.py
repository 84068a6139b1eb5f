"""API test fixtures — FastAPI app driven through httpx ASGITransport."""

import pytest
from httpx import ASGITransport, AsyncClient

from probe_api.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
