"""
Test fixtures - temporary SQLite file per test + HTTP client bound to the app
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from inventory.main import app
from inventory.services.product_store import ProductStore, get_store


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'inventory.db'}"


@pytest_asyncio.fixture()
async def store(db_url):
    """Opened store; the table starts with the seed products"""
    s = ProductStore(db_url)
    await s.open()
    yield s
    await s.close()


@pytest_asyncio.fixture()
async def empty_store(store):
    """Opened store with every seed row removed"""
    for product in await store.list():
        await store.delete(product.id)
    return store


@pytest_asyncio.fixture()
async def client(store):
    """httpx AsyncClient bound to the FastAPI app, using the test store"""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
