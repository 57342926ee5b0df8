"""Initialize database tables and sample products"""
import asyncio
from inventory.config import get_settings
from inventory.services.product_store import ProductStore
from inventory.utils.logger import configure_logging


async def init():
    settings = get_settings()
    configure_logging(settings.DEBUG)
    store = ProductStore(settings.database_url, echo=settings.DEBUG)
    await store.open()
    try:
        count = await store.count()
    finally:
        await store.close()
    print(f"Database ready at {settings.SQLITE_PATH} ({count} products).")


if __name__ == "__main__":
    asyncio.run(init())
