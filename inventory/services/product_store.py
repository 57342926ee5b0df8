"""
Product storage - owns the engine, the products table and every query against it
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from inventory.database import create_engine, create_session_factory, init_db
from inventory.errors import NotFoundError, StorageError, ValidationError
from inventory.models.product import Product

logger = logging.getLogger(__name__)

# (name, category, quantity, price, description)
SEED_PRODUCTS = [
    ("Laptop Pro", "Electronics", 15, 1299.99, "High-performance laptop"),
    ("Wireless Mouse", "Electronics", 45, 29.99, "Ergonomic wireless mouse"),
    ("Office Chair", "Furniture", 8, 199.99, "Comfortable office chair"),
    ("Coffee Beans", "Food", 120, 12.99, "Premium coffee beans"),
    ("Notebook Set", "Office Supplies", 200, 8.99, "Pack of 3 notebooks"),
]

MUTABLE_FIELDS = ("name", "category", "quantity", "price", "description")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _check_required(fields: Dict[str, Any]) -> None:
    """Raise ValidationError unless name, category, quantity and price are present"""
    missing = [key for key in ("name", "category") if not fields.get(key)]
    missing += [key for key in ("quantity", "price") if fields.get(key) is None]
    if missing:
        logger.debug(f"Rejected product, missing fields: {missing}")
        raise ValidationError("Missing required fields")


def _storage_error(exc: Exception) -> StorageError:
    orig = getattr(exc, "orig", None)
    return StorageError(str(orig) if orig is not None else str(exc))


class ProductStore:
    """
    Durable product storage on a single SQLite file.

    One store is opened at startup and closed at shutdown; request handlers
    receive it through the get_store dependency.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._sessions = None

    async def open(self) -> None:
        """Open the engine, create the schema and seed an empty table"""
        self.engine = create_engine(self.url, echo=self.echo)
        self._sessions = create_session_factory(self.engine)
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            raise _storage_error(e) from e
        logger.info(f"Database initialized at {self.url}")
        await self._seed()

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self._sessions = None
            logger.info("Database connection closed")

    async def _seed(self) -> None:
        """Insert the sample products, only when the table has no rows"""
        try:
            existing = await self.count()
        except StorageError as e:
            logger.error(f"Error checking seed: {e}")
            return

        if existing:
            logger.debug(f"Skipping seed, {existing} products present")
            return

        now = _utcnow()
        try:
            async with self._sessions() as session:
                session.add_all([
                    Product(
                        name=name,
                        category=category,
                        quantity=quantity,
                        price=price,
                        description=description,
                        created_at=now,
                        updated_at=now,
                    )
                    for name, category, quantity, price, description in SEED_PRODUCTS
                ])
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error seeding products: {e}")
            return
        logger.info(f"Seeded {len(SEED_PRODUCTS)} sample products")

    @asynccontextmanager
    async def _session(self):
        if self._sessions is None:
            raise StorageError("Database is not open")
        async with self._sessions() as session:
            try:
                yield session
            except (SQLAlchemyError, OverflowError) as e:
                # sqlite3 raises OverflowError for integers outside 64 bits
                logger.error(f"Storage error: {e}")
                raise _storage_error(e) from e

    async def count(self) -> int:
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(Product))
            return result.scalar() or 0

    async def list(self) -> List[Product]:
        """All products, most recently created first"""
        async with self._session() as session:
            result = await session.execute(
                select(Product).order_by(Product.created_at.desc(), Product.id.desc())
            )
            return list(result.scalars().all())

    async def get(self, product_id: int) -> Product:
        async with self._session() as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise NotFoundError()
            return product

    async def create(self, fields: Dict[str, Any]) -> int:
        """Insert a product and return its new id"""
        _check_required(fields)
        now = _utcnow()
        product = Product(
            **{key: fields.get(key) for key in MUTABLE_FIELDS},
            created_at=now,
            updated_at=now,
        )
        async with self._session() as session:
            session.add(product)
            await session.commit()
            logger.info(f"Created product {product.id}")
            return product.id

    async def update(self, product_id: int, fields: Dict[str, Any]) -> int:
        """Replace every mutable field of a product and refresh updated_at"""
        _check_required(fields)
        values = {key: fields.get(key) for key in MUTABLE_FIELDS}
        async with self._session() as session:
            result = await session.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(**values, updated_at=_utcnow())
            )
            await session.commit()
            if result.rowcount == 0:
                raise NotFoundError()
            logger.info(f"Updated product {product_id}")
            return result.rowcount

    async def delete(self, product_id: int) -> int:
        async with self._session() as session:
            result = await session.execute(
                delete(Product).where(Product.id == product_id)
            )
            await session.commit()
            if result.rowcount == 0:
                raise NotFoundError()
            logger.info(f"Deleted product {product_id}")
            return result.rowcount

    async def stats(self) -> Dict[str, Any]:
        """Inventory totals; sums over an empty table come back as 0"""
        async with self._session() as session:
            result = await session.execute(
                select(
                    func.count(Product.id).label("total_products"),
                    func.coalesce(func.sum(Product.quantity), 0).label("total_items"),
                    func.count(func.distinct(Product.category)).label("categories"),
                    func.coalesce(func.sum(Product.quantity * Product.price), 0.0).label("total_value"),
                )
            )
            return dict(result.one()._mapping)


def get_store(request: Request) -> ProductStore:
    """Dependency returning the store opened by the application lifespan"""
    return request.app.state.store
