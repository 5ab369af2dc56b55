"""
Create the checkout tables and seed a small sample catalog.

Safe to run repeatedly: items are matched by name and only inserted when
missing. Usage: python -m scripts.init_db
"""
import asyncio
import os
from decimal import Decimal

import structlog
from sqlalchemy import select

from shared.config.database import AsyncSessionLocal, create_tables, engine
from shared.observability.setup import configure_logging
from services.catalog_service.models import Item
from services.order_service.models import Order, OrderLine  # noqa: F401 (registers models with SQLAlchemy Base)

logger = structlog.get_logger(__name__)

SEED_STOCK_QUANTITY = int(os.getenv("SEED_STOCK_QUANTITY", "100"))

SAMPLE_ITEMS = [
    ("Chocolate Cake", Decimal("15.99")),
    ("Pistachio Ice Cream", Decimal("8.50")),
    ("Strawberry Smoothie", Decimal("6.99")),
    ("Vanilla Cupcake", Decimal("4.99")),
    ("Coffee", Decimal("3.50")),
]


async def seed_items(stock_quantity: int = SEED_STOCK_QUANTITY) -> int:
    async with AsyncSessionLocal() as db:
        async with db.begin():
            result = await db.execute(select(Item.name))
            existing = set(result.scalars().all())
            missing = [
                Item(name=name, price=price, stock_quantity=stock_quantity)
                for name, price in SAMPLE_ITEMS
                if name not in existing
            ]
            db.add_all(missing)
    return len(missing)


async def main():
    configure_logging()
    await create_tables()
    created = await seed_items()
    logger.info("catalog_seeded", created=created, total=len(SAMPLE_ITEMS))
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
