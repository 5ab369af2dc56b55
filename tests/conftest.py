import os
import tempfile
from pathlib import Path

# Configuration is read at import time, so it has to be in place before
# anything from the app is imported.
_DB_DIR = tempfile.mkdtemp(prefix="checkout-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'checkout.db'}"
os.environ["TRACING_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["INTERNAL_API_KEY"] = "test-internal-key"
os.environ["CHECKOUT_SHIPPING_FEE"] = "0.00"

import pytest
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from shared.config.database import AsyncSessionLocal, Base, engine
from services.catalog_service.models import Item
from services.order_service.main import order_app
from services.order_service.models import Order, OrderLine
from services.order_service.schemas import OrderCreate

CUSTOMER = {
    "full_name": "Rana Haddad",
    "phone": "+961 70 123 456",
    "address": "12 Hamra Street",
    "city": "Beirut",
}


@pytest.fixture
def customer():
    return dict(CUSTOMER)


@pytest.fixture
def internal_headers():
    return {"X-Internal-API-Key": "test-internal-key"}


@pytest.fixture
def make_order():
    def _make(items, **overrides) -> OrderCreate:
        return OrderCreate(**{**CUSTOMER, **overrides, "items": items})
    return _make


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Pooled connections are tied to this test's event loop
    await engine.dispose()


@pytest.fixture
async def db(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def seed_item(database):
    async def _seed(item_id: int, name: str, price: str, stock: int) -> int:
        async with AsyncSessionLocal() as session:
            async with session.begin():
                session.add(Item(id=item_id, name=name, price=Decimal(price), stock_quantity=stock))
        return item_id
    return _seed


@pytest.fixture
def stock_of(database):
    async def _stock(item_id: int) -> int:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(Item.stock_quantity).where(Item.id == item_id))
            return result.scalar_one()
    return _stock


@pytest.fixture
def row_counts(database):
    async def _counts() -> tuple[int, int]:
        async with AsyncSessionLocal() as session:
            orders = await session.scalar(select(func.count()).select_from(Order))
            lines = await session.scalar(select(func.count()).select_from(OrderLine))
            return orders, lines
    return _counts


@pytest.fixture
async def client(database):
    transport = ASGITransport(app=order_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
