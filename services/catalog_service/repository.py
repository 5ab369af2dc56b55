from typing import Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import MAX_ITEM_ID, Item


class ItemRepository:

    @staticmethod
    async def find_by_ids(db: AsyncSession, item_ids: Iterable[int]) -> list[Item]:
        """
        Catalog lookup: returns only the items that exist.

        Ids past the column range cannot exist and are left out of the query.
        """
        ids = {item_id for item_id in item_ids if item_id <= MAX_ITEM_ID}
        if not ids:
            return []
        result = await db.execute(select(Item).where(Item.id.in_(ids)))
        return list(result.scalars().all())

    @staticmethod
    async def get_stock(db: AsyncSession, item_id: int) -> Optional[int]:
        result = await db.execute(
            select(Item.stock_quantity).where(Item.id == item_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def decrement_stock(db: AsyncSession, item_id: int, quantity: int) -> bool:
        """
        Subtract `quantity` from the item's stock only if enough is left.

        One UPDATE with the stock check in its WHERE clause, so the comparison
        and the subtraction happen against the locked row in a single step.
        Returns False when no row matched.
        """
        stmt = (
            update(Item)
            .where(Item.id == item_id, Item.stock_quantity >= quantity)
            .values(stock_quantity=Item.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1
