from typing import Mapping

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.models import Item
from services.catalog_service.repository import ItemRepository
from shared.observability import storefront_stock_conflicts_total

from .errors import OutOfStockError

logger = structlog.get_logger(__name__)


class InventoryReservation:

    @staticmethod
    def precheck(demand: Mapping[int, int], catalog: Mapping[int, Item]) -> None:
        """
        Fail fast against the stock seen by the catalog lookup.

        Only an early exit: stock can move before `reserve` runs, which is
        where oversell is actually prevented.
        """
        for item_id, requested in demand.items():
            available = catalog[item_id].stock_quantity
            if requested > available:
                storefront_stock_conflicts_total.labels(stage="precheck").inc()
                raise OutOfStockError(item_id, requested, available)

    @staticmethod
    async def reserve(db: AsyncSession, demand: Mapping[int, int]) -> None:
        """
        Decrement stock for every demanded item inside the caller's transaction.

        Items are processed in ascending id order so overlapping orders lock
        rows in the same sequence. The first decrement that matches no row
        raises OutOfStockError; the caller's rollback undoes the ones before it.
        """
        for item_id in sorted(demand):
            requested = demand[item_id]
            if await ItemRepository.decrement_stock(db, item_id, requested):
                continue

            available = await ItemRepository.get_stock(db, item_id)
            storefront_stock_conflicts_total.labels(stage="reserve").inc()
            logger.warning(
                "stock_conflict",
                item_id=item_id,
                requested=requested,
                available=available,
            )
            raise OutOfStockError(item_id, requested, available or 0)
