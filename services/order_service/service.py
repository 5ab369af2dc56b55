import structlog
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.repository import ItemRepository
from shared.observability import (
    storefront_checkout_duration_seconds,
    storefront_checkout_total,
    storefront_items_reserved_total,
)

from .cart import normalize_checkout
from .errors import CheckoutError, FatalError, NotFoundError, TransientError
from .models import Order
from .pricing import price_order
from .repository import OrderRepository
from .reservation import InventoryReservation
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)

TRANSIENT_DB_ERRORS = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.TimeoutError,
)


# Deadlock, serialization failure, lock timeout, statement timeout.
# asyncpg surfaces these as plain DBAPIError, so match on the sqlstate.
TRANSIENT_SQLSTATES = {"40P01", "40001", "55P03", "57014"}


def _translate_db_error(exc: Exception) -> CheckoutError:
    if isinstance(exc, TRANSIENT_DB_ERRORS) or getattr(exc, "connection_invalidated", False):
        return TransientError()
    if getattr(getattr(exc, "orig", None), "sqlstate", None) in TRANSIENT_SQLSTATES:
        return TransientError()
    return FatalError()


class OrderService:

    @staticmethod
    async def place_order(db: AsyncSession, data: OrderCreate) -> Order:
        with storefront_checkout_duration_seconds.time():
            try:
                order = await OrderService._checkout(db, data)
            except (TransientError, FatalError):
                storefront_checkout_total.labels(status="failed").inc()
                raise
            except CheckoutError as e:
                storefront_checkout_total.labels(status="rejected").inc()
                logger.info("checkout_rejected", **e.to_dict())
                raise

        storefront_checkout_total.labels(status="success").inc()
        return order

    @staticmethod
    async def _checkout(db: AsyncSession, data: OrderCreate) -> Order:
        customer, demand = normalize_checkout(data)

        try:
            async with db.begin():
                found = await ItemRepository.find_by_ids(db, demand.keys())
            catalog = {item.id: item for item in found}

            missing = [item_id for item_id in demand if item_id not in catalog]
            if missing:
                raise NotFoundError(missing)

            InventoryReservation.precheck(demand, catalog)
            priced = price_order(demand, catalog)

            # Decrements and inserts commit together or not at all
            async with db.begin():
                await InventoryReservation.reserve(db, demand)
                order = await OrderRepository.write_order(db, customer, priced)

        except (TimeoutError, ConnectionError) as e:
            logger.warning("checkout_transient_failure", error=repr(e))
            raise TransientError() from e
        except sa_exc.SQLAlchemyError as e:
            translated = _translate_db_error(e)
            if isinstance(translated, TransientError):
                logger.warning("checkout_transient_failure", error=repr(e))
            else:
                logger.exception("checkout_failed")
            raise translated from e

        storefront_items_reserved_total.inc(sum(demand.values()))
        logger.info(
            "order_placed",
            order_id=order.id,
            lines=len(priced.lines),
            total=str(priced.total),
        )
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        return await OrderRepository.get_order(db, order_id)
