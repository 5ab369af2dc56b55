from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .cart import CustomerDetails
from .models import Order, OrderLine, OrderStatus
from .pricing import PricedLine, PricedOrder


class OrderRepository:
    # Writes only flush; the caller owns the transaction and commits once.

    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def add_lines(db: AsyncSession, order: Order, lines: list[OrderLine]) -> Order:
        order.lines.extend(lines)
        await db.flush()
        return order

    @staticmethod
    async def write_order(db: AsyncSession, customer: CustomerDetails, priced: PricedOrder) -> Order:
        """Insert the order header, then all of its lines as one batch."""
        order = Order(
            full_name=customer.full_name,
            phone=customer.phone,
            address=customer.address,
            city=customer.city,
            notes=customer.notes,
            payment_method=customer.payment_method,
            status=OrderStatus.PENDING.value,
            subtotal=priced.subtotal,
            shipping=priced.shipping,
            total=priced.total,
            lines=[],
        )
        await OrderRepository.create_order(db, order)
        lines = [_line_row(line) for line in priced.lines]
        return await OrderRepository.add_lines(db, order, lines)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()


def _line_row(line: PricedLine) -> OrderLine:
    return OrderLine(
        item_id=line.item_id,
        name=line.name,
        unit_price=line.unit_price,
        quantity=line.quantity,
        line_total=line.line_total,
    )
