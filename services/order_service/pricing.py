"""
Order assembly: per-line pricing and order totals.

Prices always come from the catalog snapshot; whatever the client sent is
ignored. All amounts are Decimals rounded half-up to cents.
"""
import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from services.catalog_service.models import Item

CENT = Decimal("0.01")
LINE_NAME_MAX = 255


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


DEFAULT_SHIPPING = money(os.getenv("CHECKOUT_SHIPPING_FEE", "0.00"))


@dataclass(frozen=True)
class PricedLine:
    item_id: int
    name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class PricedOrder:
    lines: tuple[PricedLine, ...]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal


def price_line(item: Item, quantity: int) -> PricedLine:
    unit_price = money(item.price)
    return PricedLine(
        item_id=item.id,
        name=str(item.name or "")[:LINE_NAME_MAX],
        unit_price=unit_price,
        quantity=quantity,
        line_total=money(unit_price * quantity),
    )


def price_order(
    demand: Mapping[int, int],
    catalog: Mapping[int, Item],
    shipping: Optional[Decimal] = None,
) -> PricedOrder:
    lines = tuple(price_line(catalog[item_id], qty) for item_id, qty in demand.items())
    subtotal = money(sum((line.line_total for line in lines), Decimal("0")))
    shipping = DEFAULT_SHIPPING if shipping is None else money(shipping)
    return PricedOrder(
        lines=lines,
        subtotal=subtotal,
        shipping=shipping,
        total=money(subtotal + shipping),
    )
