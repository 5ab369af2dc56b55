import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from shared.config.database import Base
from services.catalog_service.models import Item  # noqa: F401 (order lines reference items.id)

DEFAULT_PAYMENT_METHOD = "cash_on_delivery"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    # Set by the fulfillment lifecycle, never by checkout
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


def _utcnow():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    payment_method = Column(String(50), nullable=False, default=DEFAULT_PAYMENT_METHOD)
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value)
    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="OrderLine.id",
    )


class OrderLine(Base):
    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # Reference only: name and price below are frozen at order time
    item_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="lines")
