from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String
from shared.config.database import Base

# Largest value an Integer primary key can hold on PostgreSQL
MAX_ITEM_ID = 2**31 - 1

class Item(Base):
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_items_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
