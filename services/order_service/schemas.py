from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

class OrderCreate(BaseModel):
    # Everything here is untrusted; the cart normalizer does the real checks.
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None
    payment_method: Optional[str] = None
    items: List[Any] = []

class OrderLineResponse(BaseModel):
    item_id: int
    name: str
    unit_price: float
    quantity: int
    line_total: float

    class Config:
        from_attributes = True

class OrderResponse(BaseModel):
    id: int
    status: str
    payment_method: str
    subtotal: float
    shipping: float
    total: float
    items: List[OrderLineResponse] = Field(validation_alias="lines")

    class Config:
        from_attributes = True

class OrderDetailResponse(OrderResponse):
    full_name: str
    phone: str
    address: str
    city: str
    notes: Optional[str]
    created_at: datetime
