"""
Cart normalization: turns an untrusted checkout payload into customer
details plus a demand map (item id -> total requested quantity).

Pure functions, no I/O. Any bad entry rejects the whole request.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .errors import ValidationError
from .models import DEFAULT_PAYMENT_METHOD
from .schemas import OrderCreate

MAX_CART_ENTRIES = 200

FULL_NAME_MAX = 255
PHONE_MAX = 50
ADDRESS_MAX = 500
CITY_MAX = 255
NOTES_MAX = 2000
PAYMENT_METHOD_MAX = 50


@dataclass(frozen=True)
class CustomerDetails:
    full_name: str
    phone: str
    address: str
    city: str
    notes: Optional[str]
    payment_method: str


def clean_string(value: Any, max_len: int) -> Optional[str]:
    """Trimmed and truncated string, or None when missing or blank."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value:
        return None
    return value[:max_len]


def to_positive_int(value: Any) -> Optional[int]:
    # bool is an int subclass; true/false are never quantities
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            return None
        number = int(text)
    else:
        return None
    return number if number > 0 else None


def normalize_customer(payload: OrderCreate) -> CustomerDetails:
    full_name = clean_string(payload.full_name, FULL_NAME_MAX)
    phone = clean_string(payload.phone, PHONE_MAX)
    address = clean_string(payload.address, ADDRESS_MAX)
    city = clean_string(payload.city, CITY_MAX)

    if not (full_name and phone and address and city):
        raise ValidationError("full_name, phone, address, city are required")

    return CustomerDetails(
        full_name=full_name,
        phone=phone,
        address=address,
        city=city,
        notes=clean_string(payload.notes, NOTES_MAX),
        payment_method=clean_string(payload.payment_method, PAYMENT_METHOD_MAX)
        or DEFAULT_PAYMENT_METHOD,
    )


def build_demand_map(entries: Sequence[Any]) -> dict[int, int]:
    """
    Collapse cart entries into {item_id: quantity}, summing repeated ids.

    Keys keep the order in which ids first appear in the cart.
    """
    if not entries:
        raise ValidationError("items is required")
    if len(entries) > MAX_CART_ENTRIES:
        raise ValidationError("too many items")

    demand: dict[int, int] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ValidationError("each item must have item_id and quantity (positive integers)")
        item_id = to_positive_int(entry.get("item_id"))
        quantity = to_positive_int(entry.get("quantity"))
        if item_id is None or quantity is None:
            raise ValidationError("each item must have item_id and quantity (positive integers)")
        demand[item_id] = demand.get(item_id, 0) + quantity
    return demand


def normalize_checkout(payload: OrderCreate) -> tuple[CustomerDetails, dict[int, int]]:
    customer = normalize_customer(payload)
    return customer, build_demand_map(payload.items)
