from .setup import setup_observability
from .metrics import (
    storefront_checkout_total,
    storefront_checkout_duration_seconds,
    storefront_stock_conflicts_total,
    storefront_items_reserved_total
)
