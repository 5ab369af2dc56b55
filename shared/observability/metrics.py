from prometheus_client import Counter, Histogram

# Business Metrics
storefront_checkout_total = Counter(
    "storefront_checkout_total",
    "Total checkouts processed",
    ["status"] # Labels: 'success', 'rejected', 'failed'
)

storefront_checkout_duration_seconds = Histogram(
    "storefront_checkout_duration_seconds",
    "Checkout duration in seconds"
)

storefront_stock_conflicts_total = Counter(
    "storefront_stock_conflicts_total",
    "Checkouts refused because stock ran out",
    ["stage"] # Labels: 'precheck', 'reserve'
)

storefront_items_reserved_total = Counter(
    "storefront_items_reserved_total",
    "Units of stock decremented by committed orders"
)
