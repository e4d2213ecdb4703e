"""Custom metrics for the order service."""

from opentelemetry import metrics

meter = metrics.get_meter("order-svc")

menu_item_added_counter = meter.create_counter(
    name="menu_items_added_total",
    description="Total number of menu items added",
    unit="1",
)

menu_item_deleted_counter = meter.create_counter(
    name="menu_items_deleted_total",
    description="Total number of menu items deleted",
    unit="1",
)

order_created_counter = meter.create_counter(
    name="orders_created_total",
    description="Total number of orders placed, by whether the item was priced",
    unit="1",
)

order_status_counter = meter.create_counter(
    name="order_status_changes_total",
    description="Total number of order status changes by new status",
    unit="1",
)

order_amount_histogram = meter.create_histogram(
    name="order_amount",
    description="Amount charged per order",
    unit="1",
)


def record_menu_item_added(category: str) -> None:
    """Record a new menu item.

    Args:
        category: Menu category the item was added to (may be empty)
    """
    menu_item_added_counter.add(1, {"category": category or "uncategorized"})


def record_menu_item_deleted() -> None:
    """Record a menu item removal."""
    menu_item_deleted_counter.add(1)


def record_order_created(priced: bool, amount: float) -> None:
    """Record a placed order.

    Args:
        priced: Whether the ordered item was found on the menu
        amount: Amount charged for the order
    """
    order_created_counter.add(1, {"priced": priced})
    order_amount_histogram.record(amount)


def record_order_status_change(status: str) -> None:
    """Record an order status change.

    Args:
        status: The new status
    """
    order_status_counter.add(1, {"status": status})
