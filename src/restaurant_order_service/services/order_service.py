"""Order service for placing orders and tracking their status."""

import logging
from datetime import UTC, datetime
from typing import Any

from restaurant_order_service.exceptions import InvalidInputError, NotFoundError
from restaurant_order_service.models.order_models import Order, OrderStatusEnum
from restaurant_order_service.observability import traced
from restaurant_order_service.observability.metrics import (
    record_order_created,
    record_order_status_change,
)
from restaurant_order_service.repositories.json_store import (
    ORDERS_FILE,
    JsonStore,
    parse_record,
    record_id,
)
from restaurant_order_service.services.id_generator import IdGenerator
from restaurant_order_service.services.menu_service import MenuService
from restaurant_order_service.services.value_coercion import coerce_quantity

logger = logging.getLogger(__name__)


class OrderService:
    """Service for the order collection stored in orders.json.

    Orders are priced against the current menu at creation time. After that
    only their status changes; orders are never deleted.
    """

    def __init__(
        self,
        store: JsonStore,
        menu_service: MenuService,
        id_generator: IdGenerator,
    ) -> None:
        """Initialize the OrderService.

        Args:
            store: JSON store holding the orders file
            menu_service: Menu lookup used to price new orders
            id_generator: Source of new order ids
        """
        self.store = store
        self.menu_service = menu_service
        self.id_generator = id_generator

    @traced("list_orders")
    async def list_orders(self) -> list[Order]:
        """Return every order in the order it was placed.

        Raises:
            StorageError: If a stored order cannot be parsed
        """
        records = self.store.read(ORDERS_FILE, [])
        return [parse_record(ORDERS_FILE, record, Order.from_record) for record in records]

    @traced("create_order")
    async def create_order(
        self,
        name: str | None,
        phone: str | None,
        pizza: str | None,
        size: str | None,
        qty: Any,
        address: str | None,
    ) -> Order:
        """Place a new order.

        The amount is the menu price of ``pizza`` times the quantity, or 0 when
        no menu item has that name.

        Args:
            name: Customer name
            phone: Customer phone number
            pizza: Name of the ordered menu item
            size: Requested size
            qty: Quantity, coerced to a positive integer
            address: Delivery address

        Returns:
            The created Order with status Pending

        Raises:
            InvalidInputError: If any field is missing
            StorageError: If the orders file cannot be written
        """
        if not all([name, phone, pizza, size, qty, address]):
            raise InvalidInputError("All fields are required")

        quantity = coerce_quantity(qty)
        menu_item = await self.menu_service.find_by_name(pizza)
        amount = round(menu_item.price * quantity, 2) if menu_item else 0

        async with self.store.lock(ORDERS_FILE):
            records = self.store.read(ORDERS_FILE, [])
            order = Order(
                id=self.id_generator.next_id(
                    [rid for rid in map(record_id, records) if isinstance(rid, int)]
                ),
                customer=name,
                phone=phone,
                pizza=pizza,
                size=size,
                qty=quantity,
                address=address,
                amount=amount,
                status=OrderStatusEnum.PENDING.value,
                created_at=_utc_timestamp(),
            )
            records.append(order.to_record())
            self.store.write(ORDERS_FILE, records)

        if menu_item is None:
            logger.warning(f"Order {order.id} placed for unknown item '{pizza}', amount set to 0")
        logger.info(f"Created order {order.id} for {quantity} x {pizza}, amount {amount}")
        record_order_created(priced=menu_item is not None, amount=amount)
        return order

    @traced("update_order_status")
    async def update_order_status(self, order_id: int, status: str | None) -> Order:
        """Change the status of an order.

        Only the status key of the stored record is touched.

        Args:
            order_id: Id of the order to update
            status: New status, e.g. "Preparing" or "Delivered"

        Returns:
            The updated Order

        Raises:
            InvalidInputError: If status is missing
            NotFoundError: If no order has that id
            StorageError: If the stored order cannot be parsed or the file cannot be written
        """
        if not status:
            raise InvalidInputError("status required")

        async with self.store.lock(ORDERS_FILE):
            records = self.store.read(ORDERS_FILE, [])
            record = next((r for r in records if record_id(r) == order_id), None)
            if record is None:
                raise NotFoundError("Order not found")

            # Parse before writing so a rejected record leaves the file untouched
            updated = parse_record(ORDERS_FILE, {**record, "status": status}, Order.from_record)

            previous = record.get("status")
            record["status"] = status
            self.store.write(ORDERS_FILE, records)

        logger.info(f"Order {order_id} status changed from {previous} to {status}")
        record_order_status_change(status)
        return updated


def _utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
