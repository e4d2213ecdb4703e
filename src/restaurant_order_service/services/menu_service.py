"""Menu service for listing, adding and removing menu items."""

import logging
from typing import Any

from restaurant_order_service.exceptions import InvalidInputError, NotFoundError
from restaurant_order_service.models.menu_models import MenuItem
from restaurant_order_service.observability import traced
from restaurant_order_service.observability.metrics import (
    record_menu_item_added,
    record_menu_item_deleted,
)
from restaurant_order_service.repositories.json_store import (
    MENU_FILE,
    JsonStore,
    parse_record,
    record_id,
)
from restaurant_order_service.services.id_generator import IdGenerator
from restaurant_order_service.services.value_coercion import coerce_number

logger = logging.getLogger(__name__)


class MenuService:
    """Service for the menu collection stored in menu.json."""

    def __init__(self, store: JsonStore, id_generator: IdGenerator) -> None:
        """Initialize the MenuService.

        Args:
            store: JSON store holding the menu file
            id_generator: Source of new menu item ids
        """
        self.store = store
        self.id_generator = id_generator

    @traced("list_menu")
    async def list_menu(self) -> list[MenuItem]:
        """Return every menu item in stored order.

        Raises:
            StorageError: If a stored item cannot be parsed
        """
        records = self.store.read(MENU_FILE, [])
        return [parse_record(MENU_FILE, record, MenuItem.from_record) for record in records]

    @traced("add_menu_item")
    async def add_menu_item(
        self,
        name: str | None,
        price: Any,
        tag: str | None = None,
        image: str | None = None,
        category: str | None = None,
    ) -> MenuItem:
        """Add an item to the menu.

        Args:
            name: Item name (required)
            price: Item price, number or numeric string (required)
            tag: Optional label
            image: Optional image URL
            category: Optional menu section

        Returns:
            The created MenuItem

        Raises:
            InvalidInputError: If name or price is missing, or price is not a non-negative number
            StorageError: If the menu file cannot be written
        """
        if not name or not price:
            raise InvalidInputError("name and price required")

        numeric_price = coerce_number(price)
        if numeric_price is None or numeric_price < 0:
            raise InvalidInputError("price must be a non-negative number")

        async with self.store.lock(MENU_FILE):
            records = self.store.read(MENU_FILE, [])
            item = MenuItem(
                id=self.id_generator.next_id(_stored_ids(records)),
                name=name,
                price=numeric_price,
                tag=tag or "",
                image=image or "",
                category=category or "",
            )
            records.append(item.to_record())
            self.store.write(MENU_FILE, records)

        logger.info(f"Added menu item {item.id} ({item.name}) at {item.price}")
        record_menu_item_added(item.category)
        return item

    @traced("delete_menu_item")
    async def delete_menu_item(self, item_id: int) -> None:
        """Remove the menu item with the given id.

        Args:
            item_id: Id of the item to remove

        Raises:
            NotFoundError: If no item has that id
            StorageError: If the menu file cannot be written
        """
        async with self.store.lock(MENU_FILE):
            records = self.store.read(MENU_FILE, [])
            remaining = [record for record in records if record_id(record) != item_id]
            if len(remaining) == len(records):
                raise NotFoundError("Menu item not found")
            self.store.write(MENU_FILE, remaining)

        logger.info(f"Deleted menu item {item_id}")
        record_menu_item_deleted()

    async def find_by_name(self, name: str) -> MenuItem | None:
        """Find the first menu item whose name matches exactly.

        Args:
            name: Item name to look up

        Returns:
            MenuItem if found, None otherwise

        Raises:
            StorageError: If the matching item cannot be parsed
        """
        for record in self.store.read(MENU_FILE, []):
            if isinstance(record, dict) and record.get("name") == name:
                return parse_record(MENU_FILE, record, MenuItem.from_record)
        return None


def _stored_ids(records: list[Any]) -> list[int]:
    return [rid for rid in map(record_id, records) if isinstance(rid, int)]
