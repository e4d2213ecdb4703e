"""Unit tests for menu, order and settings models."""

import pytest
from pydantic import ValidationError

from restaurant_order_service.models.menu_models import MenuItem
from restaurant_order_service.models.order_models import (
    Order,
    OrderCreate,
    OrderStatusEnum,
)
from restaurant_order_service.models.settings_models import Settings, SettingsUpdate


@pytest.mark.unit
class TestMenuItem:
    """Test suite for MenuItem model."""

    def test_optional_fields_default_to_empty(self) -> None:
        """Test that tag, image and category default to empty strings."""
        item = MenuItem(id=1, name="Margherita", price=250)

        assert item.tag == ""
        assert item.image == ""
        assert item.category == ""

    def test_negative_price_rejected(self) -> None:
        """Test that price must be non-negative."""
        with pytest.raises(ValidationError):
            MenuItem(id=1, name="Margherita", price=-1)

    def test_record_round_trip_keeps_integer_price(self, mock_menu_records: list[dict]) -> None:
        """Test that stored records convert back unchanged."""
        for record in mock_menu_records:
            assert MenuItem.from_record(record).to_record() == record

        assert isinstance(MenuItem.from_record(mock_menu_records[0]).price, int)


@pytest.mark.unit
class TestOrder:
    """Test suite for Order model."""

    def test_record_uses_wire_names(self, mock_order_record: dict) -> None:
        """Test that records use createdAt while attributes are snake_case."""
        order = Order.from_record(mock_order_record)

        assert order.created_at == "2024-01-15T10:30:00.000Z"
        assert order.to_record() == mock_order_record

    def test_populate_by_field_name(self) -> None:
        """Test that orders can be built with Python field names."""
        order = Order(
            id=1,
            customer="A",
            phone="123",
            pizza="Margherita",
            size="M",
            qty=1,
            address="X",
            created_at="2024-01-15T10:30:00.000Z",
        )

        assert order.status == OrderStatusEnum.PENDING.value
        assert order.amount == 0
        assert order.to_record()["createdAt"] == "2024-01-15T10:30:00.000Z"

    def test_status_is_open_string(self, mock_order_record: dict) -> None:
        """Test that statuses outside the documented set are accepted."""
        mock_order_record["status"] = "Ready for Pickup"

        assert Order.from_record(mock_order_record).status == "Ready for Pickup"

    def test_create_body_coerces_numeric_phone(self) -> None:
        """Test that a numeric phone in the request body becomes a string."""
        body = OrderCreate.model_validate({"phone": 9876543210, "qty": 2})

        assert body.phone == "9876543210"
        assert body.qty == 2


@pytest.mark.unit
class TestSettings:
    """Test suite for Settings model."""

    def test_record_excludes_absent_fields(self) -> None:
        """Test that absent text fields are not written."""
        settings = Settings(store_name="Demo", store_radius=0)

        assert settings.to_record() == {"storeName": "Demo", "storeRadius": 0}

    def test_from_record_with_aliases(self) -> None:
        """Test parsing a stored settings record."""
        settings = Settings.from_record(
            {
                "storeName": "Demo",
                "storeTiming": "10-10",
                "storePhone": "123",
                "storeRadius": 6,
            }
        )

        assert settings.store_name == "Demo"
        assert settings.store_timing == "10-10"
        assert settings.store_phone == "123"
        assert settings.store_radius == 6

    def test_update_body_accepts_string_radius(self) -> None:
        """Test that the update body keeps a string radius for later coercion."""
        body = SettingsUpdate.model_validate({"storeRadius": "7.5"})

        assert body.store_radius == "7.5"
