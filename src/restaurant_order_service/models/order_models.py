"""Order data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OrderStatusEnum(str, Enum):
    """Status values the admin dashboard moves orders through.

    Order.status stays an open string; these are the expected values.
    """

    PENDING = "Pending"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class Order(BaseModel):
    """Customer order as stored in orders.json."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Unique order identifier")
    customer: str = Field(..., description="Customer name")
    phone: str = Field(..., description="Customer phone number")
    pizza: str = Field(..., description="Name of the ordered menu item")
    size: str = Field(..., description="Requested size")
    qty: int = Field(..., description="Quantity ordered", ge=1)
    address: str = Field(..., description="Delivery address")
    amount: int | float = Field(default=0, description="Menu price times quantity, 0 if unpriced")
    status: str = Field(default=OrderStatusEnum.PENDING.value, description="Current order status")
    created_at: str = Field(..., alias="createdAt", description="ISO-8601 creation timestamp")

    def to_record(self) -> dict[str, Any]:
        """Convert to the JSON record stored in orders.json.

        Returns:
            dict: JSON-compatible representation using wire field names
        """
        return self.model_dump(by_alias=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Order":
        """Create Order from a stored record.

        Args:
            record: Dictionary loaded from orders.json

        Returns:
            Order: Parsed model instance
        """
        return cls.model_validate(record)


class OrderCreate(BaseModel):
    """Request body for placing an order."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    phone: str | None = None
    pizza: str | None = None
    size: str | None = None
    qty: int | float | str | None = None
    address: str | None = None


class OrderStatusUpdate(BaseModel):
    """Request body for changing an order's status."""

    status: str | None = None
