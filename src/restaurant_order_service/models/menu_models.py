"""Menu data models.

MenuItem mirrors the records stored in menu.json. MenuItemCreate is the
request body of the add-item endpoint and accepts loosely typed input; the
menu service decides which values are acceptable.
"""

from typing import Any

from pydantic import BaseModel, Field


class MenuItem(BaseModel):
    """Menu item model."""

    id: int = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    price: int | float = Field(..., description="Item price", ge=0)
    tag: str = Field(default="", description="Short label such as 'Bestseller'")
    image: str = Field(default="", description="URL of the item image")
    category: str = Field(default="", description="Menu section the item is listed under")

    def to_record(self) -> dict[str, Any]:
        """Convert to the JSON record stored in menu.json.

        Returns:
            dict: JSON-compatible representation
        """
        return self.model_dump()

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from a stored record.

        Args:
            record: Dictionary loaded from menu.json

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(**record)


class MenuItemCreate(BaseModel):
    """Request body for adding a menu item."""

    name: str | None = None
    price: int | float | str | None = None
    tag: str | None = None
    image: str | None = None
    category: str | None = None
