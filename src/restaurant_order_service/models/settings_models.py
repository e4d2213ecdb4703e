"""Store settings models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Store-wide settings record.

    Text fields may be absent: updates write whatever the client sent.
    """

    model_config = ConfigDict(populate_by_name=True)

    store_name: str | None = Field(None, alias="storeName", description="Display name of the store")
    store_timing: str | None = Field(None, alias="storeTiming", description="Opening hours")
    store_phone: str | None = Field(None, alias="storePhone", description="Contact phone number")
    store_radius: int | float = Field(
        default=0, alias="storeRadius", description="Delivery radius in kilometres"
    )

    def to_record(self) -> dict[str, Any]:
        """Convert to the JSON record stored in settings.json.

        Absent text fields are left out of the record.

        Returns:
            dict: JSON-compatible representation using wire field names
        """
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Settings":
        """Create Settings from a stored record.

        Args:
            record: Dictionary loaded from settings.json

        Returns:
            Settings: Parsed model instance
        """
        return cls.model_validate(record)


class SettingsUpdate(BaseModel):
    """Request body for saving store settings."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    store_name: str | None = Field(None, alias="storeName")
    store_timing: str | None = Field(None, alias="storeTiming")
    store_phone: str | None = Field(None, alias="storePhone")
    store_radius: int | float | str | None = Field(None, alias="storeRadius")
