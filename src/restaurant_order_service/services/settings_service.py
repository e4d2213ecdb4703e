"""Settings service for the single store settings record."""

import logging
from typing import Any

from restaurant_order_service.models.settings_models import Settings
from restaurant_order_service.observability import traced
from restaurant_order_service.repositories.json_store import (
    SETTINGS_FILE,
    JsonStore,
    parse_record,
)
from restaurant_order_service.services.value_coercion import coerce_number

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reading and replacing store settings."""

    def __init__(self, store: JsonStore, default_settings: dict[str, Any]) -> None:
        """Initialize the SettingsService.

        Args:
            store: JSON store holding the settings file
            default_settings: Record written on first read when no settings exist
        """
        self.store = store
        self.default_settings = default_settings

    @traced("get_settings")
    async def get_settings(self) -> Settings:
        """Return the stored settings, materializing the defaults if absent.

        Raises:
            StorageError: If the stored record cannot be parsed
        """
        record = self.store.read(SETTINGS_FILE, self.default_settings)
        return parse_record(SETTINGS_FILE, record, Settings.from_record)

    @traced("update_settings")
    async def update_settings(
        self,
        store_name: str | None,
        store_timing: str | None,
        store_phone: str | None,
        store_radius: Any,
    ) -> Settings:
        """Replace the stored settings wholesale.

        No field is required. A missing or non-numeric radius is saved as 0.

        Returns:
            The saved Settings

        Raises:
            StorageError: If the settings file cannot be written
        """
        settings = Settings(
            store_name=store_name,
            store_timing=store_timing,
            store_phone=store_phone,
            store_radius=coerce_number(store_radius) or 0,
        )

        async with self.store.lock(SETTINGS_FILE):
            self.store.write(SETTINGS_FILE, settings.to_record())

        logger.info(f"Store settings updated: {settings.store_name}")
        return settings
