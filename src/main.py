"""Main application entry point for the restaurant order service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from restaurant_order_service.config import ServiceConfig
from restaurant_order_service.handlers.api_handler import create_app
from restaurant_order_service.observability import configure_logging, setup_observability
from restaurant_order_service.repositories.json_store import JsonStore
from restaurant_order_service.services.id_generator import IdGenerator
from restaurant_order_service.services.menu_service import MenuService
from restaurant_order_service.services.order_service import OrderService
from restaurant_order_service.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


def create_application(config: ServiceConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Loads configuration from the environment (unless one is given)
    2. Configures logging
    3. Creates the JSON store over the data directory
    4. Creates the menu, order and settings services
    5. Creates the FastAPI app with API and frontend routes
    6. Sets up observability when enabled

    Args:
        config: Optional configuration, read from the environment when omitted

    Returns:
        Configured FastAPI application instance
    """
    config = config or ServiceConfig.from_env()

    configure_logging(config.log_level)

    logger.info("Initializing restaurant order service...")

    store = JsonStore(data_dir=config.data_dir)
    logger.info(f"JSON store configured - data directory: {config.data_dir}")

    id_generator = IdGenerator()
    menu_service = MenuService(store=store, id_generator=id_generator)
    order_service = OrderService(
        store=store,
        menu_service=menu_service,
        id_generator=id_generator,
    )
    settings_service = SettingsService(store=store, default_settings=config.default_settings)

    logger.info("Services initialized")

    app = create_app(
        menu_service=menu_service,
        order_service=order_service,
        settings_service=settings_service,
        public_dir=config.public_dir,
    )

    logger.info(f"FastAPI application created, serving frontend from {config.public_dir}")

    if config.enable_telemetry:
        setup_observability(app, config)

    logger.info("Restaurant order service initialized successfully")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":
    app = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    config = ServiceConfig.from_env()

    logger.info(f"Starting server on {config.host}:{config.port}")
    logger.info(f"Server running at http://localhost:{config.port}")

    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
