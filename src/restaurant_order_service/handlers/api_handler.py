"""FastAPI application exposing the menu, order and settings endpoints."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_order_service.exceptions import (
    NotFoundError,
    RestaurantServiceError,
    StorageError,
)
from restaurant_order_service.handlers.frontend_handler import register_frontend_routes
from restaurant_order_service.models.menu_models import MenuItem, MenuItemCreate
from restaurant_order_service.models.order_models import Order, OrderCreate, OrderStatusUpdate
from restaurant_order_service.models.settings_models import Settings, SettingsUpdate
from restaurant_order_service.services.menu_service import MenuService
from restaurant_order_service.services.order_service import OrderService
from restaurant_order_service.services.settings_service import SettingsService
from restaurant_order_service.services.value_coercion import coerce_number

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class DeleteResponse(BaseModel):
    """Response model for successful deletions."""

    success: bool


@contextmanager
def storage_guard(action: str) -> Iterator[None]:
    """Turn a StorageError into a 500 with a generic message.

    The underlying error is logged with its traceback; the client only sees
    "Failed to <action>".

    Args:
        action: What the request was doing, e.g. "read menu"
    """
    try:
        yield
    except StorageError as e:
        logger.exception(f"Storage failure while trying to {action}: {e.message}")
        raise HTTPException(status_code=500, detail=f"Failed to {action}") from e


def parse_entity_id(raw_id: str, not_found_message: str) -> int:
    """Parse an id path segment.

    Args:
        raw_id: Path segment as received
        not_found_message: Message used when the segment cannot be an id

    Returns:
        The integer id

    Raises:
        NotFoundError: If the segment is not an integral number
    """
    # "1.0" and " 1 " name the same record as "1"
    entity_id = coerce_number(raw_id)
    if not isinstance(entity_id, int):
        raise NotFoundError(not_found_message)
    return entity_id


def create_app(
    menu_service: MenuService,
    order_service: OrderService,
    settings_service: SettingsService,
    public_dir: Path,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service for the menu collection
        order_service: Service for the order collection
        settings_service: Service for the store settings record
        public_dir: Directory holding the static frontend

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Order Service",
        description="Menu, order and store settings API for a single-restaurant ordering site",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.menu_service = menu_service
    app.state.order_service = order_service
    app.state.settings_service = settings_service

    @app.exception_handler(RestaurantServiceError)
    async def service_error_handler(_request: Request, exc: RestaurantServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"Unhandled service error: {exc.message}")
            return JSONResponse(status_code=exc.status_code, content={"error": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Rejected request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/api/menu", response_model=list[MenuItem], tags=["Menu"])
    async def list_menu() -> list[MenuItem]:
        """List every menu item in stored order."""
        with storage_guard("read menu"):
            items: list[MenuItem] = await app.state.menu_service.list_menu()
        return items

    @app.post("/api/menu", response_model=MenuItem, status_code=201, tags=["Menu"])
    async def add_menu_item(payload: MenuItemCreate | None = None) -> MenuItem:
        """Add a menu item.

        Returns:
            The created item, with its assigned id

        Raises:
            InvalidInputError: If name or price is missing
        """
        payload = payload or MenuItemCreate()
        with storage_guard("add menu item"):
            item: MenuItem = await app.state.menu_service.add_menu_item(
                name=payload.name,
                price=payload.price,
                tag=payload.tag,
                image=payload.image,
                category=payload.category,
            )
        return item

    @app.delete("/api/menu/{item_id}", response_model=DeleteResponse, tags=["Menu"])
    async def delete_menu_item(item_id: str) -> DeleteResponse:
        """Delete a menu item by id.

        Raises:
            NotFoundError: If no item has that id
        """
        parsed_id = parse_entity_id(item_id, "Menu item not found")
        with storage_guard("delete menu item"):
            await app.state.menu_service.delete_menu_item(parsed_id)
        return DeleteResponse(success=True)

    @app.get("/api/orders", response_model=list[Order], tags=["Orders"])
    async def list_orders() -> list[Order]:
        """List every order in the order it was placed."""
        with storage_guard("read orders"):
            orders: list[Order] = await app.state.order_service.list_orders()
        return orders

    @app.post("/api/orders", response_model=Order, status_code=201, tags=["Orders"])
    async def create_order(payload: OrderCreate | None = None) -> Order:
        """Place an order, priced against the current menu.

        Raises:
            InvalidInputError: If any field is missing
        """
        payload = payload or OrderCreate()
        with storage_guard("create order"):
            order: Order = await app.state.order_service.create_order(
                name=payload.name,
                phone=payload.phone,
                pizza=payload.pizza,
                size=payload.size,
                qty=payload.qty,
                address=payload.address,
            )
        return order

    @app.patch("/api/orders/{order_id}", response_model=Order, tags=["Orders"])
    async def update_order_status(
        order_id: str, payload: OrderStatusUpdate | None = None
    ) -> Order:
        """Change the status of an order.

        Raises:
            InvalidInputError: If status is missing
            NotFoundError: If no order has that id
        """
        payload = payload or OrderStatusUpdate()
        parsed_id = parse_entity_id(order_id, "Order not found")
        with storage_guard("update order"):
            order: Order = await app.state.order_service.update_order_status(
                parsed_id, payload.status
            )
        return order

    @app.get(
        "/api/settings",
        response_model=Settings,
        response_model_exclude_none=True,
        tags=["Settings"],
    )
    async def get_settings() -> Settings:
        """Return store settings, creating the defaults on first access."""
        with storage_guard("read settings"):
            settings: Settings = await app.state.settings_service.get_settings()
        return settings

    @app.post(
        "/api/settings",
        response_model=Settings,
        response_model_exclude_none=True,
        tags=["Settings"],
    )
    async def update_settings(payload: SettingsUpdate | None = None) -> Settings:
        """Replace store settings with the submitted values."""
        payload = payload or SettingsUpdate()
        with storage_guard("save settings"):
            settings: Settings = await app.state.settings_service.update_settings(
                store_name=payload.store_name,
                store_timing=payload.store_timing,
                store_phone=payload.store_phone,
                store_radius=payload.store_radius,
            )
        return settings

    # Registered last so the catch-all page route never shadows the API
    register_frontend_routes(app, public_dir)

    return app
