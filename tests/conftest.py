"""Shared pytest fixtures and configuration for all tests."""

import os

# Keep src/main.py from building the module-level app during collection
os.environ.setdefault("ENVIRONMENT", "test")

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from restaurant_order_service.repositories.json_store import JsonStore  # noqa: E402


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Fixture providing a data directory that does not exist yet."""
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> JsonStore:
    """Fixture providing a JsonStore over an empty data directory."""
    return JsonStore(data_dir=data_dir)


@pytest.fixture
def mock_menu_records() -> list[dict]:
    """Fixture providing sample menu records as stored in menu.json."""
    return [
        {
            "id": 1700000000001,
            "name": "Margherita",
            "price": 250,
            "tag": "Bestseller",
            "image": "/img/margherita.jpg",
            "category": "Veg",
        },
        {
            "id": 1700000000002,
            "name": "Farmhouse",
            "price": 399.5,
            "tag": "",
            "image": "",
            "category": "Veg",
        },
    ]


@pytest.fixture
def mock_order_record() -> dict:
    """Fixture providing a sample order record as stored in orders.json."""
    return {
        "id": 1700000000100,
        "customer": "Asha",
        "phone": "9876543210",
        "pizza": "Margherita",
        "size": "M",
        "qty": 2,
        "address": "12 MG Road",
        "amount": 500,
        "status": "Pending",
        "createdAt": "2024-01-15T10:30:00.000Z",
    }
