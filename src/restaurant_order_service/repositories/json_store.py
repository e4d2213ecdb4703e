"""File-backed JSON store for the menu, orders and settings collections.

Every call goes to disk: there is no caching, and a write replaces the whole
file. A missing or unreadable file is replaced with the caller's default.
"""

import asyncio
import copy
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from restaurant_order_service.exceptions import StorageError

logger = logging.getLogger(__name__)

MENU_FILE = "menu.json"
ORDERS_FILE = "orders.json"
SETTINGS_FILE = "settings.json"

T = TypeVar("T")


def record_id(record: Any) -> Any:
    """Return the id of a stored record, or None for records that are not objects."""
    return record.get("id") if isinstance(record, dict) else None


def parse_record(filename: str, record: Any, parse: Callable[[dict[str, Any]], T]) -> T:
    """Convert a stored record into a model.

    Records the model rejects (null prices, fractional quantities, entries that
    are not objects) are reported as storage failures of the file they came from.

    Args:
        filename: Collection file the record was read from
        record: Record as loaded from JSON
        parse: Model constructor, e.g. ``MenuItem.from_record``

    Returns:
        The parsed model

    Raises:
        StorageError: If the record is not an object or fails validation
    """
    if not isinstance(record, dict):
        raise StorageError(
            f"Invalid record in {filename}: expected object, found {type(record).__name__}"
        )
    try:
        return parse(record)
    except (ValidationError, TypeError) as e:
        raise StorageError(f"Invalid record in {filename} (id {record.get('id')}): {e}") from e


class JsonStore:
    """Reads and writes named JSON documents under a data directory."""

    def __init__(self, data_dir: Path) -> None:
        """Initialize store.

        Args:
            data_dir: Directory the JSON files live in (created on demand)
        """
        self.data_dir = Path(data_dir)
        self._locks: dict[str, asyncio.Lock] = {}

    def path_for(self, filename: str) -> Path:
        """Return the full path of a collection file."""
        return self.data_dir / filename

    def lock(self, filename: str) -> asyncio.Lock:
        """Return the lock guarding read-modify-write cycles on a file.

        Args:
            filename: Collection file name

        Returns:
            asyncio.Lock shared by every caller of this store for the file
        """
        if filename not in self._locks:
            self._locks[filename] = asyncio.Lock()
        return self._locks[filename]

    def read(self, filename: str, default: Any) -> Any:
        """Load a JSON document, materializing the default when it cannot be read.

        A file that is missing, unreadable, not valid JSON, or whose top-level
        shape differs from the default is overwritten with the default. Prior
        contents of a corrupt file are lost.

        Args:
            filename: Collection file name
            default: Value written and returned when the file cannot be loaded

        Returns:
            The parsed document, or a copy of the default

        Raises:
            StorageError: If the directory or the default file cannot be written
        """
        self._ensure_data_dir()
        path = self.path_for(filename)

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info(f"{path} does not exist, creating it with default contents")
            return self._materialize_default(filename, default)
        except (OSError, ValueError) as e:
            logger.warning(f"Replacing unreadable file {path} with default contents: {e}")
            return self._materialize_default(filename, default)

        if not isinstance(data, type(default)):
            logger.warning(
                f"Replacing {path}: expected {type(default).__name__}, "
                f"found {type(data).__name__}"
            )
            return self._materialize_default(filename, default)

        return data

    def write(self, filename: str, value: Any) -> None:
        """Serialize a document as indented JSON, replacing the file in full.

        Args:
            filename: Collection file name
            value: JSON-serializable document

        Raises:
            StorageError: If the directory or file cannot be written
        """
        self._ensure_data_dir()
        path = self.path_for(filename)

        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def _materialize_default(self, filename: str, default: Any) -> Any:
        self.write(filename, default)
        return copy.deepcopy(default)

    def _ensure_data_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create data directory {self.data_dir}: {e}") from e
