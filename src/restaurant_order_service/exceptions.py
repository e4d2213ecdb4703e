"""Exception hierarchy for the order service.

Each error carries the HTTP status code the API layer answers with.
"""


class RestaurantServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(RestaurantServiceError):
    """Raised when a request is missing required fields or carries bad values."""

    status_code = 400


class NotFoundError(RestaurantServiceError):
    """Raised when an id does not match any stored entity."""

    status_code = 404


class StorageError(RestaurantServiceError):
    """Raised when a collection file cannot be created or written."""

    status_code = 500
