"""
Error taxonomy shared by the storage and request layers
"""


class InventoryError(Exception):
    """Base class for errors the request layer maps to HTTP responses."""

    status_code = 500


class ValidationError(InventoryError):
    """Required input is missing or malformed."""

    status_code = 400


class NotFoundError(InventoryError):
    """No product matches the requested id."""

    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class StorageError(InventoryError):
    """The storage engine failed; carries the engine's message."""

    status_code = 500
