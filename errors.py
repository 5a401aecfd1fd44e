"""Error types shared by the store and the HTTP layer.

Every error carries the HTTP status it maps to, so the app can render any
of them with a single handler.
"""


class InventoryError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(InventoryError):
    """Malformed or missing input, rejected before the store is touched."""
    status_code = 400


class NotFound(InventoryError):
    status_code = 404


class ConstraintViolation(InventoryError):
    """A write broke a table constraint, e.g. a duplicate product code."""
    status_code = 409


class StoreError(InventoryError):
    """Unexpected database failure. The message is generic; details are only logged."""
    status_code = 500
