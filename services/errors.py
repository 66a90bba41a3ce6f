"""
Service Exceptions

Exception Hierarchy:
    ServiceError
    ├── ValidationError     (400, rejected before any database work)
    │   └── InvalidInput    (bad arguments to the costing functions)
    ├── ConflictError       (409, carries the existing record)
    ├── NotFoundError       (404)
    │   ├── RecipeNotFound
    │   └── OrderNotFound
    └── PersistenceError    (500, transaction rolled back)
"""


class ServiceError(Exception):
    """Base exception for all service layer errors."""
    status_code = 500


class ValidationError(ServiceError):
    """Raised when caller-supplied data fails required-field or shape checks."""
    status_code = 400


class InvalidInput(ValidationError):
    """Raised by the costing functions for non-numeric or out-of-range input."""


class ConflictError(ServiceError):
    """Raised when an ingredient with the same name (any case) already exists."""
    status_code = 409

    def __init__(self, message, existing):
        self.existing = existing
        super().__init__(message)


class NotFoundError(ServiceError):
    status_code = 404


class RecipeNotFound(NotFoundError):
    def __init__(self, recipe_id):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class OrderNotFound(NotFoundError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order with ID {order_id} not found")


class PersistenceError(ServiceError):
    """
    Raised when a database round trip fails.

    The open transaction has already been rolled back by the time this
    is raised; the original exception is available as __cause__.
    """
    status_code = 500
