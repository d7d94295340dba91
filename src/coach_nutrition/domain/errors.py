"""Domain errors."""


class InvalidQueryError(ValueError):
    """Raised when a match query violates its preconditions."""


class NotFoundError(LookupError):
    """Raised when a record is not visible to the requesting coach."""


class ClientNotFoundError(NotFoundError):
    """Raised when a client does not exist for the coach."""


class RecipeNotFoundError(NotFoundError):
    """Raised when a recipe does not exist or is not shared with the coach."""
