"""Domain errors."""


class NotFoundError(Exception):
    """Raised when an identifier does not resolve to an existing record."""

    pass
