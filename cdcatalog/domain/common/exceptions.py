"""
Domain layer exceptions.

Raised when a catalog rule is broken. The REST layer maps them to status
codes in ``cdcatalog.main``, the GraphQL layer to ``extensions.code``.
"""


class DomainError(Exception):
    """Base of every catalog rule violation; ``details`` is structured context for logs."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})


class ValidationError(DomainError):
    """A field value breaks an invariant, e.g. a rating of 7 or a price of 0."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {"field": field} if field else {}
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value
