"""Base class for immutable domain values such as ids and version tokens."""


class ValueObject:
    """
    Immutable value without identity of its own.

    Subclasses are ``@dataclass(frozen=True)``; the dataclass supplies
    equality, hashing and repr from the fields, and ``__post_init__`` is the
    place to reject invalid values.
    """

    __slots__ = ()
