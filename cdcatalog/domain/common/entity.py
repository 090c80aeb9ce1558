"""
Entities of the catalog domain.

An entity keeps its identity while its attributes change: two snapshots of
the same CD taken before and after a price change compare equal.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject

# Id of an entity the store has not assigned a key to yet
TRANSIENT_ID = 0


@dataclass(frozen=True)
class EntityId(ValueObject):
    """Integer primary key wrapper; subclasses decide which values are legal."""

    value: int

    def __post_init__(self) -> None:
        if self.value < TRANSIENT_ID:
            raise ValueError(f"{type(self).__name__} cannot be negative: {self.value}")

    @classmethod
    def generate(cls) -> Self:
        """Id for a new entity; the database replaces it on insert."""
        return cls(TRANSIENT_ID)

    def is_transient(self) -> bool:
        return self.value == TRANSIENT_ID


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Base class for entities; subclasses declare an ``id`` field."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id.value})"
