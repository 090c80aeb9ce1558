from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class CDId(EntityId):
    """Primary key of a CD."""


@dataclass(frozen=True)
class TrackId(EntityId):
    """Primary key of a track."""
