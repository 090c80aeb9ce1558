"""Common value objects shared across all domain modules."""

from .ids import CDId, TrackId

__all__ = ["CDId", "TrackId"]
