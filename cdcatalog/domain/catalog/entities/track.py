from dataclasses import dataclass
from decimal import Decimal

from cdcatalog.domain.common.entity import Entity
from cdcatalog.domain.common.exceptions import ValidationError
from cdcatalog.domain.common.value_objects.ids import TrackId

MAX_TRACK_TITLE_LENGTH = 32


@dataclass(eq=False)
class Track(Entity[TrackId]):
    """
    A track on a CD.

    Tracks are owned by exactly one CD and are only ever written together
    with it.
    """

    id: TrackId
    title: str
    duration: Decimal

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Track title cannot be empty", field="title")
        if len(self.title) > MAX_TRACK_TITLE_LENGTH:
            raise ValidationError(
                f"Track title cannot exceed {MAX_TRACK_TITLE_LENGTH} characters",
                field="title",
                value=self.title,
            )
        if self.duration <= 0:
            raise ValidationError(
                "Track duration must be positive", field="duration", value=self.duration
            )

    @classmethod
    def create(cls, title: str, duration: Decimal) -> "Track":
        """Factory for a new, unsaved track."""
        return cls(id=TrackId.generate(), title=title.strip(), duration=duration)
