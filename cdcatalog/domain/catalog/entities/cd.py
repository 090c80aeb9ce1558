from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from cdcatalog.domain.catalog.entities.track import Track
from cdcatalog.domain.catalog.value_objects import Genre
from cdcatalog.domain.common.entity import Entity
from cdcatalog.domain.common.exceptions import ValidationError
from cdcatalog.domain.common.value_objects.ids import CDId

# Domain constraints
MIN_RATING = 0
MAX_RATING = 5
MAX_CATALOG_CODE_LENGTH = 16
MAX_TITLE_LENGTH = 40
MAX_PERFORMER_LENGTH = 40

# Attributes a client may change through an update
UPDATABLE_FIELDS = frozenset(
    {
        "catalog_code",
        "rating",
        "genre",
        "price",
        "duration",
        "available",
        "release_date",
        "performer",
        "title",
        "tracks",
    }
)


@dataclass(eq=False)
class CD(Entity[CDId]):
    """
    CD aggregate root.

    Business Rules:
    - The catalog code is unique across all CDs (enforced by the store)
    - Rating lies within MIN_RATING..MAX_RATING
    - Price is strictly positive
    - Tracks belong to this CD only; a new track list replaces the old one

    ``tracks`` is None when the track collection was not loaded.
    ``version`` is managed by the store and grows with every update.
    """

    # Identity
    id: CDId
    version: int

    # Catalog data
    catalog_code: str
    title: str
    rating: int
    price: Decimal
    available: bool

    # Optional fields
    genre: Genre | None = None
    duration: Decimal | None = None
    release_date: date | None = None
    performer: str | None = None
    tracks: list[Track] | None = None

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.catalog_code:
            raise ValidationError("Catalog code cannot be empty", field="catalog_code")
        if len(self.catalog_code) > MAX_CATALOG_CODE_LENGTH:
            raise ValidationError(
                f"Catalog code cannot exceed {MAX_CATALOG_CODE_LENGTH} characters",
                field="catalog_code",
                value=self.catalog_code,
            )
        if not self.title or not self.title.strip():
            raise ValidationError("CD title cannot be empty", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"CD title cannot exceed {MAX_TITLE_LENGTH} characters",
                field="title",
                value=self.title,
            )
        if self.performer is not None and len(self.performer) > MAX_PERFORMER_LENGTH:
            raise ValidationError(
                f"Performer cannot exceed {MAX_PERFORMER_LENGTH} characters",
                field="performer",
                value=self.performer,
            )
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                field="rating",
                value=self.rating,
            )
        if self.price <= 0:
            raise ValidationError("Price must be positive", field="price", value=self.price)
        if self.duration is not None and self.duration <= 0:
            raise ValidationError(
                "Duration must be positive", field="duration", value=self.duration
            )
        if self.genre is not None and not isinstance(self.genre, Genre):
            self.genre = Genre(self.genre)

    # Query methods
    def has_tracks_loaded(self) -> bool:
        """Check whether the track collection was loaded from the store."""
        return self.tracks is not None

    # Command methods
    def apply_changes(self, changes: Mapping[str, object]) -> None:
        """
        Merge new field values into this CD.

        Fields missing from ``changes`` keep their current values. A
        ``tracks`` entry replaces the whole track collection.

        Raises:
            ValidationError: If a field is unknown or a new value breaks an invariant
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}", field="changes"
            )

        for name, value in changes.items():
            if name == "tracks":
                self.replace_tracks(value)  # type: ignore[arg-type]
            else:
                setattr(self, name, value)
        self.__post_init__()

    def replace_tracks(self, tracks: list[Track]) -> None:
        """Replace the complete track collection."""
        self.tracks = list(tracks)

    # Factory methods
    @classmethod
    def create(
        cls,
        catalog_code: str,
        title: str,
        rating: int,
        price: Decimal,
        available: bool,
        genre: Genre | None = None,
        duration: Decimal | None = None,
        release_date: date | None = None,
        performer: str | None = None,
        tracks: list[Track] | None = None,
    ) -> "CD":
        """Factory for creating a new CD; id and version come from the store."""
        return cls(
            id=CDId.generate(),
            version=0,
            catalog_code=catalog_code.strip(),
            title=title.strip(),
            rating=rating,
            price=price,
            available=available,
            genre=genre,
            duration=duration,
            release_date=release_date,
            performer=performer.strip() if performer else None,
            tracks=list(tracks) if tracks else [],
        )

    @classmethod
    def create_with_id(
        cls,
        id: CDId,
        version: int,
        catalog_code: str,
        title: str,
        rating: int,
        price: Decimal,
        available: bool,
        created_at: datetime,
        updated_at: datetime,
        genre: Genre | None = None,
        duration: Decimal | None = None,
        release_date: date | None = None,
        performer: str | None = None,
        tracks: list[Track] | None = None,
    ) -> "CD":
        """Factory for reconstituting a CD from persistence."""
        return cls(
            id=id,
            version=version,
            catalog_code=catalog_code,
            title=title,
            rating=rating,
            price=price,
            available=available,
            genre=genre,
            duration=duration,
            release_date=release_date,
            performer=performer,
            tracks=tracks,
            created_at=created_at,
            updated_at=updated_at,
        )
