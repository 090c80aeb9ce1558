"""GraphQL object and input types."""

import datetime as dt

import strawberry

from cdcatalog.domain.catalog.entities import CD
from cdcatalog.domain.catalog.value_objects import Genre

GenreType = strawberry.enum(Genre, name="Genre")


@strawberry.type(name="Track")
class TrackType:
    title: str
    duration: float


@strawberry.type(name="CD")
class CDType:
    id: strawberry.ID
    version: int
    catalog_code: str
    rating: int
    genre: GenreType | None
    price: float
    duration: float | None
    available: bool
    release_date: dt.date | None
    performer: str | None
    title: str
    tracks: list[TrackType] | None

    @classmethod
    def from_domain(cls, cd: CD) -> "CDType":
        tracks = (
            [TrackType(title=track.title, duration=float(track.duration)) for track in cd.tracks]
            if cd.tracks is not None
            else None
        )
        return cls(
            id=strawberry.ID(str(cd.id.value)),
            version=cd.version,
            catalog_code=cd.catalog_code,
            rating=cd.rating,
            genre=cd.genre,
            price=float(cd.price),
            duration=float(cd.duration) if cd.duration is not None else None,
            available=cd.available,
            release_date=cd.release_date,
            performer=cd.performer,
            title=cd.title,
            tracks=tracks,
        )


@strawberry.input
class TrackInput:
    title: str
    duration: float


@strawberry.input
class CDInput:
    catalog_code: str
    rating: int
    price: float
    available: bool
    title: str
    genre: GenreType | None = None
    duration: float | None = None
    release_date: dt.date | None = None
    performer: str | None = None
    tracks: list[TrackInput] = strawberry.field(default_factory=list)


@strawberry.input
class CDUpdateInput:
    id: strawberry.ID
    version: int
    catalog_code: str
    rating: int
    price: float
    available: bool
    title: str
    genre: GenreType | None = None
    duration: float | None = None
    release_date: dt.date | None = None
    performer: str | None = None


@strawberry.type
class CreatePayload:
    id: int


@strawberry.type
class UpdatePayload:
    version: int
