"""Pydantic schemas for CD API request/response validation."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from cdcatalog.domain.catalog.entities.cd import (
    MAX_PERFORMER_LENGTH,
    MAX_RATING,
    MAX_TITLE_LENGTH,
    MIN_RATING,
)
from cdcatalog.domain.catalog.entities.track import MAX_TRACK_TITLE_LENGTH
from cdcatalog.domain.catalog.value_objects import CATALOG_CODE_PATTERN, Genre


class TrackRequest(BaseModel):
    """Schema for a track inside a CD payload."""

    title: str = Field(..., min_length=1, max_length=MAX_TRACK_TITLE_LENGTH)
    duration: Decimal = Field(..., gt=0, max_digits=5, decimal_places=2)


class CDBase(BaseModel):
    """Base schema for CD fields shared by create and update."""

    catalog_code: str = Field(
        ...,
        pattern=CATALOG_CODE_PATTERN,
        description="ISRC-style catalog code, e.g. DEEGM7234823",
    )
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    genre: Genre | None = None
    price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2)
    duration: Decimal | None = Field(None, gt=0, max_digits=5, decimal_places=2)
    available: bool
    release_date: dt.date | None = Field(None, description="ISO 8601 date, e.g. 2022-03-03")
    performer: str | None = Field(None, max_length=MAX_PERFORMER_LENGTH)
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)


class CDCreateRequest(CDBase):
    """Schema for creating a CD together with its tracks."""

    tracks: list[TrackRequest] = Field(default_factory=list)


class CDUpdateRequest(CDBase):
    """
    Schema for updating a CD.

    Tracks are optional; when sent, they replace the stored track list.
    """

    tracks: list[TrackRequest] | None = None


class CDCreateResponse(BaseModel):
    """Schema for CD creation response."""

    id: int


class Link(BaseModel):
    """A HAL link."""

    href: str


# HAL link relations of a resource: self, list, add, update
Links = dict[str, Link]


class TrackResponse(BaseModel):
    """Schema for a track in CD responses."""

    title: str
    duration: float


class CDResponse(BaseModel):
    """Schema for a CD as HAL resource."""

    model_config = ConfigDict(populate_by_name=True)

    catalog_code: str
    rating: int
    genre: Genre | None
    price: float
    duration: float | None
    available: bool
    release_date: dt.date | None
    performer: str | None
    title: str
    tracks: list[TrackResponse] | None = None
    links: Links = Field(..., alias="_links")


class EmbeddedCDs(BaseModel):
    """HAL ``_embedded`` section of a CD list."""

    cds: list[CDResponse]


class CDListResponse(BaseModel):
    """Schema for a list of CDs."""

    model_config = ConfigDict(populate_by_name=True)

    embedded: EmbeddedCDs = Field(..., alias="_embedded")


class CDSearchQuery(BaseModel):
    """Query parameters accepted by the CD search endpoint."""

    catalog_code: str | None = None
    rating: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)
    genre: Genre | None = None
    price: Decimal | None = None
    duration: Decimal | None = None
    available: bool | None = None
    release_date: dt.date | None = None
    performer: str | None = None
    title: str | None = None
    rap: bool | None = None
    pop: bool | None = None

    def to_criteria(self) -> dict[str, object]:
        """Only the parameters the client actually sent."""
        return self.model_dump(exclude_none=True)
