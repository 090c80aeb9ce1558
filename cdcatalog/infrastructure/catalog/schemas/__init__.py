"""Catalog context schemas."""

from cdcatalog.infrastructure.catalog.schemas.cd_schemas import (
    CDCreateRequest,
    CDCreateResponse,
    CDListResponse,
    CDResponse,
    CDSearchQuery,
    CDUpdateRequest,
    EmbeddedCDs,
    Link,
    Links,
    TrackRequest,
    TrackResponse,
)

__all__ = [
    "CDCreateRequest",
    "CDCreateResponse",
    "CDListResponse",
    "CDResponse",
    "CDSearchQuery",
    "CDUpdateRequest",
    "EmbeddedCDs",
    "Link",
    "Links",
    "TrackRequest",
    "TrackResponse",
]
