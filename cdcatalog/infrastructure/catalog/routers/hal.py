"""HAL helpers shared by the CD routers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from cdcatalog.domain.catalog.entities import CD
from cdcatalog.infrastructure.catalog.schemas import CDResponse, Link, TrackResponse

APPLICATION_HAL_JSON = "application/hal+json"


class HALJSONResponse(JSONResponse):
    media_type = APPLICATION_HAL_JSON


def cds_base_uri(request: Request) -> str:
    """Absolute URI of the CD collection."""
    return str(request.url_for("find_cds")).rstrip("/")


def to_cd_response(cd: CD, base_uri: str, all_links: bool = True) -> CDResponse:
    """Build the HAL representation of a CD."""
    self_href = f"{base_uri}/{cd.id.value}"
    links = {"self": Link(href=self_href)}
    if all_links:
        links |= {
            "list": Link(href=base_uri),
            "add": Link(href=base_uri),
            "update": Link(href=self_href),
        }

    tracks = (
        [TrackResponse(title=track.title, duration=float(track.duration)) for track in cd.tracks]
        if cd.tracks is not None
        else None
    )
    return CDResponse(
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
        links=links,
    )
