"""API routes for creating and updating CDs."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from cdcatalog.application.catalog.use_cases.cd_write_use_case import CDWriteUseCase
from cdcatalog.core import container
from cdcatalog.domain.catalog.entities import CD, Track
from cdcatalog.domain.catalog.value_objects import VersionToken
from cdcatalog.domain.common.exceptions import DomainError
from cdcatalog.exceptions import CatalogError
from cdcatalog.infrastructure.catalog.routers.hal import cds_base_uri
from cdcatalog.infrastructure.catalog.schemas import (
    CDCreateRequest,
    CDCreateResponse,
    CDUpdateRequest,
    TrackRequest,
)
from cdcatalog.infrastructure.common.di import inject_use_case
from cdcatalog.infrastructure.identity.dependencies import WriterPrincipal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cds", tags=["cds"])

MSG_FORBIDDEN = "No token with a sufficient role"


def _to_tracks(tracks: list[TrackRequest]) -> list[Track]:
    return [Track.create(title=track.title, duration=track.duration) for track in tracks]


@router.post(
    "",
    response_model=CDCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_403_FORBIDDEN: {"description": MSG_FORBIDDEN},
        422: {"description": "Invalid CD or duplicate catalog code"},
    },
)
def create_cd(
    request: CDCreateRequest,
    http_request: Request,
    response: Response,
    principal: WriterPrincipal,
    use_case: CDWriteUseCase = Depends(inject_use_case(container.cd_write_use_case)),
) -> CDCreateResponse:
    """
    Create a CD together with its tracks.

    The ``Location`` header points at the new CD.

    Args:
        request: Validated CD payload
        principal: Caller holding a write role
        use_case: CDWriteUseCase injected via dependency container

    Returns:
        ID of the new CD
    """
    try:
        cd = CD.create(
            catalog_code=request.catalog_code,
            title=request.title,
            rating=request.rating,
            price=request.price,
            available=request.available,
            genre=request.genre,
            duration=request.duration,
            release_date=request.release_date,
            performer=request.performer,
            tracks=_to_tracks(request.tracks),
        )
        cd_id = use_case.create(cd)
    except (CatalogError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create CD {request.catalog_code}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    logger.debug("CD %s created by %s", cd_id, principal.username)
    response.headers["Location"] = f"{cds_base_uri(http_request)}/{cd_id}"
    return CDCreateResponse(id=cd_id)


@router.put(
    "/{cd_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        status.HTTP_403_FORBIDDEN: {"description": MSG_FORBIDDEN},
        status.HTTP_404_NOT_FOUND: {"description": "No CD with this id"},
        status.HTTP_412_PRECONDITION_FAILED: {"description": "Wrong version in If-Match"},
        status.HTTP_428_PRECONDITION_REQUIRED: {"description": "If-Match header missing"},
    },
)
def update_cd(
    cd_id: int,
    request: CDUpdateRequest,
    principal: WriterPrincipal,
    if_match: Annotated[str | None, Header()] = None,
    use_case: CDWriteUseCase = Depends(inject_use_case(container.cd_write_use_case)),
) -> Response:
    """
    Update a CD.

    ``If-Match`` must carry the version the client last read, e.g. ``"3"``.
    Tracks, when sent, replace the stored track list. The new version is
    returned as ``ETag``.
    """
    if if_match is None:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail='Header "If-Match" is missing',
        )

    changes = request.model_dump(exclude_unset=True, exclude={"tracks"})
    if request.tracks is not None:
        changes["tracks"] = _to_tracks(request.tracks)

    try:
        version = use_case.update(cd_id, changes, if_match)
    except (CatalogError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update CD {cd_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    logger.debug("CD %s updated by %s to version %s", cd_id, principal.username, version)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"ETag": str(VersionToken(version))},
    )
