"""API routes for reading CDs."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response, status

from cdcatalog.application.catalog.use_cases.cd_read_use_case import CDReadUseCase
from cdcatalog.core import container
from cdcatalog.domain.catalog.value_objects import VersionToken
from cdcatalog.domain.common.exceptions import DomainError
from cdcatalog.exceptions import CatalogError
from cdcatalog.infrastructure.catalog.routers.hal import (
    HALJSONResponse,
    cds_base_uri,
    to_cd_response,
)
from cdcatalog.infrastructure.catalog.schemas import (
    CDListResponse,
    CDResponse,
    CDSearchQuery,
    EmbeddedCDs,
)
from cdcatalog.infrastructure.common.di import inject_use_case

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cds", tags=["cds"])


def etag_matches(if_none_match: str, etag: str) -> bool:
    """Weak comparison of an ``If-None-Match`` list against ``etag``."""
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*" or candidate.removeprefix("W/") == etag:
            return True
    return False


@router.get(
    "/{cd_id}",
    response_model=CDResponse,
    response_class=HALJSONResponse,
    responses={
        status.HTTP_304_NOT_MODIFIED: {"description": "Client already has this version"},
        status.HTTP_404_NOT_FOUND: {"description": "No CD with this id"},
    },
)
def get_cd(
    cd_id: int,
    request: Request,
    response: Response,
    if_none_match: Annotated[str | None, Header()] = None,
    with_tracks: bool = False,
    use_case: CDReadUseCase = Depends(inject_use_case(container.cd_read_use_case)),
) -> CDResponse | Response:
    """
    Get a CD by its id.

    The response carries the version as ``ETag``. A matching
    ``If-None-Match`` header yields 304 without a body.

    Args:
        cd_id: ID of the CD
        if_none_match: ETag the client already holds
        with_tracks: Include the CD's tracks
        use_case: CDReadUseCase injected via dependency container

    Raises:
        HTTPException: If the lookup fails unexpectedly
    """
    try:
        cd = use_case.find_by_id(cd_id, include_tracks=with_tracks)
    except (CatalogError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get CD {cd_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    etag = str(VersionToken(cd.version))
    if if_none_match is not None and etag_matches(if_none_match, etag):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return to_cd_response(cd, cds_base_uri(request))


@router.get(
    "",
    name="find_cds",
    response_model=CDListResponse,
    response_class=HALJSONResponse,
    responses={status.HTTP_404_NOT_FOUND: {"description": "No CD matched"}},
)
def find_cds(
    request: Request,
    query: Annotated[CDSearchQuery, Query()],
    use_case: CDReadUseCase = Depends(inject_use_case(container.cd_read_use_case)),
) -> CDListResponse:
    """
    Search CDs.

    Without parameters every CD is returned. ``title`` matches any part of
    the title regardless of case; all other parameters must match exactly.
    Unknown parameters are rejected with 404.
    """
    criteria = query.to_criteria()
    # Unknown parameters go through so the search rejects them
    criteria.update(
        {
            key: value
            for key, value in request.query_params.items()
            if key not in CDSearchQuery.model_fields
        }
    )

    try:
        cds = use_case.find(criteria)
    except (CatalogError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to search CDs with {criteria}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    base_uri = cds_base_uri(request)
    return CDListResponse(
        embedded=EmbeddedCDs(cds=[to_cd_response(cd, base_uri, all_links=False) for cd in cds])
    )
