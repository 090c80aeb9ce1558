"""Use case for reading CDs."""

import json

import structlog

from cdcatalog.application.catalog.protocols.cd_repository import CDRepositoryProtocol
from cdcatalog.application.catalog.search import SearchCriteria, invalid_search_keys
from cdcatalog.domain.catalog.entities import CD
from cdcatalog.domain.common.value_objects.ids import CDId
from cdcatalog.exceptions import CDNotFoundError, InvalidSearchCriteriaError

logger = structlog.get_logger(__name__)


class CDReadUseCase:
    """Use case for looking up CDs by id or by search criteria."""

    def __init__(self, cd_repository: CDRepositoryProtocol) -> None:
        """Initialize use case with repository protocol."""
        self.cd_repository = cd_repository

    def find_by_id(self, cd_id: int, include_tracks: bool = False) -> CD:
        """
        Get a single CD.

        Args:
            cd_id: ID of the CD
            include_tracks: Also load the CD's tracks

        Returns:
            The CD domain entity

        Raises:
            CDNotFoundError: If no CD has this id
        """
        logger.debug("find_cd_by_id", cd_id=cd_id, include_tracks=include_tracks)
        # Ids are assigned from 1 upwards
        if cd_id < 1:
            raise CDNotFoundError(cd_id)
        cd = self.cd_repository.find_by_id(CDId(cd_id), include_tracks=include_tracks)
        if cd is None:
            raise CDNotFoundError(cd_id)
        return cd

    def find(self, criteria: SearchCriteria | None = None) -> list[CD]:
        """
        Search CDs.

        No criteria (or an empty mapping) returns every CD, possibly none.

        Raises:
            InvalidSearchCriteriaError: If a key is not searchable
            CDNotFoundError: If criteria were given and nothing matched
        """
        logger.debug("find_cds", criteria=criteria)
        if not criteria:
            return self.cd_repository.find({})

        invalid_keys = invalid_search_keys(criteria)
        if invalid_keys:
            logger.debug("invalid_search_criteria", keys=invalid_keys)
            raise InvalidSearchCriteriaError(invalid_keys)

        cds = self.cd_repository.find(criteria)
        if not cds:
            raise CDNotFoundError(message=f"no CDs found: {json.dumps(criteria, default=str)}")
        return cds
