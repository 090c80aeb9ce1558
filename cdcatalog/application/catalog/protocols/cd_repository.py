"""Protocol for CD repository in catalog context."""

from typing import Protocol

from cdcatalog.application.catalog.search import SearchCriteria
from cdcatalog.domain.catalog.entities import CD
from cdcatalog.domain.common.value_objects.ids import CDId


class CDRepositoryProtocol(Protocol):
    """Protocol for CD repository operations in catalog context."""

    def find_by_id(self, cd_id: CDId, include_tracks: bool = False) -> CD | None:
        """
        Find a CD by ID.

        Args:
            cd_id: The CD ID
            include_tracks: Load the track collection in the same fetch

        Returns:
            CD entity if found, None otherwise
        """
        ...

    def find(self, criteria: SearchCriteria) -> list[CD]:
        """
        Find CDs matching already validated search criteria.

        Args:
            criteria: Mapping of attribute name to wanted value; empty means all

        Returns:
            List of CD entities ordered by id
        """
        ...

    def save(self, cd: CD) -> CD:
        """
        Save a CD entity (create or update) together with its tracks.

        Args:
            cd: The CD entity to save

        Returns:
            Saved CD entity with database-generated values

        Raises:
            DuplicateCatalogCodeError: If the catalog code is taken by another CD
            VersionOutdatedError: If the row changed since it was read
        """
        ...

    def delete(self, cd_id: CDId) -> bool:
        """
        Delete a CD and its tracks.

        Returns:
            True if deleted, False if not found
        """
        ...
