"""Use case for creating and updating CDs."""

from collections.abc import Mapping

import structlog

from cdcatalog.application.catalog.protocols.cd_repository import CDRepositoryProtocol
from cdcatalog.application.catalog.protocols.notification_service import (
    NotificationServiceProtocol,
)
from cdcatalog.application.catalog.use_cases.cd_read_use_case import CDReadUseCase
from cdcatalog.domain.catalog.entities import CD
from cdcatalog.domain.catalog.exceptions import DuplicateCatalogCodeError, VersionOutdatedError
from cdcatalog.domain.catalog.value_objects import VersionToken
from cdcatalog.exceptions import NotFoundError, NotificationError

logger = structlog.get_logger(__name__)


class CDWriteUseCase:
    """Use case enforcing the catalog's write rules before anything is stored."""

    def __init__(
        self,
        cd_repository: CDRepositoryProtocol,
        cd_read_use_case: CDReadUseCase,
        notification_service: NotificationServiceProtocol,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            cd_repository: CD repository protocol implementation
            cd_read_use_case: Read path used for existence and uniqueness checks
            notification_service: Channel announcing newly created CDs
        """
        self.cd_repository = cd_repository
        self.cd_read_use_case = cd_read_use_case
        self.notification_service = notification_service

    def create(self, cd: CD) -> int:
        """
        Store a new CD with its tracks.

        Args:
            cd: Unsaved CD entity

        Returns:
            ID assigned by the store

        Raises:
            DuplicateCatalogCodeError: If the catalog code is already taken
        """
        self._ensure_catalog_code_available(cd.catalog_code)

        saved = self.cd_repository.save(cd)
        logger.info("cd_created", cd_id=saved.id.value, catalog_code=saved.catalog_code)

        self._notify_created(saved)
        return saved.id.value

    def update(self, cd_id: int, changes: Mapping[str, object], version_token: str | None) -> int:
        """
        Update a CD under optimistic concurrency control.

        Args:
            cd_id: ID of the CD to update
            changes: New field values; omitted fields keep their value
            version_token: Last version the caller saw, as a quoted integer ("3")

        Returns:
            The new version number

        Raises:
            InvalidVersionTokenError: If the token is not a quoted integer
            CDNotFoundError: If the CD does not exist
            VersionOutdatedError: If the token is older than the stored version
            DuplicateCatalogCodeError: If the new catalog code is taken
        """
        token = VersionToken.parse(version_token)

        cd = self.cd_read_use_case.find_by_id(cd_id)
        if token.is_older_than(cd.version):
            logger.debug("version_outdated", cd_id=cd_id, supplied=token.version, stored=cd.version)
            raise VersionOutdatedError(token.version)

        cd.apply_changes(changes)
        try:
            updated = self.cd_repository.save(cd)
        except VersionOutdatedError as e:
            # Report the version the caller sent, not the one found in the store
            logger.debug("version_outdated_on_save", cd_id=cd_id, supplied=token.version)
            raise VersionOutdatedError(token.version) from e

        logger.info("cd_updated", cd_id=cd_id, version=updated.version)
        return updated.version

    def _ensure_catalog_code_available(self, catalog_code: str) -> None:
        try:
            self.cd_read_use_case.find({"catalog_code": catalog_code})
        except NotFoundError:
            return
        raise DuplicateCatalogCodeError(catalog_code)

    def _notify_created(self, cd: CD) -> None:
        subject = f"New CD {cd.id.value}"
        body = f"The CD titled <strong>{cd.title}</strong> has been created"
        try:
            self.notification_service.send(subject, body)
        except NotificationError as e:
            # The CD is already stored; delivery problems must not undo that
            logger.warning("cd_notification_failed", cd_id=cd.id.value, reason=e.reason)
