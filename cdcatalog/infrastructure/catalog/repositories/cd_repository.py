"""Repository for CD domain entities."""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from cdcatalog.application.catalog.search import SearchCriteria
from cdcatalog.domain.catalog.entities import CD
from cdcatalog.domain.catalog.exceptions import DuplicateCatalogCodeError, VersionOutdatedError
from cdcatalog.domain.common.exceptions import ValidationError
from cdcatalog.domain.common.value_objects.ids import CDId
from cdcatalog.infrastructure.catalog.mappers.cd_mapper import CDMapper
from cdcatalog.infrastructure.catalog.repositories.query_builder import CDQueryBuilder
from cdcatalog.models import CD as CDORM

logger = structlog.get_logger(__name__)


class CDRepository:
    """Repository for CD domain entities."""

    def __init__(self, db: Session, query_builder: CDQueryBuilder | None = None) -> None:
        self.db = db
        self.query_builder = query_builder or CDQueryBuilder()
        self.mapper = CDMapper()

    def find_by_id(self, cd_id: CDId, include_tracks: bool = False) -> CD | None:
        """
        Find a CD by ID.

        Args:
            cd_id: The CD ID
            include_tracks: Load the tracks in the same query

        Returns:
            CD entity if found, None otherwise
        """
        stmt = self.query_builder.build_id(cd_id.value, include_tracks=include_tracks)
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        if orm_model is None:
            return None
        return self.mapper.to_domain(orm_model, include_tracks=include_tracks)

    def find(self, criteria: SearchCriteria) -> list[CD]:
        """
        Find CDs matching the criteria.

        Args:
            criteria: Validated search criteria, empty for all CDs

        Returns:
            List of CD entities without tracks, ordered by id
        """
        stmt = self.query_builder.build(criteria)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, cd: CD) -> CD:
        """
        Save a CD entity (create or update).

        Tracks are written together with the CD. When the entity carries a
        track list on update, it replaces the stored one.

        Args:
            cd: The CD entity to save

        Returns:
            Saved CD entity with database-generated values

        Raises:
            DuplicateCatalogCodeError: If the catalog code belongs to another CD
            ValidationError: If a track title is already used
            VersionOutdatedError: If another writer updated the row first
        """
        try:
            if cd.id.is_transient():
                orm_model = self.mapper.to_orm(cd)
                self.db.add(orm_model)
                self.db.commit()
            else:
                orm_model = self.db.get(CDORM, cd.id.value)
                if orm_model is None:
                    raise ValueError(f"CD {cd.id.value} not found")
                if cd.has_tracks_loaded():
                    # Drop the old rows first; track titles are unique
                    orm_model.tracks.clear()
                    self.db.flush()
                self.mapper.to_orm(cd, orm_model)
                self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "catalog_code" in str(e.orig):
                raise DuplicateCatalogCodeError(cd.catalog_code) from e
            if "track" in str(e.orig):
                raise ValidationError("Track title already in use", field="tracks") from e
            raise
        except StaleDataError as e:
            self.db.rollback()
            logger.info("cd_concurrent_update", cd_id=cd.id.value, version=cd.version)
            raise VersionOutdatedError(cd.version) from e

        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model, include_tracks=cd.has_tracks_loaded())

    def delete(self, cd_id: CDId) -> bool:
        """
        Delete a CD together with its tracks.

        Args:
            cd_id: The CD ID

        Returns:
            True if deleted, False if not found
        """
        orm_model = self.db.get(CDORM, cd_id.value)
        if orm_model is None:
            return False

        self.db.delete(orm_model)
        self.db.commit()
        return True
