"""Mapper for CD ORM ↔ Domain conversion."""

from datetime import UTC, datetime

from cdcatalog.domain.catalog.entities import CD, Track
from cdcatalog.domain.catalog.value_objects import Genre
from cdcatalog.domain.common.value_objects.ids import CDId, TrackId
from cdcatalog.models import CD as CDORM
from cdcatalog.models import Track as TrackORM


class CDMapper:
    """Mapper for CD ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CDORM, include_tracks: bool = False) -> CD:
        """
        Convert ORM model to domain entity.

        The track collection is only touched when ``include_tracks`` is set,
        so mapping never triggers a lazy load.
        """
        tracks = (
            [self.track_to_domain(track) for track in orm_model.tracks]
            if include_tracks
            else None
        )
        return CD.create_with_id(
            id=CDId(orm_model.id),
            version=orm_model.version,
            catalog_code=orm_model.catalog_code,
            title=orm_model.title,
            rating=orm_model.rating,
            price=orm_model.price,
            available=orm_model.available,
            genre=Genre(orm_model.genre) if orm_model.genre else None,
            duration=orm_model.duration,
            release_date=orm_model.release_date,
            performer=orm_model.performer,
            tracks=tracks,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def track_to_domain(self, orm_model: TrackORM) -> Track:
        return Track(
            id=TrackId(orm_model.id),
            title=orm_model.title,
            duration=orm_model.duration,
        )

    def to_orm(self, domain_entity: CD, orm_model: CDORM | None = None) -> CDORM:
        """
        Convert domain entity to ORM model.

        The version column is never copied; SQLAlchemy sets it on insert and
        bumps it on every update.
        """
        if orm_model is None:
            orm_model = CDORM()
        else:
            # Always emit an UPDATE so the version grows even without net changes
            orm_model.updated_at = datetime.now(UTC)

        orm_model.catalog_code = domain_entity.catalog_code
        orm_model.title = domain_entity.title
        orm_model.rating = domain_entity.rating
        orm_model.price = domain_entity.price
        orm_model.available = domain_entity.available
        orm_model.genre = domain_entity.genre.value if domain_entity.genre else None
        orm_model.duration = domain_entity.duration
        orm_model.release_date = domain_entity.release_date
        orm_model.performer = domain_entity.performer

        if domain_entity.has_tracks_loaded():
            orm_model.tracks = [
                TrackORM(title=track.title, duration=track.duration)
                for track in domain_entity.tracks
            ]
        return orm_model
