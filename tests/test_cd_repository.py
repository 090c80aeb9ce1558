"""Tests for the SQLAlchemy CD repository."""

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from cdcatalog import models
from cdcatalog.domain.catalog.entities import CD, Track
from cdcatalog.domain.catalog.exceptions import DuplicateCatalogCodeError, VersionOutdatedError
from cdcatalog.domain.catalog.value_objects import Genre
from cdcatalog.domain.common.exceptions import ValidationError
from cdcatalog.domain.common.value_objects.ids import CDId
from cdcatalog.infrastructure.catalog.repositories import CDRepository


def new_cd(catalog_code: str = "DEEGM7234823", tracks: list[Track] | None = None) -> CD:
    return CD.create(
        catalog_code=catalog_code,
        title="DAMN",
        rating=5,
        price=Decimal("12.99"),
        available=True,
        genre=Genre.RAP,
        tracks=tracks,
    )


class TestSave:
    """Test suite for CDRepository.save."""

    def test_save_new_cd(self, db_session: Session) -> None:
        """Test a new CD gets an id, version 1 and its tracks."""
        repository = CDRepository(db_session)

        saved = repository.save(new_cd(tracks=[Track.create("DNA.", Decimal("3.05"))]))

        assert not saved.id.is_transient()
        assert saved.version == 1
        assert saved.genre is Genre.RAP
        assert saved.created_at is not None
        assert [track.title for track in saved.tracks or []] == ["DNA."]

    def test_update_increments_version(self, db_session: Session, test_cd: models.CD) -> None:
        """Test each save of an existing CD bumps the version."""
        repository = CDRepository(db_session)
        cd = repository.find_by_id(CDId(test_cd.id))
        assert cd is not None

        cd.apply_changes({"rating": 1})
        first = repository.save(cd)
        second = repository.save(first)

        assert (first.version, second.version) == (2, 3)
        assert second.rating == 1

    def test_update_without_tracks_keeps_them(
        self, db_session: Session, test_cd: models.CD
    ) -> None:
        """Test tracks not loaded are left alone."""
        repository = CDRepository(db_session)
        cd = repository.find_by_id(CDId(test_cd.id))
        assert cd is not None

        repository.save(cd)

        reloaded = repository.find_by_id(CDId(test_cd.id), include_tracks=True)
        assert reloaded is not None
        assert [track.title for track in reloaded.tracks or []] == ["BLOOD.", "DNA."]

    def test_update_replaces_tracks(self, db_session: Session, test_cd: models.CD) -> None:
        """Test a loaded track list replaces the stored one, reusing titles."""
        repository = CDRepository(db_session)
        cd = repository.find_by_id(CDId(test_cd.id))
        assert cd is not None

        cd.replace_tracks([Track.create("DNA.", Decimal("3.05"))])
        repository.save(cd)

        titles = db_session.scalars(select(models.Track.title)).all()
        assert titles == ["DNA."]

    def test_duplicate_catalog_code(self, db_session: Session, test_cd: models.CD) -> None:
        """Test the unique catalog code is reported as a domain error."""
        repository = CDRepository(db_session)

        with pytest.raises(DuplicateCatalogCodeError):
            repository.save(new_cd(catalog_code=test_cd.catalog_code))

    def test_duplicate_track_title(self, db_session: Session, test_cd: models.CD) -> None:
        """Test track titles must be unique across CDs."""
        repository = CDRepository(db_session)

        with pytest.raises(ValidationError, match="Track title"):
            repository.save(
                new_cd(catalog_code="USUM71703861", tracks=[Track.create("DNA.", Decimal("1"))])
            )


    def test_concurrent_update_is_outdated(
        self,
        db_session: Session,
        session_factory: sessionmaker[Session],
        test_cd: models.CD,
    ) -> None:
        """Test losing a race against another writer raises and rolls back."""
        repository = CDRepository(db_session)
        cd = repository.find_by_id(CDId(test_cd.id))
        assert cd is not None
        cd.apply_changes({"rating": 1})

        with session_factory() as other_session:
            other_repository = CDRepository(other_session)
            other_cd = other_repository.find_by_id(CDId(test_cd.id))
            assert other_cd is not None
            other_cd.apply_changes({"rating": 3})
            assert other_repository.save(other_cd).version == 2

        with pytest.raises(VersionOutdatedError) as exc_info:
            repository.save(cd)

        assert exc_info.value.version == 1
        assert not db_session.in_transaction()

        stored = repository.find_by_id(CDId(test_cd.id))
        assert stored is not None
        assert (stored.version, stored.rating) == (2, 3)

class TestFind:
    """Test suite for CDRepository lookups."""

    def test_find_by_id_missing(self, db_session: Session) -> None:
        """Test an unknown id yields None."""
        assert CDRepository(db_session).find_by_id(CDId(999999)) is None

    def test_find_by_id_with_tracks(self, db_session: Session, test_cd: models.CD) -> None:
        """Test tracks are only mapped on request."""
        repository = CDRepository(db_session)

        without = repository.find_by_id(CDId(test_cd.id))
        with_tracks = repository.find_by_id(CDId(test_cd.id), include_tracks=True)

        assert without is not None
        assert without.tracks is None
        assert with_tracks is not None
        assert [track.duration for track in with_tracks.tracks or []] == [
            Decimal("1.58"),
            Decimal("3.05"),
        ]

    def test_find_by_criteria(self, db_session: Session, test_cds: list[models.CD]) -> None:
        """Test search results are ordered by id and carry no tracks."""
        cds = CDRepository(db_session).find({"performer": "Kendrick Lamar"})

        assert [cd.title for cd in cds] == ["DAMN", "To Pimp a Butterfly"]
        assert all(cd.tracks is None for cd in cds)


class TestDelete:
    """Test suite for CDRepository.delete."""

    def test_delete_removes_cd_and_tracks(self, db_session: Session, test_cd: models.CD) -> None:
        """Test deleting a CD also deletes its tracks."""
        repository = CDRepository(db_session)

        assert repository.delete(CDId(test_cd.id))

        assert repository.find_by_id(CDId(test_cd.id)) is None
        assert db_session.scalars(select(models.Track)).all() == []

    def test_delete_missing(self, db_session: Session) -> None:
        """Test deleting an unknown id reports False."""
        assert not CDRepository(db_session).delete(CDId(999999))
