"""Tests for the CD read endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from cdcatalog import models

CDS_URL = "/api/v1/cds"


class TestGetCD:
    """Test suite for GET /cds/{id}."""

    def test_get_cd_success(self, client: TestClient, test_cd: models.CD) -> None:
        """Test reading a CD returns its HAL representation and version."""
        response = client.get(f"{CDS_URL}/{test_cd.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("application/hal+json")
        assert response.headers["etag"] == '"1"'

        data = response.json()
        assert data["catalog_code"] == "DEEGM7234823"
        assert data["title"] == "DAMN"
        assert data["performer"] == "Kendrick Lamar"
        assert data["genre"] == "RAP"
        assert data["price"] == 12.99
        assert data["release_date"] == "2017-04-14"
        assert data["tracks"] is None
        assert data["_links"]["self"]["href"].endswith(f"/api/v1/cds/{test_cd.id}")
        assert data["_links"]["list"]["href"].endswith("/api/v1/cds")
        assert set(data["_links"]) == {"self", "list", "add", "update"}

    def test_get_cd_with_tracks(self, client: TestClient, test_cd: models.CD) -> None:
        """Test tracks are only included on request."""
        response = client.get(f"{CDS_URL}/{test_cd.id}", params={"with_tracks": True})

        assert response.status_code == status.HTTP_200_OK
        tracks = response.json()["tracks"]
        assert [track["title"] for track in tracks] == ["BLOOD.", "DNA."]
        assert tracks[1]["duration"] == 3.05

    def test_get_cd_not_modified(self, client: TestClient, test_cd: models.CD) -> None:
        """Test a matching If-None-Match yields 304 without a body."""
        response = client.get(f"{CDS_URL}/{test_cd.id}", headers={"If-None-Match": '"1"'})

        assert response.status_code == status.HTTP_304_NOT_MODIFIED
        assert response.headers["etag"] == '"1"'
        assert response.content == b""

    def test_get_cd_not_modified_weak_etag(self, client: TestClient, test_cd: models.CD) -> None:
        """Test a weak ETag for the current version also yields 304."""
        response = client.get(f"{CDS_URL}/{test_cd.id}", headers={"If-None-Match": 'W/"1"'})

        assert response.status_code == status.HTTP_304_NOT_MODIFIED
        assert response.headers["etag"] == '"1"'

    def test_get_cd_not_modified_etag_list(self, client: TestClient, test_cd: models.CD) -> None:
        """Test any ETag of an If-None-Match list can match."""
        response = client.get(
            f"{CDS_URL}/{test_cd.id}", headers={"If-None-Match": '"0", W/"7", "1"'}
        )

        assert response.status_code == status.HTTP_304_NOT_MODIFIED

    def test_get_cd_not_modified_wildcard(self, client: TestClient, test_cd: models.CD) -> None:
        """Test If-None-Match: * matches any existing CD."""
        response = client.get(f"{CDS_URL}/{test_cd.id}", headers={"If-None-Match": "*"})

        assert response.status_code == status.HTTP_304_NOT_MODIFIED

    def test_get_cd_stale_if_none_match(self, client: TestClient, test_cd: models.CD) -> None:
        """Test an older ETag still gets the full representation."""
        response = client.get(f"{CDS_URL}/{test_cd.id}", headers={"If-None-Match": '"0"'})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "DAMN"

    def test_get_cd_not_found(self, client: TestClient, db_session: Session) -> None:
        """Test reading an unknown id returns 404."""
        response = client.get(f"{CDS_URL}/999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "no CD with id 999999"}

    def test_get_cd_negative_id(self, client: TestClient, db_session: Session) -> None:
        """Test a negative id is an unknown CD, not a server error."""
        response = client.get(f"{CDS_URL}/-1")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "no CD with id -1"}

    def test_get_cd_zero_id(self, client: TestClient, db_session: Session) -> None:
        """Test id 0 never names a stored CD."""
        response = client.get(f"{CDS_URL}/0")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestFindCDs:
    """Test suite for GET /cds."""

    def test_find_all(self, client: TestClient, test_cds: list[models.CD]) -> None:
        """Test no parameters returns every CD in id order."""
        response = client.get(CDS_URL)

        assert response.status_code == status.HTTP_200_OK
        cds = response.json()["_embedded"]["cds"]
        assert [cd["title"] for cd in cds] == ["DAMN", "To Pimp a Butterfly", "Thriller"]
        # List entries only link to themselves
        assert all(set(cd["_links"]) == {"self"} for cd in cds)

    def test_find_all_empty_catalog(self, client: TestClient, db_session: Session) -> None:
        """Test an empty catalog without criteria is not an error."""
        response = client.get(CDS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["_embedded"]["cds"] == []

    def test_find_by_title_substring_ignores_case(
        self, client: TestClient, test_cds: list[models.CD]
    ) -> None:
        """Test title matches any part of the title regardless of case."""
        response = client.get(CDS_URL, params={"title": "BUTTER"})

        assert response.status_code == status.HTTP_200_OK
        cds = response.json()["_embedded"]["cds"]
        assert [cd["title"] for cd in cds] == ["To Pimp a Butterfly"]

    def test_find_by_several_criteria(
        self, client: TestClient, test_cds: list[models.CD]
    ) -> None:
        """Test criteria are combined with AND."""
        response = client.get(
            CDS_URL, params={"performer": "Kendrick Lamar", "available": "true"}
        )

        assert response.status_code == status.HTTP_200_OK
        cds = response.json()["_embedded"]["cds"]
        assert [cd["catalog_code"] for cd in cds] == ["DEEGM7234823"]

    def test_find_by_genre(self, client: TestClient, test_cds: list[models.CD]) -> None:
        """Test genre is an exact match."""
        response = client.get(CDS_URL, params={"genre": "POP"})

        assert response.status_code == status.HTTP_200_OK
        assert [cd["title"] for cd in response.json()["_embedded"]["cds"]] == ["Thriller"]

    def test_find_by_legacy_rap_flag(
        self, client: TestClient, test_cds: list[models.CD]
    ) -> None:
        """Test the rap flag filters on the RAP genre."""
        response = client.get(CDS_URL, params={"rap": "true"})

        assert response.status_code == status.HTTP_200_OK
        titles = [cd["title"] for cd in response.json()["_embedded"]["cds"]]
        assert titles == ["DAMN", "To Pimp a Butterfly"]

    def test_find_no_match(self, client: TestClient, test_cds: list[models.CD]) -> None:
        """Test criteria without matches return 404."""
        response = client.get(CDS_URL, params={"title": "Bad"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"].startswith("no CDs found")

    def test_find_title_wildcards_match_literally(
        self, client: TestClient, test_cds: list[models.CD]
    ) -> None:
        """Test % and _ in a title only match those characters."""
        for title in ("_", "%", "T_riller"):
            response = client.get(CDS_URL, params={"title": title})

            assert response.status_code == status.HTTP_404_NOT_FOUND, title

    def test_find_unknown_parameter(self, client: TestClient, test_cds: list[models.CD]) -> None:
        """Test a parameter that is not a CD attribute is rejected."""
        response = client.get(CDS_URL, params={"bogus": "1"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "invalid search criteria"}

    def test_find_tracks_is_not_searchable(
        self, client: TestClient, test_cds: list[models.CD]
    ) -> None:
        """Test the track collection cannot be used as a search key."""
        response = client.get(CDS_URL, params={"tracks": "DNA."})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "invalid search criteria"}

    def test_find_invalid_rating(self, client: TestClient, test_cds: list[models.CD]) -> None:
        """Test a rating outside 0..5 fails request validation."""
        response = client.get(CDS_URL, params={"rating": 9})

        assert response.status_code == 422
