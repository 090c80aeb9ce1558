"""Builds SELECT statements for CD lookups from sparse search criteria."""

import logging

from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload

from cdcatalog.application.catalog.search import LEGACY_GENRE_KEYS, TITLE_KEY, SearchCriteria
from cdcatalog.models import CD as CDORM

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})

LIKE_ESCAPE = "/"


def _is_set(flag: object) -> bool:
    if isinstance(flag, str):
        return flag.strip().lower() in _TRUE_STRINGS
    return bool(flag)


def _escape_like(value: str) -> str:
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return value


class CDQueryBuilder:
    """Translate search criteria into SQLAlchemy statements on the ``cd`` table."""

    def build_id(self, cd_id: int, include_tracks: bool = False) -> Select[tuple[CDORM]]:
        """
        Build a lookup by primary key.

        With ``include_tracks`` the tracks are LEFT OUTER JOINed and loaded by
        the same query.
        """
        stmt = select(CDORM)
        if include_tracks:
            stmt = stmt.options(joinedload(CDORM.tracks))
        return stmt.where(CDORM.id == cd_id)

    def build(self, criteria: SearchCriteria) -> Select[tuple[CDORM]]:
        """
        Build a search over CDs.

        ``title`` matches case-insensitively anywhere in the title and comes
        first. ``%`` and ``_`` in it match themselves. Every other key is an
        equality predicate, added in mapping order and AND-ed with the ones
        before it.
        """
        remaining = dict(criteria)
        stmt = select(CDORM)

        title = remaining.pop(TITLE_KEY, None)
        if isinstance(title, str):
            stmt = stmt.where(
                CDORM.title.ilike(f"%{_escape_like(title)}%", escape=LIKE_ESCAPE)
            )
        elif title is not None:
            stmt = stmt.where(CDORM.title == title)

        for key, value in remaining.items():
            if key in LEGACY_GENRE_KEYS:
                if _is_set(value):
                    stmt = stmt.where(CDORM.genre == LEGACY_GENRE_KEYS[key].value)
                continue
            stmt = stmt.where(getattr(CDORM, key) == value)

        stmt = stmt.order_by(CDORM.id)
        logger.debug("build: sql=%s", stmt)
        return stmt
