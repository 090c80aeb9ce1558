"""Search criteria accepted by the catalog read path."""

from collections.abc import Mapping

from cdcatalog.domain.catalog.value_objects import Genre

SearchCriteria = Mapping[str, object]

# Key matched as a case-insensitive substring instead of by equality
TITLE_KEY = "title"

# Filter keys kept for older clients, e.g. ?rap=true
LEGACY_GENRE_KEYS: dict[str, Genre] = {
    "rap": Genre.RAP,
    "pop": Genre.POP,
}

SEARCHABLE_FIELDS = frozenset(
    {
        "id",
        "version",
        "catalog_code",
        "rating",
        "release_date",
        "genre",
        "price",
        "duration",
        "available",
        "performer",
        "title",
        "created_at",
        "updated_at",
    }
)


def invalid_search_keys(criteria: SearchCriteria) -> list[str]:
    """Return the keys that are neither searchable attributes nor legacy filters."""
    return [
        key for key in criteria if key not in SEARCHABLE_FIELDS and key not in LEGACY_GENRE_KEYS
    ]
