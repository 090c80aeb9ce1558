from sqlalchemy import Select

from cdcatalog.domain.catalog.value_objects import Genre
from cdcatalog.infrastructure.catalog.repositories import CDQueryBuilder


def sql(stmt: Select) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True})).replace("\n", " ")


def test_build_without_criteria_selects_all() -> None:
    statement = sql(CDQueryBuilder().build({}))

    assert "WHERE" not in statement
    assert statement.endswith("ORDER BY cd.id")


def test_title_is_case_insensitive_substring() -> None:
    statement = sql(CDQueryBuilder().build({"title": "Damn"}))

    assert "lower(cd.title) LIKE lower('%Damn%')" in statement


def test_predicates_keep_criteria_order() -> None:
    statement = sql(
        CDQueryBuilder().build({"performer": "Kendrick Lamar", "rating": 5, "title": "D"})
    )

    where = statement.split("WHERE", 1)[1]
    # Title first, then the others in the order given
    assert where.index("cd.title") < where.index("cd.performer") < where.index("cd.rating")
    assert "cd.performer = 'Kendrick Lamar' AND cd.rating = 5" in where


def test_legacy_genre_flags() -> None:
    builder = CDQueryBuilder()

    assert "cd.genre = 'RAP'" in sql(builder.build({"rap": "true"}))
    assert "cd.genre = 'POP'" in sql(builder.build({"pop": True}))
    assert "WHERE" not in sql(builder.build({"rap": "false"}))


def test_genre_equality() -> None:
    assert "cd.genre = 'POP'" in sql(CDQueryBuilder().build({"genre": Genre.POP}))


def test_build_id_joins_tracks_only_when_asked() -> None:
    builder = CDQueryBuilder()

    assert "JOIN track" not in sql(builder.build_id(3))
    assert "LEFT OUTER JOIN track" in sql(builder.build_id(3, include_tracks=True))
    assert "cd.id = 3" in sql(builder.build_id(3))


def test_title_wildcards_are_escaped() -> None:
    statement = sql(CDQueryBuilder().build({"title": "100%_a/b"}))

    assert "lower(cd.title) LIKE lower('%100/%/_a//b%') ESCAPE '/'" in statement
