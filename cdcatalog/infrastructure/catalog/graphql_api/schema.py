"""Strawberry schema with the CD queries and mutations."""

from collections.abc import Iterator
from typing import Any

import pydantic
import strawberry
import structlog
from fastapi.concurrency import run_in_threadpool
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter
from strawberry.permission import BasePermission
from strawberry.types import Info

from cdcatalog.application.catalog.use_cases.cd_read_use_case import CDReadUseCase
from cdcatalog.application.catalog.use_cases.cd_write_use_case import CDWriteUseCase
from cdcatalog.domain.catalog.entities import CD, Track
from cdcatalog.domain.catalog.exceptions import (
    DuplicateCatalogCodeError,
    InvalidVersionTokenError,
    VersionOutdatedError,
)
from cdcatalog.domain.catalog.value_objects import VersionToken
from cdcatalog.domain.common.exceptions import ValidationError
from cdcatalog.exceptions import CDNotFoundError, InvalidSearchCriteriaError, NotFoundError
from cdcatalog.infrastructure.catalog.graphql_api.context import get_context
from cdcatalog.infrastructure.catalog.graphql_api.types import (
    CDInput,
    CDType,
    CDUpdateInput,
    CreatePayload,
    UpdatePayload,
)
from cdcatalog.infrastructure.catalog.schemas import CDCreateRequest, CDUpdateRequest
from cdcatalog.infrastructure.identity.dependencies import WRITE_ROLES

logger = structlog.get_logger(__name__)

# Most specific classes first
ERROR_CODES: list[tuple[type[Exception], str]] = [
    (InvalidSearchCriteriaError, "INVALID_SEARCH_CRITERIA"),
    (NotFoundError, "NOT_FOUND"),
    (DuplicateCatalogCodeError, "DUPLICATE_CATALOG_CODE"),
    (InvalidVersionTokenError, "INVALID_VERSION_TOKEN"),
    (VersionOutdatedError, "VERSION_OUTDATED"),
    (ValidationError, "BAD_USER_INPUT"),
    (pydantic.ValidationError, "BAD_USER_INPUT"),
]


def parse_cd_id(raw: strawberry.ID) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise CDNotFoundError(message=f"no CD with id {raw}") from e


def error_code_for(error: BaseException | None) -> str | None:
    for error_type, code in ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return None


class ErrorCodeExtension(SchemaExtension):
    """Tag GraphQL errors raised by the catalog with ``extensions.code``."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result is None or not getattr(result, "errors", None):
            return
        for error in result.errors:
            code = error_code_for(error.original_error)
            if code is not None:
                error.extensions = {**(error.extensions or {}), "code": code}


class IsCatalogWriter(BasePermission):
    message = "Missing a role that allows this operation"

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:  # noqa: ANN401
        principal = info.context.get("principal")
        return principal is not None and principal.has_any_role(WRITE_ROLES)


@strawberry.type
class Query:
    @strawberry.field
    async def cd(self, info: Info, id: strawberry.ID) -> CDType:
        """A CD with its tracks."""
        use_case: CDReadUseCase = info.context["read_use_case"]
        cd = await run_in_threadpool(use_case.find_by_id, parse_cd_id(id), include_tracks=True)
        return CDType.from_domain(cd)

    @strawberry.field
    async def cds(self, info: Info, title: str | None = None) -> list[CDType]:
        """All CDs, or those whose title contains ``title``."""
        use_case: CDReadUseCase = info.context["read_use_case"]
        criteria = {} if title is None else {"title": title}
        cds = await run_in_threadpool(use_case.find, criteria)
        return [CDType.from_domain(cd) for cd in cds]


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[IsCatalogWriter])
    async def create(self, info: Info, input: CDInput) -> CreatePayload:
        # Same field rules as the REST payload
        data = CDCreateRequest.model_validate(strawberry.asdict(input))
        cd = CD.create(
            catalog_code=data.catalog_code,
            title=data.title,
            rating=data.rating,
            price=data.price,
            available=data.available,
            genre=data.genre,
            duration=data.duration,
            release_date=data.release_date,
            performer=data.performer,
            tracks=[Track.create(title=t.title, duration=t.duration) for t in data.tracks],
        )
        use_case: CDWriteUseCase = info.context["write_use_case"]
        cd_id = await run_in_threadpool(use_case.create, cd)
        logger.debug("graphql_cd_created", cd_id=cd_id)
        return CreatePayload(id=cd_id)

    @strawberry.mutation(permission_classes=[IsCatalogWriter])
    async def update(self, info: Info, input: CDUpdateInput) -> UpdatePayload:
        fields = strawberry.asdict(input)
        cd_id = parse_cd_id(fields.pop("id"))
        token = str(VersionToken(fields.pop("version")))
        # Omitted optional fields keep their stored values
        data = CDUpdateRequest.model_validate(
            {name: value for name, value in fields.items() if value is not None}
        )

        use_case: CDWriteUseCase = info.context["write_use_case"]
        changes = data.model_dump(exclude_unset=True, exclude={"tracks"})
        version = await run_in_threadpool(use_case.update, cd_id, changes, token)
        logger.debug("graphql_cd_updated", cd_id=cd_id, version=version)
        return UpdatePayload(version=version)


schema = strawberry.Schema(query=Query, mutation=Mutation, extensions=[ErrorCodeExtension])

graphql_router: GraphQLRouter = GraphQLRouter(schema, context_getter=get_context)
