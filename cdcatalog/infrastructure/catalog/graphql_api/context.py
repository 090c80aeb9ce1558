"""Per-request GraphQL context."""

from typing import Annotated

from fastapi import Depends

from cdcatalog.application.catalog.use_cases.cd_read_use_case import CDReadUseCase
from cdcatalog.application.catalog.use_cases.cd_write_use_case import CDWriteUseCase
from cdcatalog.core import container
from cdcatalog.infrastructure.common.di import inject_use_case
from cdcatalog.infrastructure.identity.auth.token_service import Principal
from cdcatalog.infrastructure.identity.dependencies import get_optional_principal


async def get_context(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
    read_use_case: Annotated[
        CDReadUseCase, Depends(inject_use_case(container.cd_read_use_case))
    ],
    write_use_case: Annotated[
        CDWriteUseCase, Depends(inject_use_case(container.cd_write_use_case))
    ],
) -> dict[str, object]:
    """
    Build the context handed to every resolver.

    Strawberry adds ``request`` and ``response`` to the returned mapping.
    """
    return {
        "principal": principal,
        "read_use_case": read_use_case,
        "write_use_case": write_use_case,
    }
