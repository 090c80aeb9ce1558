from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from cdcatalog.application.catalog.use_cases.cd_read_use_case import CDReadUseCase
from cdcatalog.application.catalog.use_cases.cd_write_use_case import CDWriteUseCase
from cdcatalog.config import get_settings
from cdcatalog.infrastructure.catalog.repositories import CDQueryBuilder, CDRepository
from cdcatalog.infrastructure.catalog.services.mail_service import MailService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    cd_query_builder = providers.Factory(CDQueryBuilder)
    cd_repository = providers.Factory(CDRepository, db=db, query_builder=cd_query_builder)

    # Outbound services
    mail_service = providers.Singleton(MailService, settings=settings)

    # Catalog use cases
    cd_read_use_case = providers.Factory(
        CDReadUseCase,
        cd_repository=cd_repository,
    )
    cd_write_use_case = providers.Factory(
        CDWriteUseCase,
        cd_repository=cd_repository,
        cd_read_use_case=cd_read_use_case,
        notification_service=mail_service,
    )


# Initialize container
container = Container()
