"""Bridge between FastAPI's request scope and the dependency container."""

from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from cdcatalog.core import container
from cdcatalog.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Turn a container provider into a FastAPI dependency.

    The object graph is built while ``container.db`` points at the request's
    session, so every repository behind the use case shares that session.
    """

    def build(db: DatabaseSession) -> T:
        with container.db.override(db):
            return provider()

    return build
