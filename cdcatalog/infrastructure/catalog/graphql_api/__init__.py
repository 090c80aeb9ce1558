"""GraphQL query/mutation API for CDs."""

from cdcatalog.infrastructure.catalog.graphql_api.schema import graphql_router, schema

__all__ = ["graphql_router", "schema"]
