"""
Domain layer.

The domain layer contains the core business rules of the catalog.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: CD and its owned Track collection
- Value Objects: identifiers, genre and the optimistic-concurrency version token
"""
