"""
Infrastructure layer.

Adapters between the application core and the outside world: SQLAlchemy
repositories, mail delivery, REST routers, the GraphQL schema and
authentication.
"""
