"""
Infrastructure layer for 10xCards.

Adapters behind the application protocols: SQLAlchemy repositories and
mappers, FastAPI routers and schemas, the OpenRouter generation client and
the local identity services.
"""
