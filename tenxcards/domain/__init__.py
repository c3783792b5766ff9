"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Objects with identity and lifecycle (Flashcard, AIGeneration, User)
- Value Objects: Immutable objects defined by attributes (Proposal, ids)
"""
