"""
Learning bounded context - Domain layer.

This context handles flashcard-based learning features:
- Flashcard editing and provenance tracking
- AI-powered flashcard generation and acceptance

Entities:
- Flashcard: A user-owned study card
- AIGeneration: Immutable audit record of one generation request
"""
