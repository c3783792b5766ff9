"""
Learning bounded context - Application layer.

Contains use cases for flashcard management:
- AI generation and atomic acceptance of proposals
- Listing, editing and deleting flashcards
"""
