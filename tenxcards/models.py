"""Database models."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenxcards.database import Base
from tenxcards.utils import utc_now


class User(Base):
    """User account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )

    flashcards: Mapped[list["Flashcard"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email='{self.email}')>"


class AIGeneration(Base):
    """Audit record of one successful AI generation request."""

    __tablename__ = "ai_generations"
    __table_args__ = (
        CheckConstraint(
            "generated_count >= 1 AND generated_count <= 10",
            name="ck_ai_generations_generated_count",
        ),
        CheckConstraint("duration_ms >= 0", name="ck_ai_generations_duration_ms"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    input_text: Mapped[str] = mapped_column(Text, nullable=False)
    model_name: Mapped[str] = mapped_column(String(100), nullable=False)
    generated_proposals: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    generated_count: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of AIGeneration."""
        return f"<AIGeneration(id={self.id}, generated_count={self.generated_count})>"


class AIGenerationAcceptance(Base):
    """Marks a generation as accepted. The primary key allows one row per generation."""

    __tablename__ = "ai_generation_acceptances"
    __table_args__ = (
        CheckConstraint("accepted_count >= 0", name="ck_ai_generation_acceptances_count"),
    )

    ai_generation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ai_generations.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    accepted_count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of AIGenerationAcceptance."""
        return (
            f"<AIGenerationAcceptance(ai_generation_id={self.ai_generation_id}, "
            f"accepted_count={self.accepted_count})>"
        )


class Flashcard(Base):
    """User-owned study card."""

    __tablename__ = "flashcards"
    __table_args__ = (
        CheckConstraint(
            "source_type IN ('manual', 'ai', 'ai-edited')", name="ck_flashcards_source_type"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    front: Mapped[str] = mapped_column(String(300), nullable=False)
    back: Mapped[str] = mapped_column(String(600), nullable=False)
    source_type: Mapped[str] = mapped_column(String(20), nullable=False, default="manual")
    ai_generation_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("ai_generations.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="flashcards")

    def __repr__(self) -> str:
        """String representation of Flashcard."""
        return f"<Flashcard(id={self.id}, source_type='{self.source_type}')>"
