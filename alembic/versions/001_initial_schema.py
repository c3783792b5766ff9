"""Create users, AI generation and flashcard tables.

Revision ID: 001
Revises:
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "ai_generations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("input_text", sa.Text(), nullable=False),
        sa.Column("model_name", sa.String(length=100), nullable=False),
        sa.Column("generated_proposals", sa.JSON(), nullable=False),
        sa.Column("generated_count", sa.Integer(), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint(
            "generated_count >= 1 AND generated_count <= 10",
            name="ck_ai_generations_generated_count",
        ),
        sa.CheckConstraint("duration_ms >= 0", name="ck_ai_generations_duration_ms"),
    )
    op.create_index("ix_ai_generations_user_id", "ai_generations", ["user_id"])

    op.create_table(
        "ai_generation_acceptances",
        sa.Column(
            "ai_generation_id",
            sa.Uuid(),
            sa.ForeignKey("ai_generations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("accepted_count", sa.Integer(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint("accepted_count >= 0", name="ck_ai_generation_acceptances_count"),
    )
    op.create_index(
        "ix_ai_generation_acceptances_user_id", "ai_generation_acceptances", ["user_id"]
    )

    op.create_table(
        "flashcards",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("front", sa.String(length=300), nullable=False),
        sa.Column("back", sa.String(length=600), nullable=False),
        sa.Column("source_type", sa.String(length=20), nullable=False),
        sa.Column(
            "ai_generation_id",
            sa.Uuid(),
            sa.ForeignKey("ai_generations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint(
            "source_type IN ('manual', 'ai', 'ai-edited')", name="ck_flashcards_source_type"
        ),
    )
    op.create_index("ix_flashcards_user_id", "flashcards", ["user_id"])
    op.create_index("ix_flashcards_ai_generation_id", "flashcards", ["ai_generation_id"])
    op.create_index("ix_flashcards_created_at", "flashcards", ["created_at"])


def downgrade() -> None:
    op.drop_table("flashcards")
    op.drop_table("ai_generation_acceptances")
    op.drop_table("ai_generations")
    op.drop_table("users")
