"""
Note Pad API: Note SQLAlchemy Model
====================================

What:  ORM model representing the `notes` table.
How:   Inherits from the DeclarativeBase in database.py; Alembic's initial
       revision creates the same layout on PostgreSQL.
Who:   Used by NoteService for its five statements.

Table Design:
    - id: UUID primary key. The migration sets gen_random_uuid() as server
      default; the ORM also supplies uuid4 so inserts work on any backend.
    - title: VARCHAR(255), content: TEXT, both NOT NULL
    - created_at / updated_at: TIMESTAMP WITH TIME ZONE, UTC

    Index on created_at DESC serves the list query
    (ORDER BY created_at DESC LIMIT :limit OFFSET :offset).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notepad.database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A titled piece of text content with creation/update timestamps.

    Lifecycle:
        1. Created by INSERT (id and both timestamps assigned)
        2. Mutated in place by UPDATE (updated_at always refreshed)
        3. Destroyed by DELETE (hard delete, no tombstone)
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', updated_at='{self.updated_at}')>"
