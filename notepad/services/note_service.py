"""
Note Pad API: Note Service (Repository Operations)
===================================================

What:  The five note operations: list, get, create, update, delete.
Why:   Keeps SQL and row mapping out of the route handlers.
How:   Each method receives the request's AsyncSession and issues exactly
       one statement. INSERT and UPDATE use RETURNING so the stored row
       (with generated id and timestamps) comes back from that statement.
Who:   Called by the handlers in routes/notes.py.

Error Handling Strategy:
    - Zero matching rows → NotFoundError (404)
    - Any SQLAlchemy/driver failure → DatabaseError (500) carrying the
      backend's error text
    There are no multi-statement transactions and no retries.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import delete, desc, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.exceptions import DatabaseError, NotFoundError
from notepad.models.note import Note, utcnow
from notepad.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)


class NoteService:
    """
    Stateless repository for the `notes` table.

    Row → response mapping is a single pydantic validation step
    (`NoteResponse.model_validate(note)`, enabled by from_attributes).
    """

    async def list_notes(
        self,
        db: AsyncSession,
        limit: int = 10,
        offset: int = 0,
    ) -> List[NoteResponse]:
        """
        Most recent notes first.

        Query:
            SELECT * FROM notes ORDER BY created_at DESC LIMIT :limit OFFSET :offset
        """
        query = select(Note).order_by(desc(Note.created_at)).limit(limit).offset(offset)
        try:
            result = await db.execute(query)
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e))
            raise DatabaseError.from_exception(e, limit=limit, offset=offset)

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: UUID) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: no row with that id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError.from_exception(e, note_id=str(note_id))

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert one note and return it with its generated fields.

        Both timestamps come from the same instant, so a fresh note always
        has created_at == updated_at.
        """
        now = utcnow()
        stmt = (
            insert(Note)
            .values(
                title=payload.title,
                content=payload.content,
                created_at=now,
                updated_at=now,
            )
            .returning(Note)
        )
        try:
            result = await db.execute(stmt)
            note = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e))
            raise DatabaseError.from_exception(e)

        logger.info("Note created: %s", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: UUID,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Replace the fields present in `payload` and refresh updated_at.

        updated_at advances even when no field is present or the values are
        unchanged.

        Query:
            UPDATE notes SET <present fields>, updated_at = :now
            WHERE id = :id RETURNING *
        """
        values = payload.changes()
        values["updated_at"] = utcnow()

        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(**values)
            .returning(Note)
            .execution_options(populate_existing=True)
        )
        try:
            result = await db.execute(stmt)
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError.from_exception(e, note_id=str(note_id))

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note updated: %s (fields: %s)", note_id, sorted(values))
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: UUID) -> None:
        """
        Hard-delete a note.

        Raises:
            NotFoundError: the DELETE affected zero rows
        """
        try:
            result = await db.execute(delete(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError.from_exception(e, note_id=str(note_id))

        if result.rowcount == 0:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        logger.info("Note deleted: %s", note_id)


# Stateless: one shared instance
note_service = NoteService()
