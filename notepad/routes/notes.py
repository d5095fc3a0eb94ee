"""
Note Pad API: Notes Route Handlers
===================================

What:  CRUD endpoints under /api/v1/notes.
How:   Extracts path/query/body data, delegates to NoteService, returns JSON.
       Errors raised by the service are turned into responses by the
       global exception handlers in main.py.

Endpoints:
    GET    /api/v1/notes             list (limit/offset)
    POST   /api/v1/notes             create
    GET    /api/v1/notes/{note_id}   read
    PUT    /api/v1/notes/{note_id}   partial update
    DELETE /api/v1/notes/{note_id}   delete (204, no body)
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.database import get_db_session
from notepad.schemas.note import ErrorResponse, NoteCreate, NoteResponse, NoteUpdate
from notepad.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Notes"])

_NOT_FOUND = {"description": "Note not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Malformed note id or body", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Database error", "model": ErrorResponse}


# limit/offset are 32-bit signed integers on the wire
MAX_QUERY_INT = 2**31 - 1


def _coerce_non_negative(raw: Optional[str], default: int) -> int:
    """
    Parse a query parameter leniently.

    Only a plain run of ASCII digits no larger than MAX_QUERY_INT is
    accepted. Anything else falls back to `default`, including negative
    numbers, signs, surrounding whitespace and underscores. The request is
    never rejected because of them.
    """
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return default
    if len(raw) > len(str(MAX_QUERY_INT)):
        return default
    value = int(raw)
    return value if value <= MAX_QUERY_INT else default


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: _SERVER_ERROR},
    summary="List notes, newest first",
)
async def list_notes(
    request: Request,
    limit: Optional[str] = Query(default=None, description="Max notes to return (default 10)"),
    offset: Optional[str] = Query(default=None, description="Notes to skip (default 0)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """
    List notes ordered by created_at descending.

    limit/offset are typed as strings so that junk like ?limit=abc falls
    back to the configured default instead of producing a validation error.
    """
    settings = request.app.state.settings
    return await note_service.list_notes(
        db=db,
        limit=_coerce_non_negative(limit, settings.default_list_limit),
        offset=_coerce_non_negative(offset, settings.default_list_offset),
    )


@router.post(
    "/notes",
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Insert a note; the response includes the generated id and timestamps."""
    return await note_service.create_note(db=db, payload=payload)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    note_id is parsed as a UUID by FastAPI before the handler runs; a
    malformed id yields 400 without touching the database.
    """
    return await note_service.get_note(db=db, note_id=note_id)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Update a note's title and/or content",
)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Fields missing from the body keep their stored values; updated_at always advances."""
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
