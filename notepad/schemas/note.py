"""
Note Pad API: Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these to parse request bodies, serialize responses and
       generate the OpenAPI document.

Schemas are separate from the SQLAlchemy model so the wire format
(ISO-8601 timestamps, UUID strings) is controlled here rather than by the
table definition.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/v1/notes.

    Both fields are required. Empty strings are accepted: there is no
    length validation beyond the column's own limits.
    """
    title: str = Field(description="Note title")
    content: str = Field(description="Note body text")

    model_config = {
        "json_schema_extra": {"example": {"title": "Groceries", "content": "Milk, eggs"}}
    }


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/v1/notes/{id}.

    Each field is independently optional. Presence is tracked through
    pydantic's `model_fields_set`, so an absent field is distinguishable from
    a present empty string. Explicit nulls count as absent: the columns are
    NOT NULL, so null means "keep the stored value".
    """
    title: Optional[str] = Field(default=None, description="Replacement title")
    content: Optional[str] = Field(default=None, description="Replacement body text")

    model_config = {
        "json_schema_extra": {"example": {"title": "Groceries (weekend)"}}
    }

    def changes(self) -> Dict[str, Any]:
        """Column → value mapping for the fields that were sent with a value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, as stored."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body text")
    created_at: datetime = Field(description="When the note was created (ISO 8601)")
    updated_at: datetime = Field(description="When the note was last updated (ISO 8601)")

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """Fixed payload returned by GET /api/v1/healthcheck."""
    status: str = Field(description="Always 'ok' when the process is serving")
    message: str = Field(description="Service name")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '550e8400-...' was not found",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
