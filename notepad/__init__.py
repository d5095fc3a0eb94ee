"""
Note Pad API: Application Package
==================================

A small HTTP service exposing CRUD operations over a single `Note` entity
stored in one PostgreSQL table.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      NoteService (one statement     │  ← SQL + row mapping
    │      per operation)                 │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine / pool on app.state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
