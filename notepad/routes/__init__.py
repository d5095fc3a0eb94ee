# Routes package init
"""
Note Pad API: Routes Package
=============================

Route Inventory:
    - notes.py:   GET/POST   /api/v1/notes
                  GET/PUT/DELETE /api/v1/notes/{id}
    - health.py:  GET        /api/v1/healthcheck

Routes stay thin: extract request data, call NoteService, return the model.
"""
