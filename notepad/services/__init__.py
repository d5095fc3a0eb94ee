# Services package init
"""
Note Pad API: Services Layer
=============================

Service Inventory:
    - NoteService: the five single-statement operations on the `notes` table
"""
