# Routes package init
"""
NoteShelf Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - notes.py:   /api/notes...          (notes and their tag links)
    - tags.py:    /api/tags...           (tags, by id and by name)
    - health.py:  GET /health            (service health check, unprefixed)

Design Principle:
    Routes are THIN. They read path parameters and bodies, call a service
    and pick the success status code. They never validate input and never
    build error bodies for taxonomy errors; those bubble to the exception
    handlers registered in noteshelf.main.
"""
