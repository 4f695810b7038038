# Services package init
"""
NoteShelf Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the store.
Why:   Routes handle HTTP, services handle validation and persistence rules.
How:   Each service receives a `Database` at construction time and opens one
       scoped session per operation. Services are built per request by the
       providers in noteshelf.dependencies.

Service Inventory:
    - NoteService: note CRUD, batch delete, note↔tag links
    - TagService:  tag CRUD and lookup by name

Why services are separate from routes:
    1. Testability: services can be exercised against a temporary database
       without any HTTP machinery
    2. Single responsibility: routes map outcomes to status codes; services
       decide what the outcome is
"""

from noteshelf.services.note_service import NoteService
from noteshelf.services.tag_service import TagService

__all__ = ["NoteService", "TagService"]
