"""
NoteShelf Backend — Application Package Initializer
=====================================================

What: A note-keeping HTTP service: notes, tags, and the links between them.
Who:  Imported by uvicorn (`noteshelf.main:app`), Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, error translation
    ├─────────────────────────────────────┤
    │   Validators │ Models & Schemas     │  ← field rules, ORM + Pydantic
    ├─────────────────────────────────────┤
    │       Database (store capability)   │  ← scoped async sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
