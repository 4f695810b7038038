"""
NoteShelf Backend — Dependency Providers
==========================================

What:  FastAPI `Depends` providers for the store capability and the services.
Why:   Route handlers never construct a Database or reach for a global one.
       The app factory places the Database on `app.state`; these providers
       hand it (and services wrapping it) to each request.
"""

from fastapi import Depends, Request

from noteshelf.database import Database
from noteshelf.services.note_service import NoteService
from noteshelf.services.tag_service import TagService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_note_service(database: Database = Depends(get_database)) -> NoteService:
    return NoteService(database)


def get_tag_service(database: Database = Depends(get_database)) -> TagService:
    return TagService(database)
