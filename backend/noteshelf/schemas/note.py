"""
NoteShelf Backend — Note Response Schemas
===========================================

What:  Pydantic models describing what the notes endpoints return.
Why:   Services hand routes a detached, request-scoped copy of the row, and
       ids in responses are always numbers, even when a driver returns them
       as strings.
How:   `from_attributes` lets services build these straight from ORM rows;
       the `int` annotation coerces "42" to 42.

Request bodies are intentionally NOT modelled here: field rules live in
noteshelf.validators, and a schema would reject bad input with FastAPI's 422
before the validators could answer with the documented 400.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by create, read, update and list operations.
    """
    id: int = Field(description="Store-generated note id")
    title: str = Field(description="Note title (1-100 characters)")
    content: str = Field(description="Note body (up to 10000 characters)")
    created_at: datetime = Field(description="When the note was created (UTC)")
    modified_at: datetime = Field(description="When the note was last updated (UTC)")

    model_config = {"from_attributes": True}
