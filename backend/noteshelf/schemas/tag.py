"""
NoteShelf Backend — Tag Response Schemas
==========================================
"""

from typing import Optional

from pydantic import BaseModel, Field


class TagResponse(BaseModel):
    """A tag as returned by the tags endpoints and by note-tag listings."""
    id: int = Field(description="Store-generated tag id")
    name: str = Field(description="Unique tag name (1-25 characters)")
    color_id: Optional[int] = Field(default=None, description="Colour palette reference")

    model_config = {"from_attributes": True}
