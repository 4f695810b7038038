"""
NoteShelf Backend — Notes Route Handlers
==========================================

What:  HTTP endpoints for notes and for the tags attached to a note.
How:   Path ids arrive as raw strings and JSON bodies as raw objects; both go
       to NoteService untouched, which validates them. Taxonomy errors bubble
       up to the app-level handlers in noteshelf.main.
Who:   Mounted by create_app() below settings.api_prefix.

Route Inventory:
    POST   /notes                      create            201
    GET    /notes                      list              200
    GET    /notes/{id}                 read              200
    PUT    /notes/{id}                 replace           200
    DELETE /notes/{id}                 delete            204
    POST   /notes/delete               batch delete      204
    GET    /notes/{id}/tags            list tags         200
    PUT    /notes/{id}/tags/{tag_id}   attach tag        200
    DELETE /notes/{id}/tags/{tag_id}   detach tag        204
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status

from noteshelf.dependencies import get_note_service
from noteshelf.exceptions import NotFoundError
from noteshelf.responses import exception_response
from noteshelf.schemas.common import ErrorResponse
from noteshelf.schemas.note import NoteResponse
from noteshelf.schemas.tag import TagResponse
from noteshelf.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


def body_field(payload: Any, name: str) -> Any:
    """
    Reads one member of a JSON body.

    Anything that is not a JSON object has no members, so the field reads as
    absent and the service reports it as undefined.
    """
    if isinstance(payload, dict):
        return payload.get(name)
    return None


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERRORS[400]},
    summary="Create a note",
)
async def create_note(
    payload: Any = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.create_note(body_field(payload, "title"), body_field(payload, "content"))


@router.get("/notes", response_model=List[NoteResponse], summary="List all notes")
async def list_notes(service: NoteService = Depends(get_note_service)) -> List[NoteResponse]:
    return await service.list_notes()


@router.post(
    "/notes/delete",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete several notes",
    description="Deletes every note whose id is listed in `ids`. 404 when none of them existed.",
)
async def delete_notes(
    payload: Any = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> Response:
    deleted = await service.delete_notes(body_field(payload, "ids"))
    if not deleted:
        return exception_response(NotFoundError())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_ERRORS,
    summary="Get a single note",
)
async def get_note(note_id: str, service: NoteService = Depends(get_note_service)) -> NoteResponse:
    return await service.get_note(note_id)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_ERRORS,
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: Any = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.update_note(
        note_id, body_field(payload, "title"), body_field(payload, "content")
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a note",
)
async def delete_note(note_id: str, service: NoteService = Depends(get_note_service)) -> Response:
    deleted = await service.delete_note(note_id)
    if not deleted:
        return exception_response(NotFoundError())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Tag links ─────────────────────────────────────────────────────────────


@router.get(
    "/notes/{note_id}/tags",
    response_model=List[TagResponse],
    responses=_ERRORS,
    summary="List the tags attached to a note",
)
async def list_note_tags(
    note_id: str, service: NoteService = Depends(get_note_service)
) -> List[TagResponse]:
    return await service.list_note_tags(note_id)


@router.put(
    "/notes/{note_id}/tags/{tag_id}",
    response_model=List[TagResponse],
    responses={
        **_ERRORS,
        409: {"description": "Tag already attached", "model": ErrorResponse},
    },
    summary="Attach a tag to a note",
)
async def add_tag_to_note(
    note_id: str,
    tag_id: str,
    service: NoteService = Depends(get_note_service),
) -> List[TagResponse]:
    return await service.add_tag_to_note(note_id, tag_id)


@router.delete(
    "/notes/{note_id}/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Detach a tag from a note",
)
async def remove_tag_from_note(
    note_id: str,
    tag_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.remove_tag_from_note(note_id, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
