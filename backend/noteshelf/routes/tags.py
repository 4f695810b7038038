"""
NoteShelf Backend — Tags Route Handlers
=========================================

What:  HTTP endpoints for tags.
How:   Thin handlers over TagService. Lookups and deletes exist both by id
       and by name; the by-name routes live under `/tags/by-name/` so they
       never collide with `/tags/{id}`.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status

from noteshelf.dependencies import get_tag_service
from noteshelf.routes.notes import body_field
from noteshelf.schemas.common import ErrorResponse
from noteshelf.schemas.tag import TagResponse
from noteshelf.services.tag_service import TagService

router = APIRouter(tags=["Tags"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Tag not found", "model": ErrorResponse},
}


@router.post(
    "/tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: _ERRORS[400],
        409: {"description": "Tag name already taken", "model": ErrorResponse},
    },
    summary="Create a tag",
)
async def create_tag(
    payload: Any = Body(default=None),
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    return await service.create_tag(body_field(payload, "name"))


@router.get("/tags", response_model=List[TagResponse], summary="List all tags")
async def list_tags(service: TagService = Depends(get_tag_service)) -> List[TagResponse]:
    return await service.list_tags()


@router.get(
    "/tags/by-name/{name}",
    response_model=TagResponse,
    responses=_ERRORS,
    summary="Get a tag by name",
)
async def get_tag_by_name(name: str, service: TagService = Depends(get_tag_service)) -> TagResponse:
    return await service.get_tag_by_name(name)


@router.delete(
    "/tags/by-name/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a tag by name",
)
async def delete_tag_by_name(name: str, service: TagService = Depends(get_tag_service)) -> Response:
    await service.delete_tag_by_name(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/tags/{tag_id}",
    response_model=TagResponse,
    responses=_ERRORS,
    summary="Get a tag by id",
)
async def get_tag(tag_id: str, service: TagService = Depends(get_tag_service)) -> TagResponse:
    return await service.get_tag(tag_id)


@router.delete(
    "/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a tag by id",
)
async def delete_tag(tag_id: str, service: TagService = Depends(get_tag_service)) -> Response:
    await service.delete_tag(tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
