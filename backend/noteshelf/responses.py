"""
NoteShelf Backend — Error Envelopes
=====================================

What:  Builds the JSON error body shared by every failure response.
Who:   The app-level exception handlers in noteshelf.main, and the note
       delete routes, which answer "nothing deleted" with a 404 without
       raising.

Envelope:
    {
        "error": "not_found",
        "message": "record was not found",
        "details": {},
        "request_id": "1f2e3d4c"
    }
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from noteshelf.exceptions import NoteShelfError, http_status_for
from noteshelf.middleware.request_id import request_id_var


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def exception_response(exc: NoteShelfError) -> JSONResponse:
    """Envelope for a taxonomy error, with the status its kind maps to."""
    return error_response(
        http_status_for(exc),
        exc.kind.value,
        exc.message,
        details=dict(exc.context),
    )
