from noteshelf.schemas.common import ErrorResponse, HealthResponse
from noteshelf.schemas.note import NoteResponse
from noteshelf.schemas.tag import TagResponse

__all__ = ["ErrorResponse", "HealthResponse", "NoteResponse", "TagResponse"]
