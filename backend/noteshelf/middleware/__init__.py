# Middleware package init
"""
NoteShelf Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: generate the correlation ID used by every log line
    2. Logging: log request details with that ID
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

    Responses travel the chain in reverse, so the request ID is on the
    response headers and the logger sees the final status and duration.
"""
