"""docbench API layer: routes, schemas and middleware."""

from docbench.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from docbench.api.routes import router
from docbench.api.schemas import (
    ErrorResponse,
    HealthResponse,
    NoteResponse,
    ProvidersResponse,
    UploadResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "NoteResponse",
    "ProvidersResponse",
    "UploadResponse",
]
