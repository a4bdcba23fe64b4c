"""Utility modules for docbench.

- **errors** -- exception hierarchy rooted at WorkbenchError; each class
  carries the HTTP status the API middleware maps it to.
- **logging** -- structlog setup with coloured console output in
  development and JSON in production.
"""

from docbench.utils.errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidNoteFormatError,
    InvalidResponseFormatError,
    LLMError,
    MissingInputError,
    ModelGatewayError,
    NotFoundError,
    UnsupportedDocumentError,
    WorkbenchError,
)
from docbench.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "InvalidNoteFormatError",
    "InvalidResponseFormatError",
    "LLMError",
    "MissingInputError",
    "ModelGatewayError",
    "NotFoundError",
    "UnsupportedDocumentError",
    "WorkbenchError",
    "configure_logging",
    "get_logger",
]
