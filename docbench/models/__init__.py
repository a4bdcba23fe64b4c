"""Pydantic data models for docbench.

All models are frozen; updates go through ``model_copy(update=...)``.
"""

from docbench.models.analysis import GraphLayout, LinkSegment, PositionedNode, WordCount
from docbench.models.catalog import ModelCatalog, ModelOption, Operation, TokenBudget
from docbench.models.document import DocumentFile, DocumentKind, DocumentSummary
from docbench.models.note import (
    MindGraph,
    MindGraphLink,
    MindGraphNode,
    NoteContent,
    StructuredNote,
)
from docbench.models.theme import Theme

__all__ = [
    "DocumentFile",
    "DocumentKind",
    "DocumentSummary",
    "GraphLayout",
    "LinkSegment",
    "MindGraph",
    "MindGraphLink",
    "MindGraphNode",
    "ModelCatalog",
    "ModelOption",
    "NoteContent",
    "Operation",
    "PositionedNode",
    "StructuredNote",
    "Theme",
    "TokenBudget",
]
