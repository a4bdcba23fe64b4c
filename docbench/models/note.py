"""Structured note models.

A structured note is what the model returns for the "Smart Note" call: a
JSON object with the keys ``formattedText``, ``entities``, ``mindGraph``,
``keywords`` and ``questions``.  The model is trusted to produce JSON, not
to produce exactly this shape, so every field here is optional and coerced
leniently:

    - a missing key reads as an empty value (``""``, ``[]``, empty graph)
    - ``questions`` sent as a list is joined into one line per question
    - ``keywords`` sent as a comma-separated string is split
    - graph nodes/links that cannot be validated are dropped individually

Only the outer JSON parse is strict; see
:meth:`docbench.services.smart_note_service.SmartNoteService.parse_payload`.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_QUESTION_NUMBER_RE = re.compile(r"^\d+\.\s*")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, indent=2)
    return str(value)


class MindGraphNode(BaseModel):
    """A concept in the mind graph; ``val`` is its importance (node size)."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    val: float = 10.0

    @field_validator("id", "label", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def display_label(self) -> str:
        return self.label or self.id


class MindGraphLink(BaseModel):
    """A relation between two concepts; ``value`` is its strength (line width)."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    value: float = 1.0

    @field_validator("source", "target", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class MindGraph(BaseModel):
    """Node/link payload of a structured note."""

    model_config = ConfigDict(frozen=True)

    nodes: list[MindGraphNode] = Field(default_factory=list)
    links: list[MindGraphLink] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def _drop_bad_nodes(cls, value: Any) -> list[MindGraphNode]:
        return _validate_each(MindGraphNode, value)

    @field_validator("links", mode="before")
    @classmethod
    def _drop_bad_links(cls, value: Any) -> list[MindGraphLink]:
        return _validate_each(MindGraphLink, value)

    def node(self, node_id: str) -> MindGraphNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def _validate_each(model: type[BaseModel], items: Any) -> list[Any]:
    if not isinstance(items, list):
        return []
    valid = []
    for item in items:
        try:
            valid.append(model.model_validate(item))
        except ValidationError:
            continue
    return valid


class NoteContent(BaseModel):
    """The five content fields of a structured note, keyed as the model sends them."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    formatted_text: str = Field(default="", alias="formattedText")
    # Markdown table of extracted entities.
    entities: str = ""
    mind_graph: MindGraph = Field(default_factory=MindGraph, alias="mindGraph")
    keywords: list[str] = Field(default_factory=list)
    questions: str = ""

    @field_validator("formatted_text", "entities", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("mind_graph", mode="before")
    @classmethod
    def _coerce_graph(cls, value: Any) -> Any:
        if isinstance(value, (dict, MindGraph)):
            return value
        return MindGraph()

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, list):
            return []
        return [str(k).strip() for k in value if k is not None and str(k).strip()]

    @field_validator("questions", mode="before")
    @classmethod
    def _coerce_questions(cls, value: Any) -> str:
        if isinstance(value, list):
            return "\n".join(_as_text(q) for q in value)
        return _as_text(value)

    def to_payload(self) -> dict[str, Any]:
        """Content fields under the model's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json", include=set(NoteContent.model_fields))

    def question_list(self) -> list[str]:
        """One entry per non-blank line, leading ``"N. "`` numbering removed."""
        return [
            _QUESTION_NUMBER_RE.sub("", line.strip())
            for line in self.questions.split("\n")
            if line.strip()
        ]


class StructuredNote(NoteContent):
    """A generated note as held by a workspace."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc).isoformat()  # noqa: UP017
    )
    original_text: str = ""

    def with_content(self, content: NoteContent) -> StructuredNote:
        """Copy of this note with all five content fields replaced."""
        return self.model_copy(
            update={name: getattr(content, name) for name in NoteContent.model_fields}
        )
