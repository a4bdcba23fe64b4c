"""Structured ("smart") note generation and raw-JSON editing.

Generation sends the workspace's text through the model gateway and keeps
the result as the workspace's current note along with its pretty-printed
JSON.  The raw editor path parses user-edited JSON back into the note; an
edit that does not parse leaves the previous note exactly as it was.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from docbench.models.note import NoteContent, StructuredNote
from docbench.services.model_gateway import ModelGateway
from docbench.services.workspace import Workspace
from docbench.utils.errors import InvalidNoteFormatError, NotFoundError
from docbench.utils.logging import get_logger


def _pretty(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


class SmartNoteService:
    """Builds, stores and revises the structured note of a workspace."""

    def __init__(self, gateway: ModelGateway) -> None:
        self._gateway = gateway
        self._logger = get_logger(__name__)

    async def generate(
        self,
        workspace: Workspace,
        text: str | None = None,
        instruction_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> StructuredNote:
        """Generate a note from *text* (default: the workspace's combined text).

        The new note replaces the current one only after the model call and
        parsing succeed.
        """
        source_text = text if text is not None else workspace.store.combined_text()
        payload = await self._gateway.generate_structured_note(
            source_text,
            instruction_prompt=instruction_prompt,
            model=model,
            max_tokens=max_tokens,
        )
        content = self.parse_payload(payload)
        note = StructuredNote(original_text=source_text).with_content(content)

        workspace.note = note
        workspace.raw_json = _pretty(payload)
        self._logger.info(
            "smart_note_generated",
            workspace_id=workspace.id,
            note_id=note.id,
            nodes=len(note.mind_graph.nodes),
            keywords=len(note.keywords),
        )
        return note

    def revise(self, workspace: Workspace, raw_json: str) -> StructuredNote:
        """Replace the current note's content with user-edited JSON.

        Raises:
            NotFoundError: If the workspace has no note yet.
            InvalidNoteFormatError: If *raw_json* is not a JSON object. The
                current note and raw text are left unchanged.
        """
        if workspace.note is None:
            raise NotFoundError("No structured note to update. Generate one first.")

        try:
            payload = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            self._logger.warning("smart_note_edit_rejected", workspace_id=workspace.id, error=str(exc))
            raise InvalidNoteFormatError() from exc

        note = workspace.note.with_content(self.parse_payload(payload))
        workspace.note = note
        workspace.raw_json = raw_json
        self._logger.info("smart_note_revised", workspace_id=workspace.id, note_id=note.id)
        return note

    @staticmethod
    def parse_payload(payload: Any) -> NoteContent:
        """Validate a decoded note payload leniently.

        Raises:
            InvalidNoteFormatError: If *payload* is not a JSON object.
        """
        if not isinstance(payload, dict):
            raise InvalidNoteFormatError()
        try:
            return NoteContent.model_validate(payload)
        except ValidationError as exc:
            raise InvalidNoteFormatError() from exc
