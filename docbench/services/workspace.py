"""Per-tab volatile state and the process-wide registry of workspaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from docbench.models.note import StructuredNote
from docbench.services.document_store import DocumentStore
from docbench.utils.errors import NotFoundError
from docbench.utils.logging import get_logger


@dataclass
class Workspace:
    """One browser tab's documents and current structured note."""

    id: str = field(default_factory=lambda: uuid4().hex)
    store: DocumentStore = field(default_factory=DocumentStore)
    note: StructuredNote | None = None
    # Pretty-printed JSON of the current note, as shown in the raw editor.
    raw_json: str = ""


class WorkspaceRegistry:
    """In-memory map of workspace id to :class:`Workspace`; lost on restart."""

    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}
        self._logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self._workspaces)

    def create(self) -> Workspace:
        workspace = Workspace()
        self._workspaces[workspace.id] = workspace
        self._logger.info("workspace_created", workspace_id=workspace.id)
        return workspace

    def get(self, workspace_id: str) -> Workspace:
        try:
            return self._workspaces[workspace_id]
        except KeyError:
            raise NotFoundError(f"Workspace not found: {workspace_id}") from None

    def discard(self, workspace_id: str) -> None:
        self.get(workspace_id)
        del self._workspaces[workspace_id]
        self._logger.info("workspace_discarded", workspace_id=workspace_id)
