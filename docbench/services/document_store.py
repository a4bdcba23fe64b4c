"""In-memory ordered collection of uploaded and pasted documents.

One store backs one workspace.  Records are frozen :class:`DocumentFile`
models, so every change replaces the stored record in place, keeping the
upload order stable.  All mutation happens on the event loop; there is no
locking.
"""

from __future__ import annotations

from typing import Any

from docbench.models.document import DocumentFile
from docbench.utils.errors import NotFoundError

PASTE_ID_PREFIX = "paste-"

# Fields a caller may change on an existing document.
_EDITABLE_FIELDS = frozenset({"name", "content"})


class DocumentStore:
    """Ordered list of documents with add/update/remove/lookup."""

    def __init__(self) -> None:
        self._documents: list[DocumentFile] = []

    def __len__(self) -> int:
        return len(self._documents)

    def add_document(self, document: DocumentFile) -> DocumentFile:
        self._documents.append(document)
        return document

    def get_document(self, doc_id: str) -> DocumentFile:
        return self._documents[self._index_of(doc_id)]

    def list_documents(self) -> list[DocumentFile]:
        return list(self._documents)

    def update_document(self, doc_id: str, patch: dict[str, Any]) -> DocumentFile:
        """Replace the record matching *doc_id* with a patched copy.

        Only ``name`` and ``content`` can be patched; other keys are ignored.

        Raises:
            NotFoundError: If no document has this id.
        """
        index = self._index_of(doc_id)
        changes = {k: v for k, v in patch.items() if k in _EDITABLE_FIELDS and v is not None}
        updated = self._documents[index].model_copy(update=changes)
        self._documents[index] = updated
        return updated

    def remove_document(self, doc_id: str) -> DocumentFile:
        """Delete exactly the record matching *doc_id*, keeping the rest in order."""
        return self._documents.pop(self._index_of(doc_id))

    def replace_paste(self, document: DocumentFile) -> DocumentFile:
        """Drop any existing pasted document and append *document* (last write wins)."""
        self._documents = [
            d for d in self._documents if not d.id.startswith(PASTE_ID_PREFIX)
        ]
        self._documents.append(document)
        return document

    def combined_text(self) -> str:
        """Contents of every document, in store order, separated by a blank line."""
        return "\n\n".join(d.content for d in self._documents)

    def _index_of(self, doc_id: str) -> int:
        for index, document in enumerate(self._documents):
            if document.id == doc_id:
                return index
        raise NotFoundError(f"Document not found: {doc_id}")
