"""Shared pytest fixtures for the docbench test suite."""

from __future__ import annotations

import base64
import copy
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from docbench.config.loader import _BUILTIN_DEFAULTS
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.models.catalog import ModelCatalog
from docbench.services.model_gateway import ModelGateway
from docbench.services.workspace import Workspace

# 8-byte PNG signature followed by filler; enough for payload round trips.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Resolved configuration with the built-in model catalog and budgets."""
    return copy.deepcopy(_BUILTIN_DEFAULTS)


@pytest.fixture
def model_catalog(mock_config: dict[str, Any]) -> ModelCatalog:
    return ModelCatalog.from_config(mock_config, "gemini")


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider that returns configurable responses.

    Override with ``mock_llm_provider.complete.return_value = "..."`` or
    ``side_effect`` for specific tests.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.supports_vision.return_value = True
    mock.validate_credentials = AsyncMock(return_value=True)
    mock.complete = AsyncMock(return_value="mock answer")
    mock.extract_from_document = AsyncMock(return_value="TRANSCRIBED TEXT")
    return mock


@pytest.fixture
def gateway(mock_llm_provider: ILLMProvider, model_catalog: ModelCatalog) -> ModelGateway:
    return ModelGateway(llm_provider=mock_llm_provider, catalog=model_catalog)


@pytest.fixture
def workspace() -> Workspace:
    return Workspace()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def png_base64() -> str:
    return base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def sample_note_payload() -> dict[str, Any]:
    """A complete structured-note reply as the model would send it."""
    return {
        "formattedText": "# Summary\n\n- Drug X approved",
        "entities": "| # | Entity | Context |\n|---|---|---|\n| 1 | FDA | Regulator |",
        "mindGraph": {
            "nodes": [
                {"id": "FDA", "label": "FDA", "val": 20},
                {"id": "DrugX", "label": "Drug X", "val": 10},
                {"id": "Trial", "label": "Phase III Trial", "val": 8},
            ],
            "links": [
                {"source": "FDA", "target": "DrugX", "value": 8},
                {"source": "DrugX", "target": "Trial", "value": 1},
            ],
        },
        "keywords": ["FDA", "Drug X", "approval"],
        "questions": "1. When was Drug X approved?\n2. Which trial supported it?",
    }


@pytest.fixture
def sample_note_json(sample_note_payload: dict[str, Any]) -> str:
    return json.dumps(sample_note_payload)
