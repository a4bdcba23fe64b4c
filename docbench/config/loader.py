"""YAML configuration loader for the model catalog and token budgets.

Configuration is resolved in two layers (the later overrides the earlier):

  1. ``_BUILTIN_DEFAULTS``  -- model catalog and token budgets baked in here
  2. ``config/config.yaml`` -- repo-level overrides (optional)

Credentials, host/port and log level are not part of this dictionary; they
are read from the environment by :class:`Settings`, which also names the
YAML file (``CONFIG_PATH``).

``_deep_merge`` does recursive dict merging, so a YAML file that only sets
``budgets.qna.default`` keeps every other built-in value.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from docbench.config.settings import Settings
from docbench.utils.errors import ConfigurationError

_GEMINI_MODELS = [
    {
        "id": "gemini-2.5-flash",
        "label": "Gemini 2.5 Flash",
        "operations": ["ocr", "note", "analysis", "qna"],
    },
    {
        "id": "gemini-2.5-flash-lite-latest",
        "label": "Gemini 2.5 Flash Lite",
        "operations": ["ocr", "note", "analysis", "qna"],
    },
    {
        "id": "gemini-3-pro-preview",
        "label": "Gemini 3.0 Pro",
        "operations": ["qna"],
    },
]

_BUILTIN_DEFAULTS: dict[str, Any] = {
    "models": {
        "gemini": _GEMINI_MODELS,
        "openai": [
            {"id": "gpt-4o-mini", "label": "GPT-4o mini", "operations": ["ocr", "note", "analysis", "qna"]},
            {"id": "gpt-4o", "label": "GPT-4o", "operations": ["ocr", "note", "analysis", "qna"]},
        ],
        "anthropic": [
            {
                "id": "claude-sonnet-4-20250514",
                "label": "Claude Sonnet 4",
                "operations": ["ocr", "note", "analysis", "qna"],
            },
            {
                "id": "claude-3-5-haiku-latest",
                "label": "Claude 3.5 Haiku",
                "operations": ["note", "analysis", "qna"],
            },
        ],
    },
    "budgets": {
        "ocr": {"min": 1000, "max": 32000, "step": 1000, "default": 12000},
        "note": {"min": 1000, "max": 32000, "step": 1000, "default": 12000},
        "analysis": {"min": 1000, "max": 32000, "step": 1000, "default": 12000},
        "qna": {"min": 100, "max": 8192, "step": 100, "default": 1024},
    },
}


def load_config(path: str | None = None, settings: Settings | None = None) -> dict[str, Any]:
    """Load built-in defaults and deep-merge the YAML file over them.

    Args:
        path: YAML file to read. Defaults to ``settings.config_path``.
        settings: Settings instance; a fresh one is read from the environment
            when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the YAML file exists but is not a mapping.
    """
    settings = settings or Settings()
    config = copy.deepcopy(_BUILTIN_DEFAULTS)

    config_path = Path(path or settings.config_path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"{config_path} must contain a YAML mapping")
        _deep_merge(config, yaml_config)

    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
