"""docbench FastAPI application entry point.

Wires the model provider, gateway and workbench services together and
stores them on ``app.state`` for the route dependencies.  Configuration
comes from ``.env``/environment (:class:`Settings`) and
``config/config.yaml`` (:func:`load_config`).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from docbench import __version__
from docbench.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from docbench.api.routes import router as api_router
from docbench.config.loader import load_config
from docbench.config.settings import LLM_PROVIDER_CHOICES, Settings
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.models.catalog import ModelCatalog
from docbench.providers.llm.anthropic_provider import AnthropicLLMProvider
from docbench.providers.llm.gemini_provider import GeminiLLMProvider
from docbench.providers.llm.openai_provider import OpenAILLMProvider
from docbench.services.document_processor import DocumentProcessor
from docbench.services.ingestion import IngestionService
from docbench.services.model_gateway import ModelGateway
from docbench.services.smart_note_service import SmartNoteService
from docbench.services.workspace import WorkspaceRegistry
from docbench.utils.errors import ConfigurationError
from docbench.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    app_env=settings.app_env,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# LLM provider selection
# ---------------------------------------------------------------------------

_PROVIDER_CLASSES: dict[str, type[ILLMProvider]] = {
    "gemini": GeminiLLMProvider,
    "openai": OpenAILLMProvider,
    "anthropic": AnthropicLLMProvider,
}


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Build the configured provider, or pick one in ``auto`` mode.

    ``auto`` priority: Gemini -> OpenAI -> Anthropic, first with a key.
    With no key at all Gemini is still returned; its calls then fail with
    an auth error that the gateway reports.

    Raises:
        ConfigurationError: For an unknown provider name, or an explicitly
            chosen OpenAI/Anthropic provider without an API key.
    """
    choice = app_settings.llm_provider.lower()
    if choice not in LLM_PROVIDER_CHOICES:
        raise ConfigurationError(
            f"Unknown LLM_PROVIDER '{app_settings.llm_provider}'. "
            f"Choose one of: {', '.join(LLM_PROVIDER_CHOICES)}"
        )

    if choice == "auto":
        available = app_settings.get_available_llm_providers()
        choice = available[0] if available else "gemini"
    elif choice != "gemini" and choice not in app_settings.get_available_llm_providers():
        raise ConfigurationError(
            f"LLM_PROVIDER is '{choice}' but no API key is configured for it",
            provider_name=choice,
        )

    return _PROVIDER_CLASSES[choice](settings=app_settings)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    llm = _build_llm_provider(app_settings)
    provider_name = llm.get_provider_name()
    # "openai-compatible" shares the OpenAI catalog entry.
    catalog_key = "openai" if provider_name.startswith("openai") else provider_name
    catalog = ModelCatalog.from_config(app_config, catalog_key)

    gateway = ModelGateway(llm_provider=llm, catalog=catalog)

    provider_registry = {
        "llm": llm.is_available(),
        "llm_provider": provider_name,
        "vision": llm.supports_vision(),
    }
    configured = set(app_settings.get_available_llm_providers())
    provider_list = [
        {
            "name": cls.__name__,
            "type": "llm",
            "provider": name,
            "available": name in configured,
            "active": cls is type(llm),
        }
        for name, cls in _PROVIDER_CLASSES.items()
    ]

    return {
        "workspaces": WorkspaceRegistry(),
        "ingestion_service": IngestionService(),
        "llm_provider": llm,
        "primary_llm_name": provider_name,
        "model_catalog": catalog,
        "model_gateway": gateway,
        "document_processor": DocumentProcessor(gateway),
        "smart_note_service": SmartNoteService(gateway),
        "provider_registry": provider_registry,
        "provider_list": provider_list,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    if not components["llm_provider"].is_available():
        _logger.warning(
            "llm_credentials_missing",
            provider=components["primary_llm_name"],
            hint="set GEMINI_API_KEY (or OPENAI_API_KEY / ANTHROPIC_API_KEY)",
        )

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        primary_llm=components["primary_llm_name"],
        models=len(components["model_catalog"].models),
    )

    yield

    _logger.info("app_shutdown", workspaces=len(components["workspaces"]))


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="docbench API",
        version=__version__,
        description=(
            "Upload documents, transcribe images and PDFs with a hosted model, "
            "ask questions, run agent analyses and turn text into structured "
            "notes with a mind graph."
        ),
        lifespan=_lifespan,
    )

    # Last added = first executed.
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "docbench.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
