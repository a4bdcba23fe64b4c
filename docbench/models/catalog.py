"""Model catalog: which model ids and token budgets each operation accepts."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from docbench.utils.errors import ConfigurationError, InvalidInputError


class Operation(str, Enum):
    """The four model-call shapes the gateway exposes."""

    OCR = "ocr"
    NOTE = "note"
    ANALYSIS = "analysis"
    QNA = "qna"


class ModelOption(BaseModel):
    """One selectable model variant."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    operations: list[Operation] = Field(default_factory=lambda: list(Operation))


class TokenBudget(BaseModel):
    """Allowed range and default of the maximum-output-token setting."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    step: int = 1
    default: int

    @model_validator(mode="after")
    def _check_range(self) -> TokenBudget:
        if not self.min <= self.default <= self.max:
            raise ValueError(
                f"default {self.default} outside range {self.min}..{self.max}"
            )
        return self

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


class ModelCatalog(BaseModel):
    """Model options and budgets for the active provider."""

    model_config = ConfigDict(frozen=True)

    provider: str
    models: list[ModelOption]
    budgets: dict[Operation, TokenBudget]

    @classmethod
    def from_config(cls, config: dict[str, Any], provider: str) -> ModelCatalog:
        """Build the catalog for *provider* from the resolved config dict.

        Raises:
            ConfigurationError: If the provider has no models listed or a
                budget entry is missing or malformed.
        """
        raw_models = config.get("models", {}).get(provider) or []
        if not raw_models:
            raise ConfigurationError(
                f"No models configured for provider '{provider}'",
                provider_name=provider,
            )
        raw_budgets = config.get("budgets", {})
        missing = [op.value for op in Operation if op.value not in raw_budgets]
        if missing:
            raise ConfigurationError(f"Missing token budgets for: {', '.join(missing)}")
        try:
            return cls(
                provider=provider,
                models=[ModelOption.model_validate(m) for m in raw_models],
                budgets={op: TokenBudget.model_validate(raw_budgets[op.value]) for op in Operation},
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid model catalog: {exc}") from exc

    def models_for(self, operation: Operation) -> list[ModelOption]:
        return [m for m in self.models if operation in m.operations]

    def default_model(self, operation: Operation) -> str:
        options = self.models_for(operation)
        if not options:
            raise ConfigurationError(
                f"No model supports '{operation.value}'", provider_name=self.provider
            )
        return options[0].id

    def resolve(
        self,
        operation: Operation,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> tuple[str, int]:
        """Return ``(model_id, max_tokens)`` for a call, applying defaults.

        Raises:
            InvalidInputError: If *model* is not offered for *operation* or
                *max_tokens* falls outside its budget.
        """
        model_id = model or self.default_model(operation)
        if model_id not in {m.id for m in self.models_for(operation)}:
            raise InvalidInputError(
                f"Model '{model_id}' is not available for {operation.value}",
                provider_name=self.provider,
            )

        budget = self.budgets[operation]
        tokens = budget.default if max_tokens is None else max_tokens
        if not budget.contains(tokens):
            raise InvalidInputError(
                f"max_tokens must be between {budget.min} and {budget.max} "
                f"for {operation.value}, got {tokens}"
            )
        return model_id, tokens
