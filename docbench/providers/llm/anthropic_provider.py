"""Anthropic LLM provider adapter.

Wraps the ``anthropic`` async client to implement :class:`ILLMProvider`
via the Claude Messages API.

Differences from the OpenAI adapter:
    - images go in an ``image`` block and PDFs in a ``document`` block,
      both with a base64 source, placed before the text prompt
    - the response is a list of content blocks; text blocks are joined
    - there is no JSON response mode, so ``json_output`` only appends an
      instruction to reply with a bare JSON object
"""

from __future__ import annotations

import base64

import anthropic

from docbench.config.settings import Settings
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.utils.errors import LLMError
from docbench.utils.logging import get_logger

logger = get_logger(__name__)

_JSON_ONLY_INSTRUCTION = "Respond with a single JSON object and nothing else."


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Claude API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.anthropic_api_key
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def complete(
        self,
        parts: list[str],
        *,
        model: str,
        max_tokens: int,
        temperature: float | None = None,
        json_output: bool = False,
    ) -> str:
        content = [{"type": "text", "text": part} for part in parts]
        if json_output:
            content.append({"type": "text", "text": _JSON_ONLY_INSTRUCTION})

        request: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        if temperature is not None:
            request["temperature"] = temperature
        return await self._create(request, event="anthropic_completion")

    async def extract_from_document(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
    ) -> str:
        block_type = "document" if mime_type == "application/pdf" else "image"
        request = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": block_type,
                            "source": {
                                "type": "base64",
                                "media_type": mime_type,
                                "data": base64.b64encode(data).decode("utf-8"),
                            },
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        }
        return await self._create(request, event="anthropic_document_extract")

    async def _create(self, request: dict, *, event: str) -> str:
        try:
            response = await self._client.messages.create(**request)
        except anthropic.APIError as exc:
            raise LLMError(
                message=f"Anthropic API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text_blocks = [block.text for block in response.content if block.type == "text"]
        logger.info(
            event,
            model=request["model"],
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        return "\n".join(text_blocks)

    def supports_vision(self) -> bool:
        return True

    def is_available(self) -> bool:
        """Return ``True`` if an Anthropic API key is configured."""
        return bool(self._api_key)

    async def validate_credentials(self) -> bool:
        """List models to verify the API key works without inference cost."""
        if not self.is_available():
            return False
        try:
            await self._client.models.list()
            return True
        except anthropic.APIError:
            return False

    def get_provider_name(self) -> str:
        return "anthropic"
