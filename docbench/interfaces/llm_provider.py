"""Abstract base class for LLM service providers.

Defines the contract for any hosted model backend the workbench sends
documents to: plain multi-part text generation (notes, Q&A, analysis) and
inline-payload extraction (OCR of an image or PDF).  Implementations wrap
Google Gemini, OpenAI or Anthropic; the model gateway only ever sees this
interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: GeminiLLMProvider, OpenAILLMProvider, AnthropicLLMProvider
# Located in: docbench/providers/llm/
class ILLMProvider(ABC):
    """Contract for the model backends used by the model gateway.

    Every call names its model and output budget explicitly; providers hold
    credentials and a client, never a fixed model.
    """

    @abstractmethod
    async def complete(
        self,
        parts: list[str],
        *,
        model: str,
        max_tokens: int,
        temperature: float | None = None,
        json_output: bool = False,
    ) -> str:
        """Generate a response from one user turn made of text *parts*.

        Parameters
        ----------
        parts:
            Text segments sent, in order, as a single user message.
        model:
            Provider model id, e.g. ``"gemini-2.5-flash"``.
        max_tokens:
            Upper bound on the number of tokens in the response.
        temperature:
            Sampling temperature; ``None`` leaves the provider default.
        json_output:
            Ask the provider to constrain the reply to a JSON object.

        Returns
        -------
        str
            The model's text response, ``""`` when it produced none.

        Raises
        ------
        docbench.utils.errors.LLMError
            If the API call fails.
        """

    @abstractmethod
    async def extract_from_document(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
    ) -> str:
        """Send raw image/PDF bytes inline together with *prompt*.

        Parameters
        ----------
        data:
            Decoded file bytes.
        mime_type:
            Media type of *data*, e.g. ``"image/png"`` or ``"application/pdf"``.
        prompt:
            Instruction describing what to extract.
        model:
            Provider model id.
        max_tokens:
            Upper bound on the number of tokens in the response.

        Returns
        -------
        str
            The extracted text, ``""`` when the model produced none.

        Raises
        ------
        docbench.utils.errors.LLMError
            If the provider cannot take this payload or the API call fails.
        """

    @abstractmethod
    def supports_vision(self) -> bool:
        """Return ``True`` if :meth:`extract_from_document` accepts images."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"gemini"`` or ``"openai"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured (no network call)."""

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Perform a lightweight API call to confirm credentials are valid."""
