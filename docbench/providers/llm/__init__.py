"""LLM provider adapters: Gemini (default), OpenAI and Anthropic."""

from docbench.providers.llm.anthropic_provider import AnthropicLLMProvider
from docbench.providers.llm.gemini_provider import GeminiLLMProvider
from docbench.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["AnthropicLLMProvider", "GeminiLLMProvider", "OpenAILLMProvider"]
