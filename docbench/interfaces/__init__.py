"""Abstract provider interfaces.

Services talk to hosted models only through :class:`ILLMProvider`; the
concrete adapters live in ``docbench/providers/llm/`` and are chosen once
at startup in ``docbench/main.py``.
"""

from docbench.interfaces.llm_provider import ILLMProvider

__all__ = ["ILLMProvider"]
