# voca_providers/llm/openai/__init__.py
from __future__ import annotations

from .adapter import OpenAIAdapter
from .client import OpenAIClient, OpenAIClientStub, OpenAIRequest

__all__ = [
    "OpenAIAdapter",
    "OpenAIClient",
    "OpenAIClientStub",
    "OpenAIRequest",
]
