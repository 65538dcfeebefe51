# voca_providers/llm/__init__.py
from __future__ import annotations

from .llm_provider import LLMRouteSpec, LLMSuggestionProvider, default_openai_provider
from .packing import PromptPack, RenderedPrompt, default_vocabulary_pack_v1, render_prompt

__all__ = [
    "LLMRouteSpec",
    "LLMSuggestionProvider",
    "default_openai_provider",
    "PromptPack",
    "RenderedPrompt",
    "default_vocabulary_pack_v1",
    "render_prompt",
]
