"""
Runtime layer (orchestration, stores).

Value records live in voca_engine.models.
"""
from .store import SearchOptions, SupportsExport, VocaStore
from .provider import SuggestionProvider
from .in_memory_store import InMemoryVocaStore
from .engine import EngineConfig, EngineStats, VocaEngine

__all__ = [
    "SearchOptions",
    "SupportsExport",
    "VocaStore",
    "SuggestionProvider",
    "InMemoryVocaStore",
    "EngineConfig",
    "EngineStats",
    "VocaEngine",
]
