"""
Suggestion providers: everything that produces vocabulary candidates lives outside the kernel.
"""
from voca_engine.runtime.provider import SuggestionProvider
from .stub_provider import StubSuggestionProvider
from .mock_provider import MockSuggestionProvider

__all__ = ["SuggestionProvider", "StubSuggestionProvider", "MockSuggestionProvider"]
