# voca_providers/stub_provider.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from voca_engine.models.expression_input import ExpressionInput
from voca_engine.runtime.provider import SuggestionProvider


class StubSuggestionProvider(SuggestionProvider):
    """
    Deterministic provider for tests and demos.

    - Always returns the same candidates, in order.
    - Raises `error` instead when one is set (for ProviderError paths).
    - Records every input it was asked about and every configure() call.
    """

    provider_id = "stub_provider"

    def __init__(
        self,
        candidates: Sequence[str] = ("a", "b"),
        *,
        error: Optional[BaseException] = None,
    ) -> None:
        self.candidates = tuple(candidates)
        self.error = error
        self.calls: List[ExpressionInput] = []
        self.config: Dict[str, Any] = {}

    async def generate(self, input: ExpressionInput) -> Sequence[str]:
        self.calls.append(input)
        if self.error is not None:
            raise self.error
        return list(self.candidates)

    def configure(self, options: Mapping[str, Any]) -> None:
        self.config.update(options)
