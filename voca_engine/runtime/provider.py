# voca_engine/runtime/provider.py
from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from voca_engine.models.expression_input import ExpressionInput


@runtime_checkable
class SuggestionProvider(Protocol):
    """
    Anything that turns an input into vocabulary candidates lives OUTSIDE the kernel:
    - LLMs (OpenAI, local models)
    - keyword tables / mocks
    - deterministic stubs for tests

    Contract:
    - generate() returns candidates in the order they should be shown.
    - generate() may raise; the engine surfaces that as ProviderError without retrying.
    - Providers never touch the store.
    - configure() accepts an open-ended option mapping; unknown keys are kept, not rejected.
    """

    # Stable identifier for logs and attribution.
    provider_id: str

    async def generate(self, input: ExpressionInput) -> Sequence[str]:
        ...

    def configure(self, options: Mapping[str, Any]) -> None:
        ...
