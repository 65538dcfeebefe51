from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from voca_engine.models import Collection, Entry, ExpressionInput, InputKind, Suggestion
from voca_engine.runtime import InMemoryVocaStore, VocaEngine
from voca_providers import StubSuggestionProvider


BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def provider() -> StubSuggestionProvider:
    return StubSuggestionProvider(candidates=("a", "b"))


@pytest.fixture
def store() -> InMemoryVocaStore:
    return InMemoryVocaStore()


@pytest.fixture
def engine(provider: StubSuggestionProvider, store: InMemoryVocaStore) -> VocaEngine:
    return VocaEngine(provider=provider, store=store)


@pytest_asyncio.fixture
async def seeded(engine: VocaEngine):
    """
    One collection, one expression input, one suggestion for it.
    Returns (collection, input, suggestion).
    """
    collection = await engine.create_collection("C1")
    inp = await engine.add_input(InputKind.EXPRESSION, "hello world")
    suggestion = await engine.generate_suggestions(inp.input_id)
    return collection, inp, suggestion


@pytest.fixture
def make_entry():
    """
    Factory for Entry records with explicit timestamps, for store-level tests
    that need deterministic ordering.
    """

    def _make(
        *,
        collection_id: str = "col_1",
        content: str = "hello world",
        candidates=("alpha", "beta"),
        tags=(),
        minutes: int = 0,
        kind: InputKind = InputKind.EXPRESSION,
    ) -> Entry:
        inp = ExpressionInput(kind=kind, content=content, created_at=BASE_TIME)
        sug = Suggestion(input_id=inp.input_id, candidates=candidates, generated_at=BASE_TIME)
        return Entry(
            input=inp,
            suggestion=sug,
            collection_id=collection_id,
            tags=tags,
            saved_at=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def make_collection():
    def _make(name: str = "C", *, minutes: int = 0) -> Collection:
        return Collection(name=name, created_at=BASE_TIME + timedelta(minutes=minutes))

    return _make
