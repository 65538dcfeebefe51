from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from voca_engine.errors import (
    NotFoundError,
    ProviderError,
    ReferentialIntegrityError,
    ValidationError,
)
from voca_engine.models.collection import Collection
from voca_engine.models.entry import Entry
from voca_engine.models.expression_input import ExpressionInput
from voca_engine.models.suggestion import Suggestion
from voca_engine.models.types import InputKind, normalize_tags
from voca_engine.runtime.in_memory_store import InMemoryVocaStore
from voca_engine.runtime.store import SearchOptions, SupportsExport, VocaStore
from .provider import SuggestionProvider

logger = logging.getLogger(__name__)

MIN_SUGGESTION_COUNT = 1
MAX_SUGGESTION_COUNT = 10


def _clamp_count(n: int) -> int:
    return max(MIN_SUGGESTION_COUNT, min(MAX_SUGGESTION_COUNT, int(n)))


def _require_text(value: Optional[str], what: str) -> str:
    s = (value or "").strip()
    if not s:
        raise ValidationError(f"{what} cannot be empty")
    return s


@dataclass(frozen=True)
class EngineConfig:
    """
    Kernel runtime configuration.
    Keep small; provider options live with the provider.
    """
    default_suggestion_count: int = 5

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_suggestion_count", _clamp_count(self.default_suggestion_count))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        return cls(default_suggestion_count=data.get("default_suggestion_count", 5))


@dataclass(frozen=True)
class EngineStats:
    collections: int
    entries: int
    total_suggestions: int


class VocaEngine:
    """
    Orchestrates Input → Suggestion → Entry.

    Every operation validates references through the store first, calls the
    provider at most once, and writes at most one record. Nothing is written
    when validation fails. The engine keeps no state besides its handles, so
    independent instances with their own stores are fully isolated.
    """

    def __init__(
        self,
        provider: SuggestionProvider,
        store: Optional[VocaStore] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.provider = provider
        self.store = store if store is not None else InMemoryVocaStore()
        self.config = config or EngineConfig()

    # -----------------------
    # Inputs + suggestions
    # -----------------------

    async def add_input(self, kind: Union[InputKind, str], content: str) -> ExpressionInput:
        parsed = InputKind.parse(kind)
        if parsed is None:
            raise ValidationError(
                f"Invalid input type: {kind}. Use 'expression', 'explanation', or 'image'"
            )
        text = _require_text(content, "Input content")

        inp = ExpressionInput(kind=parsed, content=text)
        await self.store.put(inp)
        logger.debug("added %s input %s", parsed.value, inp.input_id)
        return inp

    async def generate_suggestions(self, input_id: str) -> Suggestion:
        inp = await self.store.get(ExpressionInput, input_id)
        if inp is None:
            raise NotFoundError("Input", input_id)

        try:
            candidates = await self.provider.generate(inp)
        except ProviderError:
            logger.warning("provider %s failed for input %s", self._provider_id, input_id)
            raise
        except Exception as exc:
            logger.warning("provider %s failed for input %s: %s", self._provider_id, input_id, exc)
            raise ProviderError(f"Failed to generate suggestions: {exc}") from exc

        candidates = tuple(candidates or ())
        if not candidates:
            logger.warning("provider %s returned no candidates for input %s", self._provider_id, input_id)
            raise ProviderError("Failed to generate suggestions: no suggestions generated")

        suggestion = Suggestion(input_id=inp.input_id, candidates=candidates)
        await self.store.put(suggestion)
        logger.debug("stored suggestion %s (%d candidates)", suggestion.suggestion_id, len(candidates))
        return suggestion

    # -----------------------
    # Collections
    # -----------------------

    async def create_collection(self, name: str) -> Collection:
        collection = Collection(name=_require_text(name, "Collection name"))
        await self.store.put(collection)
        logger.debug("created collection %s", collection.collection_id)
        return collection

    async def list_collections(self) -> Sequence[Collection]:
        return await self.store.list_collections()

    async def rename_collection(self, collection_id: str, new_name: str) -> Collection:
        name = _require_text(new_name, "Collection name")
        await self._require_collection(collection_id)
        return await self.store.update_collection(collection_id, {"name": name})

    # -----------------------
    # Entries
    # -----------------------

    async def save_entry(
        self,
        input_id: str,
        suggestion_id: str,
        collection_id: str,
        tags: Optional[Iterable[str]] = None,
    ) -> Entry:
        inp = await self.store.must_get(ExpressionInput, input_id)
        suggestion = await self.store.must_get(Suggestion, suggestion_id)
        await self._require_collection(collection_id)

        if suggestion.input_id != inp.input_id:
            raise ReferentialIntegrityError("Suggestion does not belong to the specified input")

        entry = Entry(
            input=inp,
            suggestion=suggestion,
            collection_id=collection_id,
            tags=normalize_tags(tags),
        )
        await self.store.put(entry)
        logger.debug("saved entry %s into collection %s", entry.entry_id, collection_id)
        return entry

    async def list_entries(self, collection_id: str) -> Sequence[Entry]:
        await self._require_collection(collection_id)
        return await self.store.list_entries(collection_id)

    async def search_entries(self, collection_id: str, query: Optional[str] = None) -> Sequence[Entry]:
        q = (query or "").strip()
        if not q:
            return await self.list_entries(collection_id)

        await self._require_collection(collection_id)
        return await self.store.search_entries(SearchOptions(query=q, collection_id=collection_id))

    async def search_all_entries(
        self,
        query: Optional[str] = None,
        *,
        tags: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[Entry]:
        return await self.store.search_entries(
            SearchOptions(
                query=(query or "").strip(),
                tags=tuple(tags or ()),
                limit=limit,
                offset=offset,
            )
        )

    async def update_entry_tags(self, entry_id: str, tags: Iterable[str]) -> Entry:
        entry = await self.store.get(Entry, entry_id)
        if entry is None:
            raise NotFoundError("Entry", entry_id)

        updated = entry.with_tags(tags)
        await self.store.put(updated)
        return updated

    async def delete_entry(self, entry_id: str) -> None:
        if not await self.store.has(Entry, entry_id):
            raise NotFoundError("Entry", entry_id)
        await self.store.delete_entry(entry_id)
        logger.debug("deleted entry %s", entry_id)

    # -----------------------
    # Lookups (absence is None, never an error)
    # -----------------------

    async def get_input(self, input_id: str) -> Optional[ExpressionInput]:
        return await self.store.get(ExpressionInput, input_id)

    async def get_suggestion(self, suggestion_id: str) -> Optional[Suggestion]:
        return await self.store.get(Suggestion, suggestion_id)

    async def get_collection(self, collection_id: str) -> Optional[Collection]:
        return await self.store.get(Collection, collection_id)

    async def get_entry(self, entry_id: str) -> Optional[Entry]:
        return await self.store.get(Entry, entry_id)

    # -----------------------
    # Configuration
    # -----------------------

    def configure_provider(self, options: Mapping[str, Any]) -> None:
        self.provider.configure(options)

    @property
    def default_suggestion_count(self) -> int:
        return self.config.default_suggestion_count

    def set_default_suggestion_count(self, count: int) -> int:
        self.config = replace(self.config, default_suggestion_count=count)
        self.provider.configure({"suggestion_count": self.config.default_suggestion_count})
        return self.config.default_suggestion_count

    # -----------------------
    # Export / stats
    # -----------------------

    async def export_data(self) -> Mapping[str, Any]:
        if not isinstance(self.store, SupportsExport):
            raise TypeError(f"Export not supported for {type(self.store).__name__}")
        return self.store.export_data()

    async def import_data(self, data: Mapping[str, Any]) -> None:
        if not isinstance(self.store, SupportsExport):
            raise TypeError(f"Import not supported for {type(self.store).__name__}")
        self.store.import_data(data)

    async def get_stats(self) -> EngineStats:
        """
        Full scan: every collection, every entry in it.
        total_suggestions sums candidate counts of the embedded suggestions.
        """
        collections = await self.list_collections()
        entries = 0
        total_suggestions = 0
        for collection in collections:
            listed = await self.list_entries(collection.collection_id)
            entries += len(listed)
            total_suggestions += sum(e.candidate_count for e in listed)

        return EngineStats(
            collections=len(collections),
            entries=entries,
            total_suggestions=total_suggestions,
        )

    # -----------------------
    # Internals
    # -----------------------

    async def _require_collection(self, collection_id: str) -> None:
        if not await self.store.has(Collection, collection_id):
            raise NotFoundError("Collection", collection_id)

    @property
    def _provider_id(self) -> str:
        return getattr(self.provider, "provider_id", type(self.provider).__name__)
