from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from voca_engine.errors import NotFoundError
from voca_engine.models.collection import Collection
from voca_engine.models.entry import Entry
from voca_engine.models.expression_input import ExpressionInput
from voca_engine.models.suggestion import Suggestion

from .store import SearchOptions

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Serialized section name -> record type (export/import order matters: entries last).
_SECTIONS = (
    ("inputs", ExpressionInput),
    ("suggestions", Suggestion),
    ("collections", Collection),
    ("entries", Entry),
)


def _primary_id(obj: Any) -> str:
    if isinstance(obj, ExpressionInput):
        return obj.input_id
    if isinstance(obj, Suggestion):
        return obj.suggestion_id
    if isinstance(obj, Collection):
        return obj.collection_id
    if isinstance(obj, Entry):
        return obj.entry_id
    raise TypeError(f"Unknown record type: {type(obj)!r}")


def _most_recent_first(entries: Iterable[Entry]) -> List[Entry]:
    """
    saved_at descending; equal timestamps keep reverse insertion order.

    `entries` must be in insertion order. sort() is stable, so reversing first
    makes the later-inserted entry win ties.
    """
    out = list(entries)
    out.reverse()
    out.sort(key=lambda e: e.saved_at, reverse=True)
    return out


class InMemoryVocaStore:
    """
    Concrete in-memory VocaStore used by tests and the default engine wiring.

    Dicts preserve insertion order; an upsert keeps the record's original slot.
    """

    def __init__(self) -> None:
        self._inputs: Dict[str, ExpressionInput] = {}
        self._suggestions: Dict[str, Suggestion] = {}
        self._collections: Dict[str, Collection] = {}
        self._entries: Dict[str, Entry] = {}

    def _map_for(self, cls: Type[Any]) -> Dict[str, Any]:
        if cls is ExpressionInput:
            return self._inputs
        if cls is Suggestion:
            return self._suggestions
        if cls is Collection:
            return self._collections
        if cls is Entry:
            return self._entries
        raise TypeError(f"Unknown record type: {cls!r}")

    # -----------------------
    # CRUD
    # -----------------------

    async def put(self, obj: T) -> T:
        self._map_for(type(obj))[_primary_id(obj)] = obj
        return obj

    async def get(self, cls: Type[T], obj_id: str) -> Optional[T]:
        return self._map_for(cls).get(obj_id)

    async def must_get(self, cls: Type[T], obj_id: str) -> T:
        obj = await self.get(cls, obj_id)
        if obj is None:
            raise NotFoundError(cls.__name__, obj_id)
        return obj

    async def has(self, cls: Type[Any], obj_id: str) -> bool:
        return obj_id in self._map_for(cls)

    async def list_collections(self) -> Sequence[Collection]:
        return tuple(sorted(self._collections.values(), key=lambda c: c.created_at))

    async def list_entries(self, collection_id: str) -> Sequence[Entry]:
        return tuple(
            _most_recent_first(e for e in self._entries.values() if e.collection_id == collection_id)
        )

    async def delete_entry(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)

    async def update_collection(self, collection_id: str, changes: Mapping[str, Any]) -> Collection:
        existing = self._collections.get(collection_id)
        if existing is None:
            raise NotFoundError("Collection", collection_id)

        # Only the name is mutable; id and created_at always survive.
        updated = existing
        if "name" in changes:
            updated = replace(existing, name=str(changes["name"]))

        self._collections[collection_id] = updated
        return updated

    # -----------------------
    # Search
    # -----------------------

    async def search_entries(self, options: SearchOptions) -> Sequence[Entry]:
        results: Iterable[Entry] = self._entries.values()

        if options.collection_id:
            results = [e for e in results if e.collection_id == options.collection_id]

        if options.query:
            results = [e for e in results if e.matches_query(options.query)]

        if options.tags:
            results = [e for e in results if e.has_tags(options.tags)]

        ordered = _most_recent_first(results)

        start = options.offset
        end = None if options.limit is None else start + options.limit
        page = ordered[start:end]
        logger.debug("search_entries %r -> %d of %d", options, len(page), len(ordered))
        return tuple(page)

    # -----------------------
    # Maintenance / export
    # -----------------------

    def clear(self) -> None:
        self._inputs.clear()
        self._suggestions.clear()
        self._collections.clear()
        self._entries.clear()

    def counts(self) -> Dict[str, int]:
        return {
            "inputs": len(self._inputs),
            "suggestions": len(self._suggestions),
            "collections": len(self._collections),
            "entries": len(self._entries),
        }

    def export_data(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            section: [obj.to_dict() for obj in self._map_for(cls).values()]
            for section, cls in _SECTIONS
        }

    def import_data(self, data: Mapping[str, Any]) -> None:
        """
        Replace the store contents with serialized records.
        Missing sections are treated as empty.

        All-or-nothing: every record is parsed before the live maps are
        touched, so a malformed payload leaves the current contents intact.
        """
        loaded: Dict[Type[Any], Dict[str, Any]] = {}
        for section, cls in _SECTIONS:
            records: Dict[str, Any] = {}
            for raw in data.get(section) or ():
                obj = cls.from_dict(raw)
                records[_primary_id(obj)] = obj
            loaded[cls] = records

        self._inputs = loaded[ExpressionInput]
        self._suggestions = loaded[Suggestion]
        self._collections = loaded[Collection]
        self._entries = loaded[Entry]
        logger.debug("import_data loaded %s", self.counts())
