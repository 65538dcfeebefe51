from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, Type, TypeVar, runtime_checkable

from voca_engine.errors import ValidationError
from voca_engine.models.collection import Collection
from voca_engine.models.entry import Entry

T = TypeVar("T")


@dataclass(frozen=True)
class SearchOptions:
    """
    Composite entry query. Every field narrows; none re-orders.

    - query: case-insensitive substring over input content, candidates and tags
      (None or "" matches all)
    - collection_id: exact match
    - tags: entry must carry all of them, compared verbatim (no trimming;
      an empty string only matches an empty tag, which never exists)
    - limit: None means unbounded
    """
    query: Optional[str] = None
    collection_id: Optional[str] = None
    tags: Sequence[str] = field(default_factory=tuple)
    limit: Optional[int] = None
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags or ()))
        if self.offset is None:
            object.__setattr__(self, "offset", 0)
        if self.offset < 0:
            raise ValidationError("SearchOptions.offset must be >= 0")
        if self.limit is not None and self.limit < 0:
            raise ValidationError("SearchOptions.limit must be >= 0")


@runtime_checkable
class VocaStore(Protocol):
    """
    Storage/query seam the engine depends on.

    - Four independent record maps (inputs, suggestions, collections, entries) keyed by id.
    - `get` signals absence with None; it never raises for a missing key.
    - Writes are single-record upserts; there are no multi-record transactions.
    - Any implementation must honor list/search ordering exactly:
        collections: created_at ascending
        entries: saved_at descending, ties in reverse insertion order
    """

    async def put(self, obj: Any) -> Any:
        ...

    async def get(self, cls: Type[T], obj_id: str) -> Optional[T]:
        ...

    async def must_get(self, cls: Type[T], obj_id: str) -> T:
        ...

    async def has(self, cls: Type[Any], obj_id: str) -> bool:
        ...

    async def list_collections(self) -> Sequence[Collection]:
        ...

    async def list_entries(self, collection_id: str) -> Sequence[Entry]:
        ...

    async def delete_entry(self, entry_id: str) -> None:
        ...

    async def update_collection(self, collection_id: str, changes: Mapping[str, Any]) -> Collection:
        ...

    async def search_entries(self, options: SearchOptions) -> Sequence[Entry]:
        ...


@runtime_checkable
class SupportsExport(Protocol):
    """
    Optional store capability: dump/load every record as serialized maps.
    """

    def export_data(self) -> Mapping[str, Any]:
        ...

    def import_data(self, data: Mapping[str, Any]) -> None:
        ...
