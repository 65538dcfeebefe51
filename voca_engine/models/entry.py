# voca_engine/models/entry.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Sequence

from voca_engine.errors import ReferentialIntegrityError

from .expression_input import ExpressionInput
from .suggestion import Suggestion
from .types import InputKind, from_iso, new_id, normalize_tags, now_utc, require_field, to_iso


@dataclass(frozen=True)
class Entry:
    """
    A saved pairing of one input and one of its suggestions inside a collection.

    Input and Suggestion are embedded as snapshots, not references.
    Tags form an ordered set: trimmed, non-empty, duplicate-free, case-sensitive.
    Tag builders keep entry_id and saved_at; persisting the result is an upsert.
    """
    input: ExpressionInput
    suggestion: Suggestion
    collection_id: str
    tags: Sequence[str] = field(default_factory=tuple)

    entry_id: str = field(default_factory=lambda: new_id("ent"))
    saved_at: datetime = field(default_factory=now_utc)

    def __post_init__(self) -> None:
        if self.suggestion.input_id != self.input.input_id:
            raise ReferentialIntegrityError(
                f"Suggestion {self.suggestion.suggestion_id} does not belong to input {self.input.input_id}"
            )
        object.__setattr__(self, "tags", normalize_tags(self.tags))

    # -----------------------
    # Tag builders
    # -----------------------

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def has_tags(self, tags: Iterable[str]) -> bool:
        return all(self.has_tag(t) for t in tags)

    def add_tag(self, tag: str) -> "Entry":
        if self.has_tag(tag.strip()):
            return self
        return replace(self, tags=tuple(self.tags) + (tag,))

    def remove_tag(self, tag: str) -> "Entry":
        target = tag.strip()
        return replace(self, tags=tuple(t for t in self.tags if t != target))

    def with_tags(self, tags: Iterable[str]) -> "Entry":
        return replace(self, tags=tuple(tags))

    # -----------------------
    # Query helpers
    # -----------------------

    def matches_query(self, query: str) -> bool:
        """
        Case-insensitive substring match against input content, any candidate,
        or any tag. An empty query matches everything.
        """
        q = query.lower()
        if q in self.input.content.lower():
            return True
        if any(q in c.lower() for c in self.suggestion.candidates):
            return True
        return any(q in t.lower() for t in self.tags)

    @property
    def input_kind(self) -> InputKind:
        return self.input.kind

    @property
    def candidate_count(self) -> int:
        return self.suggestion.candidate_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "input": self.input.to_dict(),
            "suggestion": self.suggestion.to_dict(),
            "collection_id": self.collection_id,
            "tags": list(self.tags),
            "saved_at": to_iso(self.saved_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entry":
        return cls(
            entry_id=str(require_field(data, "entry_id", "id")),
            input=ExpressionInput.from_dict(require_field(data, "input")),
            suggestion=Suggestion.from_dict(require_field(data, "suggestion")),
            collection_id=str(require_field(data, "collection_id", "collectionId")),
            tags=tuple(data.get("tags") or ()),
            saved_at=from_iso(require_field(data, "saved_at", "savedAt")),
        )
