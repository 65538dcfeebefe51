from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping

from .types import from_iso, new_id, now_utc, require_field, to_iso


@dataclass(frozen=True)
class Collection:
    """
    User-named bucket for entries. Only `name` ever changes (via rename).
    """
    name: str = ""

    collection_id: str = field(default_factory=lambda: new_id("col"))
    created_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name.strip()

    def rename(self, name: str) -> "Collection":
        return replace(self, name=name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection_id": self.collection_id,
            "name": self.name,
            "created_at": to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Collection":
        return cls(
            collection_id=str(require_field(data, "collection_id", "id")),
            name=str(data.get("name", "")),
            created_at=from_iso(require_field(data, "created_at", "createdAt")),
        )
