from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Sequence

from .types import from_iso, new_id, now_utc, require_field, to_iso


@dataclass(frozen=True)
class Suggestion:
    """
    Provider output for one input, in provider order (duplicates allowed).

    Builders return a new Suggestion with the same id; callers persist the
    replacement explicitly.
    """
    input_id: str = ""
    candidates: Sequence[str] = field(default_factory=tuple)

    suggestion_id: str = field(default_factory=lambda: new_id("sug"))
    generated_at: datetime = field(default_factory=now_utc)

    def __post_init__(self) -> None:
        object.__setattr__(self, "candidates", tuple(str(c) for c in self.candidates))

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)

    def has_candidates(self) -> bool:
        return bool(self.candidates)

    def add_candidate(self, candidate: str) -> "Suggestion":
        return replace(self, candidates=tuple(self.candidates) + (candidate,))

    def filter_candidates(self, predicate: Callable[[str], bool]) -> "Suggestion":
        return replace(self, candidates=tuple(c for c in self.candidates if predicate(c)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestion_id": self.suggestion_id,
            "input_id": self.input_id,
            "candidates": list(self.candidates),
            "generated_at": to_iso(self.generated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Suggestion":
        return cls(
            suggestion_id=str(require_field(data, "suggestion_id", "id")),
            input_id=str(require_field(data, "input_id", "inputId")),
            candidates=tuple(data.get("candidates") or ()),
            generated_at=from_iso(require_field(data, "generated_at", "generatedAt")),
        )
