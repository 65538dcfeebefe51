# voca_engine/models/expression_input.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping

from .types import InputKind, from_iso, new_id, now_utc, require_field, to_iso


@dataclass(frozen=True)
class ExpressionInput:
    """
    Immutable record of what the user submitted.

    - kind: expression | explanation | image
    - content: trimmed text (or an image URL / description for IMAGE)
    """
    kind: InputKind = InputKind.EXPRESSION
    content: str = ""

    input_id: str = field(default_factory=lambda: new_id("in"))
    created_at: datetime = field(default_factory=now_utc)

    def __post_init__(self) -> None:
        # Accept raw strings ("expression") so deserialized payloads stay typed.
        if not isinstance(self.kind, InputKind):
            object.__setattr__(self, "kind", InputKind(self.kind))

    @classmethod
    def expression(cls, content: str) -> "ExpressionInput":
        return cls(kind=InputKind.EXPRESSION, content=content)

    @classmethod
    def explanation(cls, content: str) -> "ExpressionInput":
        return cls(kind=InputKind.EXPLANATION, content=content)

    @classmethod
    def image(cls, content: str) -> "ExpressionInput":
        return cls(kind=InputKind.IMAGE, content=content)

    def is_expression(self) -> bool:
        return self.kind is InputKind.EXPRESSION

    def is_explanation(self) -> bool:
        return self.kind is InputKind.EXPLANATION

    def is_image(self) -> bool:
        return self.kind is InputKind.IMAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_id": self.input_id,
            "kind": self.kind.value,
            "content": self.content,
            "created_at": to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExpressionInput":
        return cls(
            input_id=str(require_field(data, "input_id", "id")),
            kind=InputKind(require_field(data, "kind", "type")),
            content=str(data.get("content", "")),
            created_at=from_iso(require_field(data, "created_at", "createdAt")),
        )
