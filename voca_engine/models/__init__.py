"""
Core value records.

Input → Suggestion → Entry (inside a Collection)
"""

from .types import (
    InputKind,
    from_iso,
    new_id,
    normalize_tags,
    now_utc,
    to_iso,
)

from .expression_input import ExpressionInput
from .suggestion import Suggestion
from .collection import Collection
from .entry import Entry

__all__ = [
    "InputKind",
    "from_iso",
    "new_id",
    "normalize_tags",
    "now_utc",
    "to_iso",
    "ExpressionInput",
    "Suggestion",
    "Collection",
    "Entry",
]
