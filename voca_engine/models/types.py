from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple
from uuid import uuid4

from voca_engine.errors import ValidationError


# ============================================================
# types.py (kernel scalars + taxonomies)
# ============================================================

def now_utc() -> datetime:
    # Millisecond precision so ISO-8601 round trips are exact.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


def to_iso(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds")


def from_iso(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp. Accepts a trailing "Z" and naive values
    (treated as UTC).
    """
    if isinstance(value, datetime):
        ts = value
    else:
        s = str(value).strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        ts = datetime.fromisoformat(s)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def require_field(data: Mapping[str, Any], *keys: str) -> Any:
    """
    First present, non-None value among `keys` (snake_case name first, then
    the camelCase alias). Raises ValidationError when none is set.
    """
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    raise ValidationError(f"Missing required field: {keys[0]}")


class InputKind(str, Enum):
    EXPRESSION = "expression"
    EXPLANATION = "explanation"
    IMAGE = "image"

    @classmethod
    def parse(cls, value: Any) -> Optional["InputKind"]:
        """
        Resolve an InputKind from an enum member, its value, or a short alias.
        Returns None when nothing matches.
        """
        if isinstance(value, InputKind):
            return value
        key = str(value or "").strip().lower()
        return _KIND_ALIASES.get(key)


_KIND_ALIASES = {
    "expression": InputKind.EXPRESSION,
    "expr": InputKind.EXPRESSION,
    "explanation": InputKind.EXPLANATION,
    "explain": InputKind.EXPLANATION,
    "image": InputKind.IMAGE,
    "img": InputKind.IMAGE,
}


def normalize_tags(tags: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    """
    Trim, drop empties, de-duplicate (first occurrence wins).
    Case-sensitive.
    """
    out: list[str] = []
    seen: set[str] = set()
    for t in tags or ():
        if t is None:
            continue
        s = str(t).strip()
        if s and s not in seen:
            out.append(s)
            seen.add(s)
    return tuple(out)
