# voca_engine/errors.py
from __future__ import annotations

from typing import Optional


class VocaEngineError(Exception):
    """Base class for every failure the engine surfaces to callers."""


class ValidationError(VocaEngineError, ValueError):
    """
    Malformed or empty caller-supplied data (content, names, tag lists,
    pagination bounds).
    """


class ReferentialIntegrityError(ValidationError):
    """
    A combination of referenced records is internally inconsistent,
    e.g. a suggestion that was generated for a different input.
    """


class NotFoundError(VocaEngineError, LookupError):
    """A referenced identifier does not resolve in the store."""

    def __init__(self, entity: str, entity_id: str, message: Optional[str] = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with id {entity_id} not found")


class ProviderError(VocaEngineError, RuntimeError):
    """The suggestion provider failed or returned no usable candidates."""


__all__ = [
    "VocaEngineError",
    "ValidationError",
    "ReferentialIntegrityError",
    "NotFoundError",
    "ProviderError",
]
