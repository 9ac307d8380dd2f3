"""Exceptions raised by the field header filter."""

from __future__ import annotations

from typing import Dict, List, Optional


class FieldFilterError(ValueError):
    """Base class for field filter errors."""


class FieldListSyntaxError(FieldFilterError):
    """Raised when an inclusion/exclusion field list does not match the grammar.

    `position` is a 0-based UTF-8 byte offset into the trimmed input and `character` is
    the offending character, or None when the input ended early.
    """

    def __init__(self, message: str, position: int, character: Optional[str] = None, text: str = ''):
        super().__init__(message)
        self.message = message
        self.position = position
        self.character = character
        self.text = text


class UnknownFieldError(FieldFilterError):
    """Raised by the validation helpers when listed fields are absent from a response."""

    def __init__(self, unknown: Dict[str, List[str]]):
        self.unknown = unknown
        details = '; '.join(f"{kind}: {', '.join(fields)}" for kind, fields in unknown.items() if fields)
        super().__init__(f"Unknown fields (not found in response): {details}")
