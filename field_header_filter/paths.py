from __future__ import annotations

from typing import List, Sequence, Tuple

FieldPath = Tuple[str, ...]

WILDCARD = '*'
SEPARATOR = '.'


def split_dotted_path(path: str) -> FieldPath:
    """Split a dotted field name into a flat path.

    This is a plain split on '.', each segment trimmed. No grammar is applied,
    so '*' stays a literal segment here. Empty segments are dropped.
    """
    if path is None:
        return ()
    if not isinstance(path, str):
        path = str(path)

    parts: List[str] = [part.strip() for part in path.strip().split(SEPARATOR)]
    return tuple(part for part in parts if part != '')


def split_explicit_path(field: str) -> FieldPath:
    """Split an EXPLICIT field name on '.', trimming each segment.

    Unlike `split_dotted_path`, empty segments are kept, so 'A..B' names
    ('A', '', 'B') and never 'A.B'. A blank entry yields ().
    """
    if field is None or not str(field).strip():
        return ()
    return tuple(part.strip() for part in str(field).strip().split(SEPARATOR))


def join_path(path: Sequence[str]) -> str:
    return SEPARATOR.join(path)


def ends_with_wildcard(path: Sequence[str]) -> bool:
    return len(path) > 0 and path[-1] == WILDCARD


def is_concrete(path: Sequence[str]) -> bool:
    """True when no segment of the path is the wildcard marker."""
    return WILDCARD not in path


def is_prefix(prefix: Sequence[str], path: Sequence[str]) -> bool:
    """True when `prefix` is a (not necessarily strict) prefix of `path`."""
    if len(prefix) > len(path):
        return False
    return all(a == b for a, b in zip(prefix, path))


def is_strict_prefix(prefix: Sequence[str], path: Sequence[str]) -> bool:
    return len(prefix) < len(path) and is_prefix(prefix, path)
