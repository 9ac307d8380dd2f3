"""Queries over lists of parsed field paths.

A listed path ending in `*` is a wildcard path; every other path is a concrete
listing. Only concrete listings can open an EXPLICIT gate.
"""
from __future__ import annotations

from typing import Sequence

from .paths import FieldPath, ends_with_wildcard, is_concrete, is_prefix, is_strict_prefix


def exactly_listed(paths: Sequence[FieldPath], target: FieldPath) -> bool:
    """True when `target` itself appears in `paths` (wildcard paths ignored)."""
    return any(
        not ends_with_wildcard(p) and tuple(p) == tuple(target)
        for p in paths
    )


def descendant_or_self_listed(paths: Sequence[FieldPath], target: FieldPath) -> bool:
    """True when a concrete path at or below `target` is listed."""
    return any(is_concrete(p) and is_prefix(target, p) for p in paths)


def covered_by_wildcard_or_concrete(paths: Sequence[FieldPath], target: FieldPath) -> bool:
    """Like `descendant_or_self_listed`, but wildcard paths count too.

    A wildcard path `p.*` covers `target` when `p` is at or above `target`
    (the wildcard selects it), and also when `p` lies below `target`, so the
    ancestors leading down to the wildcard are returned as well.
    """
    for p in paths:
        if ends_with_wildcard(p):
            prefix = p[:-1]
            if is_prefix(prefix, target) or is_prefix(target, prefix):
                return True
        elif is_concrete(p) and is_prefix(target, p):
            return True
    return False


def ancestor_listed(paths: Sequence[FieldPath], target: FieldPath) -> bool:
    """True when a concrete path strictly above `target` is listed."""
    return any(not ends_with_wildcard(p) and is_strict_prefix(p, target) for p in paths)
