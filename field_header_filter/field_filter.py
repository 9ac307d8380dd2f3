"""Apply inclusion/exclusion field lists to a JSON response.

Inclusion:
1. A field listed in the inclusion list is returned together with its
   sub-tree, except for EXPLICIT fields (rule 2).
2. EXPLICIT fields are returned only when named concretely in the inclusion
   list. Listing a parent, or a `*` wildcard, never reveals them, and the
   fields below an EXPLICIT field stay hidden until the EXPLICIT field itself
   is listed.

Exclusion:
- A field in the exclusion list is removed with its sub-tree regardless of
  the inclusion list.

A FieldFilter is immutable once built; one instance may be shared between
threads and reused for any number of responses.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .field_tree import EMPTY_TREE, FieldTree, build_field_tree, is_leaf
from .grammar import parse_field_list
from .path_sets import (
    ancestor_listed,
    covered_by_wildcard_or_concrete,
    descendant_or_self_listed,
    exactly_listed,
)
from .paths import WILDCARD, FieldPath, join_path, split_explicit_path

logger = logging.getLogger(__name__)

INCLUDE_HEADER = 'Attributes'
EXCLUDE_HEADER = 'Attributes-Excluded'

FILTER_CACHE_SIZE = 256


class _Omitted:
    """Marker for a value removed entirely by the filter (not JSON null)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'OMITTED'

    def __bool__(self) -> bool:
        return False


OMITTED = _Omitted()


class FieldFilter:
    __slots__ = ('include_paths', 'exclude_paths', 'explicit_paths', 'exclude_tree', '_explicit_set')

    def __init__(
        self,
        include: Optional[str] = None,
        exclude: Optional[str] = None,
        explicit_fields: Optional[Iterable[str]] = None,
    ):
        """Parse the raw header values.

        `include` and `exclude` use the field list grammar and raise
        FieldListSyntaxError when malformed. `explicit_fields` entries are
        plain dotted names (split on '.', no grammar).
        """
        include_paths = tuple(parse_field_list(include))
        exclude_paths = tuple(parse_field_list(exclude))
        explicit_paths = tuple(
            path for path in (split_explicit_path(field) for field in (explicit_fields or ())) if path
        )

        set_ = object.__setattr__
        set_(self, 'include_paths', include_paths)
        set_(self, 'exclude_paths', exclude_paths)
        set_(self, 'explicit_paths', explicit_paths)
        set_(self, 'exclude_tree', build_field_tree(exclude_paths))
        set_(self, '_explicit_set', frozenset(explicit_paths))

        logger.debug(
            "Built field filter: %d include, %d exclude, %d explicit paths",
            len(include_paths),
            len(exclude_paths),
            len(explicit_paths),
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"FieldFilter is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"FieldFilter is immutable; cannot delete {name!r}")

    def __repr__(self) -> str:
        described = self.describe()
        return (
            f"FieldFilter(include={described['include']!r}, "
            f"exclude={described['exclude']!r}, explicit_fields={described['explicit']!r})"
        )

    def describe(self) -> Dict[str, list]:
        return {
            'include': [join_path(p) for p in self.include_paths],
            'exclude': [join_path(p) for p in self.exclude_paths],
            'explicit': [join_path(p) for p in self.explicit_paths],
        }

    def apply(self, value: Any) -> Any:
        """Filter a JSON value (dict, list or scalar).

        Returns a new value, or OMITTED when nothing of the value survives.
        The input is never modified.
        """
        return self._filter_value(value, (), self.exclude_tree)

    def is_explicit(self, path: Iterable[str]) -> bool:
        return tuple(path) in self._explicit_set

    def is_included(self, path: Iterable[str]) -> bool:
        """Decide whether the field at `path` passes the inclusion rules.

        Exclusion is not considered here.
        """
        path = tuple(path)
        if not self.include_paths:
            # No inclusion list: everything that is neither EXPLICIT nor behind
            # an EXPLICIT field.
            return not self.is_explicit(path) and not self._has_unincluded_explicit_ancestor(path)

        if self.is_explicit(path) or self._has_unincluded_explicit_ancestor(path):
            # Gated: the field itself or something below it must be named concretely.
            return descendant_or_self_listed(self.include_paths, path)

        return (
            ancestor_listed(self.include_paths, path)
            or covered_by_wildcard_or_concrete(self.include_paths, path)
        )

    def _has_unincluded_explicit_ancestor(self, path: FieldPath) -> bool:
        """True when an EXPLICIT ancestor of `path` was not itself listed.

        With X EXPLICIT and `A, A.B.X.Q` as inclusion list, A.B.X is never
        named (only Q below it is), so A.B.X.P stays behind the X gate.
        """
        for depth in range(1, len(path)):
            ancestor = path[:depth]
            if self.is_explicit(ancestor) and not exactly_listed(self.include_paths, ancestor):
                return True
        return False

    def _filter_value(self, value: Any, path: FieldPath, exclude_node: FieldTree) -> Any:
        if isinstance(value, dict):
            return self._filter_object(value, path, exclude_node)
        if isinstance(value, list):
            return self._filter_array(value, path, exclude_node)
        return value

    def _filter_array(self, items: list, path: FieldPath, exclude_node: FieldTree) -> list:
        # Indices are not part of field paths; items share the list's path.
        result = []
        for item in items:
            filtered = self._filter_value(item, path, exclude_node)
            if filtered is not OMITTED:
                result.append(filtered)
        return result

    def _filter_object(self, obj: Mapping[str, Any], path: FieldPath, exclude_node: FieldTree) -> Any:
        excluded_level = is_leaf(exclude_node, WILDCARD)
        result: Dict[str, Any] = {}

        for key, child in obj.items():
            if excluded_level or is_leaf(exclude_node, key):
                continue

            child_path = path + (key,)
            if not self.is_included(child_path):
                continue

            child_exclude = exclude_node.get(key)
            if child_exclude is None:
                child_exclude = exclude_node.get(WILDCARD, EMPTY_TREE)

            filtered = self._filter_value(child, child_path, child_exclude)
            if filtered is not OMITTED:
                result[key] = filtered

        return result if result else OMITTED


@lru_cache(maxsize=FILTER_CACHE_SIZE)
def _cached_field_filter(include: str, exclude: str, explicit_fields: Tuple[str, ...]) -> FieldFilter:
    logger.debug("Field filter cache miss for include=%r exclude=%r", include, exclude)
    return FieldFilter(include=include, exclude=exclude, explicit_fields=explicit_fields)


def get_field_filter(
    include: Optional[str] = None,
    exclude: Optional[str] = None,
    explicit_fields: Optional[Iterable[str]] = None,
) -> FieldFilter:
    """Return a shared FieldFilter for this header combination.

    Syntax errors are not cached; they are raised again on every call.
    """
    return _cached_field_filter(
        (include or '').strip(),
        (exclude or '').strip(),
        tuple(explicit_fields or ()),
    )


def clear_field_filter_cache() -> None:
    _cached_field_filter.cache_clear()


def field_filter_from_headers(
    headers: Mapping[str, str],
    explicit_fields: Optional[Iterable[str]] = None,
) -> FieldFilter:
    """Build (or reuse) the filter described by request headers.

    Header names are matched case-insensitively; missing headers mean
    "unspecified".
    """
    lowered = {str(name).lower(): value for name, value in headers.items()}
    return get_field_filter(
        lowered.get(INCLUDE_HEADER.lower()),
        lowered.get(EXCLUDE_HEADER.lower()),
        explicit_fields,
    )


def filter_response(
    value: Any,
    include: Optional[str] = None,
    exclude: Optional[str] = None,
    explicit_fields: Optional[Iterable[str]] = None,
) -> Any:
    """One-shot helper: filter `value` and return the result or OMITTED."""
    return get_field_filter(include, exclude, explicit_fields).apply(value)
