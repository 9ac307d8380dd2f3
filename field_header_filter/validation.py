"""Known-field checks for field lists.

The filter itself ignores names that do not occur in a response. These
helpers let a caller report them instead, e.g. to answer with a 400.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set

from .errors import UnknownFieldError
from .field_filter import OMITTED
from .field_tree import collect_known_paths
from .grammar import parse_field_list
from .paths import ends_with_wildcard, join_path, split_dotted_path


def is_field_known(field: str, known_paths: Set[str]) -> bool:
    return field in known_paths


def _unknown_listed(text: Optional[str], known_paths: Set[str]) -> List[str]:
    unknown: List[str] = []
    for path in parse_field_list(text):
        # A wildcard selects children of its prefix, so the prefix has to exist.
        concrete = path[:-1] if ends_with_wildcard(path) else path
        name = join_path(concrete)
        if not is_field_known(name, known_paths) and join_path(path) not in unknown:
            unknown.append(join_path(path))
    return unknown


def find_unknown_fields(
    data: Any,
    include: Optional[str] = None,
    exclude: Optional[str] = None,
    explicit_fields: Optional[Iterable[str]] = None,
) -> Dict[str, List[str]]:
    """Return the listed fields that do not occur in `data`, per input.

    Raises FieldListSyntaxError when `include` or `exclude` is malformed.
    """
    known_paths = collect_known_paths(data)

    unknown_explicit: List[str] = []
    for field in explicit_fields or ():
        name = join_path(split_dotted_path(field))
        if name and not is_field_known(name, known_paths) and name not in unknown_explicit:
            unknown_explicit.append(name)

    return {
        'include': _unknown_listed(include, known_paths),
        'exclude': _unknown_listed(exclude, known_paths),
        'explicit': unknown_explicit,
    }


def ensure_known_fields(
    data: Any,
    include: Optional[str] = None,
    exclude: Optional[str] = None,
    explicit_fields: Optional[Iterable[str]] = None,
) -> None:
    """Raise UnknownFieldError if any listed field is missing from `data`."""
    unknown = find_unknown_fields(data, include, exclude, explicit_fields)
    if any(unknown.values()):
        raise UnknownFieldError(unknown)


def node_exists(filtered: Any, field: str) -> bool:
    """Check whether a dotted field is present in a filtered response."""
    if filtered is OMITTED:
        return False
    name = join_path(split_dotted_path(field))
    if not name:
        return False
    return is_field_known(name, collect_known_paths(filtered))
