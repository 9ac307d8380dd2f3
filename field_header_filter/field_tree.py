from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Sequence, Set

from .paths import FieldPath, join_path

# segment -> subtree; an empty subtree marks a leaf (the whole branch is selected)
FieldTree = Mapping[str, 'FieldTree']

EMPTY_TREE: FieldTree = MappingProxyType({})


def build_field_tree(paths: Iterable[Sequence[str]]) -> FieldTree:
    """Convert field paths into a read-only prefix tree.

    Paths sharing a prefix share nodes, so ['a', 'b'] and ['a', 'c'] become
    {'a': {'b': {}, 'c': {}}}. If both 'a' and 'a.b' are listed, 'a' keeps
    its child 'b'; leaf-ness is decided only by the absence of children.
    """
    tree: Dict[str, Any] = {}
    for path in paths:
        current = tree
        for segment in path:
            current = current.setdefault(segment, {})
    return _freeze(tree)


def _freeze(node: Dict[str, Any]) -> FieldTree:
    if not node:
        return EMPTY_TREE
    return MappingProxyType({key: _freeze(child) for key, child in node.items()})


def is_leaf(tree: FieldTree, segment: str) -> bool:
    return segment in tree and len(tree[segment]) == 0


def collect_known_paths(data: Any, prefix: FieldPath = ()) -> Set[str]:
    """Recursively collect every dotted field path present in a JSON value.

    Lists are transparent: their items are walked under the list's own path.
    Both branch and leaf paths are returned ('a' and 'a.b' for {'a': {'b': 1}}).
    """
    paths: Set[str] = set()

    if isinstance(data, dict):
        for key, value in data.items():
            child = prefix + (str(key),)
            paths.add(join_path(child))
            paths.update(collect_known_paths(value, child))
    elif isinstance(data, list):
        for item in data:
            paths.update(collect_known_paths(item, prefix))

    return paths
