"""Nested manifest tree construction and cross-root duplicate detection."""

from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple, Union

from .errors import DuplicateOverlapError, TreeKeyConflictError
from .naming import to_camel

ManifestTree = Dict[str, Union["ManifestTree", str]]

FILE_KEY_FALLBACK = "image"
DIRECTORY_KEY_FALLBACK = "_"


def detect_overlap(primary_keys: Iterable[str], secondary_keys: Iterable[str]) -> Set[str]:
    """Return relative key paths present under both roots."""
    return set(primary_keys) & set(secondary_keys)


def ensure_disjoint(primary_keys: Iterable[str], secondary_keys: Iterable[str]) -> None:
    duplicates = detect_overlap(primary_keys, secondary_keys)
    if duplicates:
        raise DuplicateOverlapError(duplicates)


def tree_keys(key_path: str) -> List[str]:
    """Map a relative key path onto its camelCased manifest keys."""
    segments = key_path.split("/")
    keys = [to_camel(segment) or DIRECTORY_KEY_FALLBACK for segment in segments[:-1]]
    keys.append(to_camel(segments[-1]) or FILE_KEY_FALLBACK)
    return keys


class TreeBuilder:
    """Places manifest leaves into a nested, key-sorted mapping."""

    def build(self, entries: Iterable[Tuple[str, str]]) -> ManifestTree:
        """Build a tree from ``(relative key path, leaf code)`` pairs.

        Raises TreeKeyConflictError when a file and a directory, or two files,
        land on the same key.
        """
        tree: ManifestTree = {}
        # key prefix -> relative key path that created it
        owners: Dict[Tuple[str, ...], str] = {}

        for key_path, leaf in entries:
            keys = tree_keys(key_path)
            node = tree
            for depth, key in enumerate(keys[:-1]):
                prefix = tuple(keys[: depth + 1])
                child = node.get(key)
                if child is None:
                    child = {}
                    node[key] = child
                    owners[prefix] = key_path
                elif not isinstance(child, dict):
                    raise TreeKeyConflictError(prefix, [owners[prefix], key_path])
                node = child

            leaf_key = keys[-1]
            prefix = tuple(keys)
            if leaf_key in node:
                raise TreeKeyConflictError(prefix, [owners[prefix], key_path])
            node[leaf_key] = leaf
            owners[prefix] = key_path

        return sort_tree(tree)


def sort_tree(tree: ManifestTree) -> ManifestTree:
    """Return a copy of ``tree`` with every mapping's keys in lexicographic order."""
    ordered: ManifestTree = {}
    for key in sorted(tree):
        value = tree[key]
        ordered[key] = sort_tree(value) if isinstance(value, dict) else value
    return ordered


__all__ = [
    "ManifestTree",
    "TreeBuilder",
    "detect_overlap",
    "ensure_disjoint",
    "sort_tree",
    "tree_keys",
]
