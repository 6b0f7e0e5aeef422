# -*- coding: utf-8 -*-
"""
Hierarchy resolution for tree-mode selections (e.g. queues or services named
``GrandParent::Parent::Child``).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from helpdesk_layout.selection.models import (
    DEFAULT_SEPARATOR,
    DISABLED_KEY_SUFFIX,
    CanonicalEntry,
)


def split_path(value: str, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    return value.split(separator) if value else [value]


def ancestor_paths(value: str, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    """Return every proper prefix of ``value``, outermost first."""

    segments = split_path(value, separator)
    return [separator.join(segments[:index]) for index in range(1, len(segments))]


def tree_sort_key(value: str, separator: str = DEFAULT_SEPARATOR) -> str:
    # With the trailing separator every descendant sorts right after its parent.
    return (value + separator).lower()


def resolve_tree(
    entries: Iterable[CanonicalEntry], separator: str = DEFAULT_SEPARATOR
) -> List[CanonicalEntry]:
    """
    Add disabled placeholders for missing ancestors, order rows so each parent
    directly precedes its descendants, and set ``display_value``/``depth``
    from the last path segment.

    Existing paths are checked before a placeholder is synthesized, so
    resolving an already resolved list returns the same list.
    """

    rows = list(entries)
    known = {row.value for row in rows}
    synthesized: List[CanonicalEntry] = []

    for row in rows:
        for prefix in ancestor_paths(row.value, separator):
            if prefix in known:
                continue
            known.add(prefix)
            synthesized.append(
                CanonicalEntry(
                    key=prefix + DISABLED_KEY_SUFFIX,
                    value=prefix,
                    display_value=prefix,
                    disabled=True,
                )
            )

    ordered = sorted(rows + synthesized, key=lambda row: tree_sort_key(row.value, separator))

    resolved = []
    for row in ordered:
        segments = split_path(row.value, separator)
        resolved.append(
            replace(row, display_value=segments[-1], depth=len(segments) - 1)
        )
    return resolved
