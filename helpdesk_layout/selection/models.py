# -*- coding: utf-8 -*-
"""
Value types shared by the selection widget builder.

Caller data arrives in one of three shapes (flat list, key/value map, list of
explicit entries). ``coerce_input`` resolves raw Python data into one of the
tagged variants once, at the API boundary; everything downstream works on
``CanonicalEntry`` rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "::"
DEFAULT_MAX_DISPLAY_LENGTH = 100
DISABLED_KEY_SUFFIX = "_Disabled"


class SelectionConfigError(ValueError):
    """Raised when a caller passes a contradictory or incomplete configuration."""


class SortMode(str, Enum):
    NONE = "None"
    ALPHANUMERIC_KEY = "AlphanumericKey"
    ALPHANUMERIC_VALUE = "AlphanumericValue"
    NUMERIC_KEY = "NumericKey"
    NUMERIC_VALUE = "NumericValue"
    TREE_VIEW = "TreeView"
    INDIVIDUAL_KEY = "IndividualKey"
    INDIVIDUAL_VALUE = "IndividualValue"

    @classmethod
    def parse(cls, value: Union["SortMode", str, None]) -> "SortMode":
        """
        Resolve a sort mode name. Empty values mean no sorting; unknown names
        fall back to ``AlphanumericValue`` so no entries are ever dropped.
        """

        if isinstance(value, cls):
            return value
        if value is None or value == "" or value is False:
            return cls.NONE
        for mode in cls:
            if mode.value.lower() == str(value).lower():
                return mode
        logger.warning("Unknown selection sort mode %r; using AlphanumericValue.", value)
        return cls.ALPHANUMERIC_VALUE


@dataclass(frozen=True)
class SelectionEntry:
    """One explicit row supplied by the caller."""

    key: str
    value: str
    selected: bool = False
    disabled: bool = False


@dataclass(frozen=True)
class FlatList:
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class KeyValueMap:
    items: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "KeyValueMap":
        # Maps carry no meaningful order; traverse sorted by key for stable output.
        pairs = [
            (_text(key), _text(value))
            for key, value in mapping.items()
            if key is not None
        ]
        return cls(items=tuple(sorted(pairs, key=lambda pair: pair[0])))


@dataclass(frozen=True)
class EntryList:
    entries: Tuple[SelectionEntry, ...] = ()


SelectionInput = Union[FlatList, KeyValueMap, EntryList]


@dataclass(frozen=True)
class CanonicalEntry:
    key: str
    value: str
    display_value: str
    selected: bool = False
    disabled: bool = False
    depth: int = 0


@dataclass(frozen=True)
class SelectionOptions:
    sort_mode: SortMode = SortMode.NONE
    sort_individual: Tuple[str, ...] = ()
    reverse: bool = False
    translate: bool = True
    include_empty: bool = False
    tree_view: bool = False
    separator: str = DEFAULT_SEPARATOR
    disabled_branches: frozenset = field(default_factory=frozenset)
    selected_keys: frozenset = field(default_factory=frozenset)
    selected_values: frozenset = field(default_factory=frozenset)
    max_display_length: Optional[int] = DEFAULT_MAX_DISPLAY_LENGTH
    html_escape: bool = True

    @property
    def effective_sort(self) -> SortMode:
        if self.tree_view:
            return SortMode.TREE_VIEW
        return self.sort_mode

    @classmethod
    def build(
        cls,
        *,
        sort_mode=None,
        sort_individual=None,
        reverse: bool = False,
        translate: bool = True,
        include_empty: bool = False,
        tree_view: bool = False,
        separator: Optional[str] = None,
        disabled_branches=None,
        selected_keys=None,
        selected_values=None,
        max_display_length: Optional[int] = DEFAULT_MAX_DISPLAY_LENGTH,
        html_escape: bool = True,
    ) -> "SelectionOptions":
        """Create options from loosely typed caller arguments (scalars or sequences)."""

        return cls(
            sort_mode=SortMode.parse(sort_mode),
            sort_individual=tuple(as_text_list(sort_individual)),
            reverse=bool(reverse),
            translate=bool(translate),
            include_empty=bool(include_empty),
            tree_view=bool(tree_view),
            separator=separator or DEFAULT_SEPARATOR,
            disabled_branches=frozenset(as_text_list(disabled_branches)),
            selected_keys=frozenset(as_text_list(selected_keys)),
            selected_values=frozenset(as_text_list(selected_values)),
            max_display_length=max_display_length,
            html_escape=bool(html_escape),
        )


@dataclass(frozen=True)
class AjaxUpdate:
    """Fields that trigger and receive an AJAX form update on change."""

    subaction: str = ""
    depend: Tuple[str, ...] = ()
    update: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectionFilter:
    name: str
    values: Any
    active: bool = False


@dataclass(frozen=True)
class RenderedFilter:
    name: str
    entries: Tuple[CanonicalEntry, ...]


@dataclass(frozen=True)
class RenderExtras:
    tree_view: bool = False
    filters: Tuple[RenderedFilter, ...] = ()
    filter_active: Optional[int] = None
    expand_filters: bool = False
    option_title: bool = False
    validate_date_after: Optional[str] = None
    validate_date_before: Optional[str] = None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def as_text_list(value: Any) -> list[str]:
    """Accept ``None``, a scalar or an iterable and return a list of strings."""

    if value is None:
        return []
    if isinstance(value, (str, bytes, int, float)):
        return [_text(value)]
    return [_text(item) for item in value if item is not None]


def _entry_from_mapping(row: Mapping[str, Any]) -> Optional[SelectionEntry]:
    key = row.get("key", row.get("Key"))
    if key is None:
        return None
    return SelectionEntry(
        key=_text(key),
        value=_text(row.get("value", row.get("Value"))),
        selected=bool(row.get("selected", row.get("Selected", False))),
        disabled=bool(row.get("disabled", row.get("Disabled", False))),
    )


def coerce_input(data: Any) -> SelectionInput:
    """
    Resolve raw caller data into a ``SelectionInput`` variant.

    - ``dict``                -> ``KeyValueMap``
    - list of dicts/entries   -> ``EntryList`` (rows without a key are skipped)
    - any other iterable      -> ``FlatList``
    - ``None`` / empty        -> empty ``FlatList``
    """

    if isinstance(data, (FlatList, KeyValueMap, EntryList)):
        return data
    if not data:
        return FlatList()
    if isinstance(data, Mapping):
        return KeyValueMap.from_mapping(data)
    if isinstance(data, str):
        return FlatList(values=(data,))

    rows = list(data)
    if rows and isinstance(rows[0], (Mapping, SelectionEntry)):
        entries = []
        for row in rows:
            if isinstance(row, SelectionEntry):
                entries.append(row)
            elif isinstance(row, Mapping):
                entry = _entry_from_mapping(row)
                if entry is not None:
                    entries.append(entry)
        return EntryList(entries=tuple(entries))
    return FlatList(values=tuple(_text(row) for row in rows))


def iter_rows(data: SelectionInput) -> Iterable[SelectionEntry]:
    """Yield the variant's rows in traversal order as ``SelectionEntry`` objects."""

    if isinstance(data, FlatList):
        for value in data.values:
            yield SelectionEntry(key=value, value=value)
    elif isinstance(data, KeyValueMap):
        for key, value in data.items:
            yield SelectionEntry(key=key, value=value)
    else:
        yield from data.entries
