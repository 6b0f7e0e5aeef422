"""Selection widget builder: normalize, resolve trees and render ``<select>`` markup."""

from helpdesk_layout.selection.builder import build_selection
from helpdesk_layout.selection.models import (
    AjaxUpdate,
    CanonicalEntry,
    EntryList,
    FlatList,
    KeyValueMap,
    SelectionConfigError,
    SelectionEntry,
    SelectionFilter,
    SelectionOptions,
    SortMode,
    coerce_input,
)
from helpdesk_layout.selection.normalizer import normalize
from helpdesk_layout.selection.renderer import render
from helpdesk_layout.selection.tree import resolve_tree

__all__ = [
    "AjaxUpdate",
    "CanonicalEntry",
    "EntryList",
    "FlatList",
    "KeyValueMap",
    "SelectionConfigError",
    "SelectionEntry",
    "SelectionFilter",
    "SelectionOptions",
    "SortMode",
    "build_selection",
    "coerce_input",
    "normalize",
    "render",
    "resolve_tree",
]
