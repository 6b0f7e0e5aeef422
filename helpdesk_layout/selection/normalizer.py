# -*- coding: utf-8 -*-
"""
Selection normalizer: turns caller option data into ordered ``CanonicalEntry``
rows ready for rendering.

Processing order matters and is kept fixed:

1. convert the input shape into rows
2. tree mode: synthesize missing parents and order by path
   otherwise: translate display values, then sort
3. disable branches, then mark selections (disabled rows are never selected)
4. reverse, prepend the empty option
5. truncate the raw label, then escape it
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, List, Optional

from markupsafe import Markup, escape

from helpdesk_layout.selection.models import (
    CanonicalEntry,
    KeyValueMap,
    SelectionOptions,
    SortMode,
    coerce_input,
    iter_rows,
)
from helpdesk_layout.selection.tree import resolve_tree
from helpdesk_layout.utils.html import truncate
from helpdesk_layout.utils.i18n import NullTranslator, Translator

logger = logging.getLogger(__name__)

EMPTY_OPTION = CanonicalEntry(key="", value="", display_value="-")


def _alpha(text: Optional[str]) -> str:
    return (text or "").lower()


def _sort_numeric(rows: List[CanonicalEntry], attribute: str) -> List[CanonicalEntry]:
    unparsable = set()

    def number(row: CanonicalEntry) -> float:
        raw = getattr(row, attribute)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            unparsable.add(raw)
            return -math.inf
        return -math.inf if math.isnan(value) else value

    ordered = sorted(rows, key=number)
    if unparsable:
        logger.warning(
            "Numeric sort on non-numeric %s values %s; treating them as lowest.",
            attribute,
            sorted(unparsable),
        )
    return ordered


def _sort_individual(
    rows: List[CanonicalEntry], order, attribute: str
) -> List[CanonicalEntry]:
    remainder = list(rows)
    pinned: List[CanonicalEntry] = []
    for wanted in order:
        matches = [row for row in remainder if getattr(row, attribute) == wanted]
        pinned.extend(matches)
        remainder = [row for row in remainder if getattr(row, attribute) != wanted]
    return pinned + sorted(remainder, key=lambda row: _alpha(row.display_value))


def sort_entries(
    rows: List[CanonicalEntry], mode: SortMode, options: SelectionOptions
) -> List[CanonicalEntry]:
    if mode is SortMode.NONE:
        return list(rows)
    if mode is SortMode.ALPHANUMERIC_KEY:
        return sorted(rows, key=lambda row: _alpha(row.key))
    if mode is SortMode.NUMERIC_KEY:
        return _sort_numeric(rows, "key")
    if mode is SortMode.NUMERIC_VALUE:
        return _sort_numeric(rows, "display_value")
    if mode is SortMode.INDIVIDUAL_KEY and options.sort_individual:
        return _sort_individual(rows, options.sort_individual, "key")
    if mode is SortMode.INDIVIDUAL_VALUE and options.sort_individual:
        return _sort_individual(rows, options.sort_individual, "value")
    return sorted(rows, key=lambda row: _alpha(row.display_value))


def _in_branch(value: str, branches, separator: str) -> bool:
    for branch in branches:
        if value == branch or value.startswith(branch + separator):
            return True
    return False


def _finish_label(row: CanonicalEntry, options: SelectionOptions) -> CanonicalEntry:
    label = truncate(row.display_value, options.max_display_length)
    if options.html_escape:
        return replace(row, key=escape(row.key), display_value=escape(label))
    return replace(row, key=Markup(row.key), display_value=Markup(label))


def normalize(
    data: Any,
    options: Optional[SelectionOptions] = None,
    translator: Optional[Translator] = None,
) -> List[CanonicalEntry]:
    """
    Normalize selection data into canonical rows.

    ``data`` may be a list of strings, a dict, a list of dicts (``key``,
    ``value``, optional ``selected``/``disabled``) or an already coerced
    ``SelectionInput``. Nothing passed in is modified. Display values of the
    returned rows are ``Markup``: escaped when ``html_escape`` is on, trusted
    as given otherwise.
    """

    options = options or SelectionOptions()
    source = coerce_input(data)
    if translator is None or not options.translate:
        translator = NullTranslator()

    rows = [
        CanonicalEntry(
            key=entry.key,
            value=entry.value,
            display_value=entry.value,
            selected=entry.selected,
            disabled=entry.disabled,
        )
        for entry in iter_rows(source)
    ]
    if not rows:
        return [_finish_label(EMPTY_OPTION, options)] if options.include_empty else []

    mode = options.effective_sort
    if mode is SortMode.TREE_VIEW:
        rows = resolve_tree(rows, options.separator)
        rows = [
            replace(row, display_value=translator.translate(row.display_value))
            for row in rows
        ]
    else:
        if mode is SortMode.NONE and isinstance(source, KeyValueMap):
            mode = SortMode.ALPHANUMERIC_VALUE
        rows = [
            replace(row, display_value=translator.translate(row.display_value))
            for row in rows
        ]
        rows = sort_entries(rows, mode, options)

    if options.disabled_branches:
        rows = [
            replace(row, disabled=True)
            if _in_branch(row.value, options.disabled_branches, options.separator)
            else row
            for row in rows
        ]

    rows = [
        replace(
            row,
            selected=not row.disabled
            and (
                row.selected
                or row.key in options.selected_keys
                or row.value in options.selected_values
            ),
        )
        for row in rows
    ]

    if options.reverse:
        rows.reverse()
    if options.include_empty:
        rows.insert(0, EMPTY_OPTION)

    return [_finish_label(row, options) for row in rows]
