# -*- coding: utf-8 -*-
"""
Serialize canonical selection rows into ``<select>`` markup.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Mapping, Optional

from markupsafe import Markup, escape

from helpdesk_layout.selection.models import CanonicalEntry, RenderExtras, RenderedFilter
from helpdesk_layout.utils.i18n import NullTranslator, Translator

# NO-BREAK SPACE needs no escaping, unlike "&nbsp;", when options are sent over AJAX.
INDENT = "\xa0\xa0"
TREE_TOGGLE_LABEL = "Show Tree Selection"


def _entry_payload(row: CanonicalEntry) -> dict:
    payload = {"Key": str(row.key), "Value": str(INDENT * row.depth + row.display_value)}
    if row.selected:
        payload["Selected"] = 1
    elif row.disabled:
        payload["Disabled"] = 1
    return payload


def filters_json(filters: Iterable[RenderedFilter]) -> str:
    """Machine-readable filter definitions consumed by the client-side input fields."""

    data = {
        "Filters": [
            {"Name": flt.name, "Data": [_entry_payload(row) for row in flt.entries]}
            for flt in filters
        ]
    }
    return json.dumps(data, ensure_ascii=False)


def _attribute(name: str, value) -> str:
    if value is None:
        return f" {name}"
    return f' {name}="{escape(value)}"'


def _option(row: CanonicalEntry, tree_view: bool, option_title: bool) -> str:
    label = escape(row.display_value)
    if tree_view and row.depth:
        label = Markup(INDENT * row.depth) + label
    state = ""
    if row.selected:
        state = ' selected="selected"'
    elif row.disabled:
        state = ' disabled="disabled"'
    title = f' title="{label}"' if option_title else ""
    return f'  <option value="{escape(row.key)}"{state}{title}>{label}</option>\n'


def render(
    entries: Iterable[CanonicalEntry],
    attributes: Optional[Mapping[str, Optional[str]]] = None,
    extras: Optional[RenderExtras] = None,
    translator: Optional[Translator] = None,
) -> Markup:
    """
    Build the ``<select>`` element. Attributes are emitted sorted by name; a
    ``None`` value renders as a bare boolean attribute. Empty ``entries``
    yield an element without options.
    """

    extras = extras or RenderExtras()
    translator = translator or NullTranslator()

    parts: List[str] = ["<select"]
    for name in sorted((attributes or {}).keys()):
        if name:
            parts.append(_attribute(name, attributes[name]))

    if extras.filters:
        parts.append(_attribute("data-filters", filters_json(extras.filters)))
        if extras.filter_active:
            parts.append(_attribute("data-filtered", str(int(extras.filter_active))))
        if extras.expand_filters:
            parts.append(_attribute("data-expand-filters", "1"))

    if extras.tree_view:
        parts.append(_attribute("data-tree", "true"))
    if extras.validate_date_after:
        parts.append(_attribute("data-validate-date-after", extras.validate_date_after))
    if extras.validate_date_before:
        parts.append(_attribute("data-validate-date-before", extras.validate_date_before))
    parts.append(">\n")

    for row in entries:
        parts.append(_option(row, extras.tree_view, extras.option_title))
    parts.append("</select>")

    if extras.tree_view:
        message = escape(translator.translate(TREE_TOGGLE_LABEL))
        parts.append(
            f' <a href="#" title="{message}" class="ShowTreeSelection">'
            f'<span>{message}</span><i class="fa fa-sitemap"></i></a>'
        )

    return Markup("".join(parts))
