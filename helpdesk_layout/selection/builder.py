# -*- coding: utf-8 -*-
"""
Public entry point of the selection widget builder.

    html = build_selection(
        {"1": "Low", "2": "Medium", "3": "High"},
        name="PriorityID",
        sort_mode="NumericKey",
        selected_keys=2,
        include_empty=True,
        translator=BabelTranslator(),
    )

``data`` may be a list of strings, a ``{key: value}`` dict or a list of
``{"key", "value", "selected", "disabled"}`` dicts. Configuration mistakes
(e.g. ``ajax`` together with ``on_change``) raise ``SelectionConfigError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from markupsafe import Markup

from helpdesk_layout.selection.models import (
    DEFAULT_MAX_DISPLAY_LENGTH,
    AjaxUpdate,
    RenderedFilter,
    RenderExtras,
    SelectionConfigError,
    SelectionFilter,
    SelectionOptions,
    as_text_list,
)
from helpdesk_layout.selection.normalizer import normalize
from helpdesk_layout.selection.renderer import render
from helpdesk_layout.utils.i18n import NullTranslator, Translator

logger = logging.getLogger(__name__)


def _reject(message: str) -> SelectionConfigError:
    logger.error(message)
    return SelectionConfigError(message)


def _coerce_ajax(ajax: Union[AjaxUpdate, Mapping[str, Any], None]) -> Optional[AjaxUpdate]:
    if ajax is None or isinstance(ajax, AjaxUpdate):
        return ajax
    return AjaxUpdate(
        subaction=str(ajax.get("subaction") or ""),
        depend=tuple(as_text_list(ajax.get("depend"))),
        update=tuple(as_text_list(ajax.get("update"))),
    )


def ajax_change_handler(ajax: AjaxUpdate, selector: str, name: str) -> str:
    """Script for ``onchange`` that posts the form and refreshes dependent fields."""

    if not ajax.depend:
        raise _reject("Need Depend Param Ajax option!")
    if not ajax.update:
        raise _reject("Need Update Param Ajax option!")
    targets = "', '".join(ajax.update)
    return (
        f"Core.AJAX.FormUpdate($('#{selector}'), '{ajax.subaction}', "
        f"'{name}', ['{targets}']);"
    )


def build_attributes(
    *,
    name: str,
    id: Optional[str] = None,
    size: Optional[int] = None,
    css_class: Optional[str] = None,
    on_change: Optional[str] = None,
    on_click: Optional[str] = None,
    auto_complete: Optional[str] = None,
    title: Optional[str] = None,
    multiple: bool = False,
    disabled: bool = False,
) -> Dict[str, Optional[str]]:
    """Collect the ``<select>`` attributes; ``id`` falls back to ``name``."""

    attributes: Dict[str, Optional[str]] = {"name": name, "id": id or name}
    for key, value in (
        ("size", size),
        ("class", css_class),
        ("onchange", on_change),
        ("onclick", on_click),
        ("autocomplete", auto_complete),
        ("title", title),
    ):
        if value:
            attributes[key] = str(value)
    if multiple:
        attributes["multiple"] = "multiple"
    if disabled:
        attributes["disabled"] = "disabled"
    return attributes


def _coerce_filters(filters) -> List[SelectionFilter]:
    if not filters:
        return []
    if isinstance(filters, Mapping):
        # {filter_id: {"name", "values", "active"}}, walked in id order
        items = [filters[filter_id] for filter_id in sorted(filters)]
    else:
        items = list(filters)

    result = []
    for item in items:
        if isinstance(item, SelectionFilter):
            flt = item
        else:
            flt = SelectionFilter(
                name=item.get("name") or "",
                values=item.get("values"),
                active=bool(item.get("active")),
            )
        if not flt.name or not flt.values:
            raise _reject("Each Filter must provide Name and Values!")
        result.append(flt)
    return result


def build_filters(
    filters, options: SelectionOptions, translator: Translator
) -> Tuple[Tuple[RenderedFilter, ...], Optional[int]]:
    """
    Normalize every filter's values with the selection's own options.
    Returns the filters sorted by name and the 1-based index of the active one.
    """

    ordered = sorted(_coerce_filters(filters), key=lambda flt: flt.name)
    rendered = []
    active: Optional[int] = None
    for index, flt in enumerate(ordered, start=1):
        rendered.append(
            RenderedFilter(
                name=flt.name,
                entries=tuple(normalize(flt.values, options, translator)),
            )
        )
        if flt.active:
            active = index
    return tuple(rendered), active


def build_selection(
    data: Any,
    *,
    name: str,
    translator: Optional[Translator] = None,
    id: Optional[str] = None,
    multiple: bool = False,
    size: Optional[int] = None,
    css_class: Optional[str] = None,
    disabled: bool = False,
    auto_complete: Optional[str] = None,
    on_change: Optional[str] = None,
    on_click: Optional[str] = None,
    title: Optional[str] = None,
    ajax: Union[AjaxUpdate, Mapping[str, Any], None] = None,
    filters: Union[Mapping[str, Any], Sequence[Any], None] = None,
    expand_filters: bool = False,
    option_title: bool = False,
    validate_date_after: Optional[str] = None,
    validate_date_before: Optional[str] = None,
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
) -> Markup:
    """Build the complete ``<select>`` markup for ``data``."""

    if not name:
        raise _reject("Need Name!")

    ajax = _coerce_ajax(ajax)
    if ajax and on_change:
        raise _reject("The parameters 'on_change' and 'ajax' exclude each other!")
    if ajax:
        on_change = ajax_change_handler(ajax, id or name, name)

    translator = translator or NullTranslator()
    options = SelectionOptions.build(
        sort_mode=sort_mode,
        sort_individual=sort_individual,
        reverse=reverse,
        translate=translate,
        include_empty=include_empty,
        tree_view=tree_view,
        separator=separator,
        disabled_branches=disabled_branches,
        selected_keys=selected_keys,
        selected_values=selected_values,
        max_display_length=max_display_length,
        html_escape=html_escape,
    )
    attributes = build_attributes(
        name=name,
        id=id,
        size=size,
        css_class=css_class,
        on_change=on_change,
        on_click=on_click,
        auto_complete=auto_complete,
        title=title,
        multiple=multiple,
        disabled=disabled,
    )

    entries = normalize(data, options, translator)
    rendered_filters, filter_active = build_filters(filters, options, translator)

    extras = RenderExtras(
        tree_view=options.tree_view,
        filters=rendered_filters,
        filter_active=filter_active,
        expand_filters=expand_filters,
        option_title=option_title,
        validate_date_after=validate_date_after,
        validate_date_before=validate_date_before,
    )
    return render(entries, attributes, extras, translator)
