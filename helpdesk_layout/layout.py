# -*- coding: utf-8 -*-
"""
Request-bound view helpers exposed to templates.

Templates call ``build_selection(...)`` directly; this module binds the call
to the active locale and fills option defaults from the application config.
"""

from typing import Any

from flask import current_app
from markupsafe import Markup

from helpdesk_layout.selection import build_selection
from helpdesk_layout.utils.i18n import BabelTranslator


def config_defaults() -> dict:
    """Selection defaults taken from ``SELECTION_*`` config keys."""

    config = current_app.config
    return {
        "max_display_length": config.get("SELECTION_MAX_DISPLAY_LENGTH", 100),
        "separator": config.get("SELECTION_TREE_SEPARATOR", "::"),
        "html_escape": config.get("SELECTION_HTML_QUOTE", True),
        "translate": config.get("SELECTION_TRANSLATE", True),
    }


def render_selection(data: Any, **params) -> Markup:
    params = {**config_defaults(), **params}
    params.setdefault("translator", BabelTranslator())
    return build_selection(data, **params)


def register_template_helpers(app) -> None:
    app.jinja_env.globals["build_selection"] = render_selection
