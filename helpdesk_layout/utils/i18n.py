# -*- coding: utf-8 -*-
"""
Translation capabilities injected into the selection builder.

The builder never reaches for a global language object; callers hand it a
``Translator``. Inside a Flask request ``BabelTranslator`` resolves strings
through Flask-Babel for the active locale. Every implementation returns the
input unchanged when no translation exists.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

from flask import has_app_context
from flask_babel import gettext


class Translator(Protocol):
    def translate(self, text: str) -> str:
        ...


class NullTranslator:
    """Identity translator, used when translation is switched off."""

    def translate(self, text: str) -> str:
        return text


class CatalogTranslator:
    """Read-only lookup in an in-memory catalogue."""

    def __init__(self, catalog: Optional[Mapping[str, str]] = None):
        self._catalog = dict(catalog or {})

    def translate(self, text: str) -> str:
        return self._catalog.get(text, text)


class BabelTranslator:
    """Translate through Flask-Babel for the locale of the current request."""

    def translate(self, text: str) -> str:
        # gettext("") yields the catalogue header, not an empty label.
        if not text or not has_app_context():
            return text
        return gettext(text)
