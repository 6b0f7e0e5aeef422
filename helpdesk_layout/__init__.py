# -*- coding: utf-8 -*-
"""
Helpdesk Layout: Flask application factory
Selection widgets for helpdesk screens, multilingual via Flask-Babel.
"""

import os
import logging
from flask import Flask, request, session, g
from flask_babel import Babel
from logging.handlers import RotatingFileHandler

from helpdesk_layout.config import Config

# ───────── Extensions ───────── #
babel = Babel()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    formatter = logging.Formatter(LOG_FORMAT)

    log_file = app.config.get("LOG_FILE")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=10240, backupCount=10)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)

    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in app.logger.handlers
    ):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        app.logger.addHandler(console_handler)

    # app.logger is the "helpdesk_layout" logger, so the selection modules
    # (helpdesk_layout.selection.*) write through the same handlers.
    app.logger.setLevel(level)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.setdefault("SECRET_KEY", os.urandom(24))
    app.config.setdefault("LANGUAGES", ["en", "el"])
    app.config.setdefault("BABEL_DEFAULT_LOCALE", "en")

    # ───────── Babel (immediate URL/session switch) ───────── #
    def get_locale():
        lang = request.args.get("lang")
        if lang in app.config["LANGUAGES"]:
            session["lang"] = lang
            g.locale = lang
            return lang
        stored = session.get("lang")
        if stored in app.config["LANGUAGES"]:
            g.locale = stored
            return stored
        best = request.accept_languages.best_match(app.config["LANGUAGES"])
        g.locale = best or app.config["BABEL_DEFAULT_LOCALE"]
        return g.locale

    babel.init_app(app, locale_selector=get_locale)

    @app.context_processor
    def inject_globals():
        return {
            "current_lang": g.get("locale", app.config["BABEL_DEFAULT_LOCALE"]),
        }

    # ───────── Template helpers ───────── #
    from helpdesk_layout.layout import register_template_helpers
    register_template_helpers(app)

    # ───────── Blueprints ───────── #
    from helpdesk_layout.widgets.routes import widgets_bp
    app.register_blueprint(widgets_bp)

    # ───────── Logging ───────── #
    _configure_logging(app)
    app.logger.info("Helpdesk Layout started")

    return app
