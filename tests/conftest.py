import pytest

from helpdesk_layout import create_app
from helpdesk_layout.config import Config
from helpdesk_layout.utils.i18n import CatalogTranslator


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test"
    LOG_FILE = None
    LOG_LEVEL = "WARNING"
    SELECTION_MAX_DISPLAY_LENGTH = 100
    SELECTION_TREE_SEPARATOR = "::"
    SELECTION_HTML_QUOTE = True
    SELECTION_TRANSLATE = True


@pytest.fixture
def make_app():
    def factory(**overrides):
        config_class = type("OverriddenConfig", (TestConfig,), overrides)
        return create_app(config_class)

    return factory


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def greek():
    return CatalogTranslator(
        {
            "Open": "Ανοιχτό",
            "Closed": "Κλειστό",
            "Hardware": "Υλικό",
            "Printer": "Εκτυπωτής",
            "Show Tree Selection": "Εμφάνιση δέντρου",
        }
    )
