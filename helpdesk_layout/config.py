import os
from dotenv import load_dotenv
load_dotenv()


def _int_env(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def _bool_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() not in {'0', 'false', 'no', 'off'}


def _list_env(key: str, default: list[str]) -> list[str]:
    raw = os.getenv(key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'changeme')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.getenv('LOG_FILE', os.path.join('logs', 'helpdesk_layout.log')) or None

    LANGUAGES = _list_env('LANGUAGES', ['en', 'el'])
    BABEL_DEFAULT_LOCALE = os.getenv('DEFAULT_LANGUAGE', 'en')
    BABEL_TRANSLATION_DIRECTORIES = os.path.join(
        os.path.dirname(__file__), 'translations')

    SELECTION_MAX_DISPLAY_LENGTH = _int_env('SELECTION_MAX_DISPLAY_LENGTH', 100)
    SELECTION_TREE_SEPARATOR = os.getenv('SELECTION_TREE_SEPARATOR', '::')
    SELECTION_HTML_QUOTE = _bool_env('SELECTION_HTML_QUOTE', True)
    SELECTION_TRANSLATE = _bool_env('SELECTION_TRANSLATE', True)
