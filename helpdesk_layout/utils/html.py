"""Text helpers used when turning option labels into HTML."""

from typing import Optional

ELLIPSIS_MARKER = "[...]"


def truncate(text: str, max_length: Optional[int]) -> str:
    """
    Shorten ``text`` to ``max_length`` visible characters, the last five of
    which are the ``[...]`` marker. Works on raw text; escape afterwards so
    entities are never cut in half.
    """

    if not max_length or len(text) <= max_length:
        return text
    keep = max(max_length - len(ELLIPSIS_MARKER), 0)
    return text[:keep] + ELLIPSIS_MARKER
