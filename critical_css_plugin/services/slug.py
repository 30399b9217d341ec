"""Filename-safe slugs for logical page names."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def webalize(value: str) -> str:
    """Lowercase ASCII token with runs of other characters collapsed to ``-``.

    >>> webalize("Úvodní stránka / Home")
    'uvodni-stranka-home'
    """
    ascii_value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_value.lower()).strip("-")
