from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_LEGAL_SUFFIX = re.compile(
    r"\b(?:ltd|limited|inc|incorporated|pvt|private|llc|corp|corporation|co|company|pte|sdn bhd|tbk|pt)\b\.?",
    re.IGNORECASE,
)
_PUNCTUATION = re.compile(r"[^\w\s]")
_LEADING_PREFIX = re.compile(r"^(?:pt|cv|tbk|ltd|co)\.?\s+", re.IGNORECASE)


def normalize(name: str | None) -> str:
    """Canonical company name used for comparison only, never for display or storage.

    ``"ACME CORP."`` and ``"Acme Corp"`` both become ``"acme"``.
    """

    if not name:
        return ""

    text = _collapse(name.lower())
    text = _LEGAL_SUFFIX.sub("", text)
    text = _PUNCTUATION.sub("", text)
    return _strip_suffixes(text)


def search_key(text: str | None) -> str:
    """Sort/lookup key that ignores leading legal prefixes such as ``PT.`` or ``CV``."""

    if not text:
        return ""

    key = text.strip()
    previous = None
    while key != previous:
        previous = key
        key = _LEADING_PREFIX.sub("", key)
    return key.lower().strip()


def _strip_suffixes(text: str) -> str:
    # Dropping punctuation or a token can expose a new suffix ("c.o", "sdn pt bhd").
    text = _collapse(text)
    while True:
        stripped = _collapse(_LEGAL_SUFFIX.sub("", text))
        if stripped == text:
            return text
        text = stripped


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()
