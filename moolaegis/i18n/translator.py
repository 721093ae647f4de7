"""
Translation dictionaries and key lookup.

Dictionaries are JSON files shipped in ``locales/`` with one nested object per
language. Keys are dotted paths such as ``state.labels.netProfit``.
"""

from __future__ import annotations

import json
import pathlib
import re
from functools import lru_cache
from typing import Any, Dict, Final, Optional

from moolaegis.core.logging_config import get_logger

logger = get_logger(__name__)

LOCALES_DIR: Final[pathlib.Path] = pathlib.Path(__file__).parent / "locales"
DEFAULT_LANGUAGE: Final[str] = "en"
SUPPORTED_LANGUAGES: Final[tuple[str, ...]] = ("en", "zh")

_ALIASES: Final[Dict[str, str]] = {
    "繁體中文": "zh",
    "中文": "zh",
    "zh-tw": "zh",
    "zh_hant": "zh",
    "english": "en",
    "en-us": "en",
    "en_gb": "en",
}
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def normalize_language(value: Optional[str]) -> str:
    """Map a user supplied language name or tag to a dictionary code.

    Unknown values are returned lower-cased so the caller can decide whether
    they are supported.
    """
    raw = str(value or "").strip().lower()
    if raw in _ALIASES:
        return _ALIASES[raw]
    if raw.startswith("zh"):
        return "zh"
    if raw.startswith("en"):
        return "en"
    return raw or DEFAULT_LANGUAGE


def is_supported(lang: str) -> bool:
    return lang in SUPPORTED_LANGUAGES


def load_dictionary(lang: str) -> Dict[str, Any]:
    """Read the raw dictionary for a supported language code."""
    path = LOCALES_DIR / f"{lang}.json"
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def _deep_get(data: Dict[str, Any], key: str) -> Any:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return None
        node = node[part]
    return node


class Translator:
    """Looks up dotted keys in one language dictionary."""

    def __init__(self, lang: str, dictionary: Dict[str, Any]) -> None:
        self.lang = lang
        self.dictionary = dictionary

    def __repr__(self) -> str:
        return f"<Translator(lang={self.lang!r})>"

    def t(self, key: str, **variables: Any) -> str:
        """Translate ``key``, returning the key itself when it is missing.

        ``{name}`` placeholders are replaced from ``variables``; unknown names
        become empty strings.
        """
        raw = _deep_get(self.dictionary, key)
        text = key if raw is None else str(raw)
        if not variables:
            return text

        def _fill(match: re.Match) -> str:
            value = variables.get(match.group(1))
            return "" if value is None else str(value)

        return _PLACEHOLDER.sub(_fill, text)

    def tr(self, key: str, fallback: str) -> str:
        """Translate ``key``, or return ``fallback`` when the dictionary has no entry."""
        raw = _deep_get(self.dictionary, key)
        if raw is None or isinstance(raw, dict):
            return fallback
        return str(raw)


@lru_cache(maxsize=None)
def get_translator(lang: Optional[str] = None) -> Translator:
    """Cached translator for a language. Unsupported languages use the default dictionary."""
    code = normalize_language(lang)
    if not is_supported(code):
        logger.debug(f"Unsupported language '{lang}', falling back to '{DEFAULT_LANGUAGE}'")
        code = DEFAULT_LANGUAGE
    return Translator(code, load_dictionary(code))


def pick_language(accept_language: Optional[str], default: str = DEFAULT_LANGUAGE) -> str:
    """Choose a supported language from an HTTP ``Accept-Language`` header.

    Entries are ranked by their ``q`` weight; ties keep header order.
    """
    if not accept_language:
        return default
    ranked = []
    for position, entry in enumerate(accept_language.split(",")):
        tag, _, params = entry.strip().partition(";")
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        if tag and weight > 0:
            ranked.append((-weight, position, tag))
    for _, _, tag in sorted(ranked):
        code = normalize_language(tag)
        if is_supported(code):
            return code
    return default
