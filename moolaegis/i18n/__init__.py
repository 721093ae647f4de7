"""Server-side translations for report labels and API messages (English and Traditional Chinese)."""

from .translator import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Translator,
    get_translator,
    is_supported,
    load_dictionary,
    normalize_language,
    pick_language,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "Translator",
    "get_translator",
    "is_supported",
    "load_dictionary",
    "normalize_language",
    "pick_language",
]
