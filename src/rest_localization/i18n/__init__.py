"""Error message translation.

Uses the python-i18n library with JSON translation files, one file per
language. Cultures are reduced to their language for message lookup.
"""

from rest_localization.i18n.translator import (
    DEFAULT_LANGUAGE,
    TRANSLATION_LANGUAGES,
    init_translations,
    translate,
    translate_with_fallback,
    translation_language,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "TRANSLATION_LANGUAGES",
    "init_translations",
    "translate",
    "translate_with_fallback",
    "translation_language",
]
