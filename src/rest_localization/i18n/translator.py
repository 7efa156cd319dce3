"""Error message translation using python-i18n.

Error responses carry a message_key; the exception handler translates it into
the request culture. Specific cultures use the messages of their language
("de-AT" -> de.json).
"""

from pathlib import Path
from typing import ClassVar

import i18n  # type: ignore[import-untyped]

from rest_localization.cultures.context import CultureContext
from rest_localization.cultures.models import neutral_culture

# Path to translation files
TRANSLATIONS_DIR = Path(__file__).parent / "translations"

# Languages with a translation file
TRANSLATION_LANGUAGES: frozenset[str] = frozenset({"en", "de"})

DEFAULT_LANGUAGE = "en"


class _TranslationState:
    """Singleton to track translation initialization state."""

    initialized: ClassVar[bool] = False
    context: ClassVar[CultureContext | None] = None


def init_translations(context: CultureContext | None = None) -> None:
    """Initialize the i18n library with our translation files.

    ``context`` supplies the culture when a translation call passes none.
    """
    if context is not None:
        _TranslationState.context = context
    if _TranslationState.initialized:
        return

    i18n.set("file_format", "json")
    i18n.set("fallback", DEFAULT_LANGUAGE)
    i18n.set("enable_memoization", True)
    # Skip the locale root element since our JSON files have flat keys
    i18n.set("skip_locale_root_data", True)
    i18n.set("filename_format", "{locale}.{format}")

    i18n.load_path.append(str(TRANSLATIONS_DIR))

    _TranslationState.initialized = True


def translation_language(culture: str | None) -> str:
    """Language of the translation file used for ``culture``."""
    if not culture:
        return DEFAULT_LANGUAGE
    language = neutral_culture(culture.strip()).lower()
    if language in TRANSLATION_LANGUAGES:
        return language
    return DEFAULT_LANGUAGE


def translate(
    key: str,
    culture: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key into the language of ``culture``.

    Interpolation uses %{variable} syntax in JSON files. Without a culture the
    current culture of the registered context is used.

    Returns:
        Translated string, or the key itself if not found.

    Example:
        translate("error_unknown_culture", "de-AT", name="fr")
        # Returns: "Unbekannte Kultur fr"
    """
    init_translations()

    if culture is None and _TranslationState.context is not None:
        culture = _TranslationState.context.current_ui_culture()

    # Per call locale: the global i18n locale is shared by concurrent requests
    # python-i18n returns the key if translation not found
    result: str = i18n.t(key, locale=translation_language(culture), **params)
    return result


def translate_with_fallback(
    key: str,
    culture: str | None = None,
    fallback: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key with a custom fallback message.

    Returns:
        Translated string, fallback, or key if neither found.
    """
    result = translate(key, culture, **params)

    if result == key and fallback is not None:
        return fallback

    return result
