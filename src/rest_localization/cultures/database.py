"""Locale database backed by Babel's CLDR data.

This is the external source of known cultures. The catalog only consumes it:
it never computes culture metadata on its own.
"""

from functools import lru_cache
import threading

from babel import Locale
from babel.core import parse_locale
from babel.localedata import locale_identifiers

from rest_localization.core.exceptions import InvalidArgumentError
from rest_localization.core.logging import get_logger
from rest_localization.cultures.models import (
    CULTURE_SEPARATOR,
    INVARIANT_CULTURE,
    CultureCategory,
    CultureDescription,
    CultureScope,
    culture_key,
)

logger = get_logger(__name__)

ROOT_LOCALE = "root"
INVARIANT_DESCRIPTION = CultureDescription(
    identifier=INVARIANT_CULTURE,
    native_name="Invariant Language (Invariant Country)",
    english_name="Invariant Language (Invariant Country)",
)


def to_culture_identifier(babel_identifier: str) -> str:
    """Convert a Babel identifier ("de_AT") into a culture identifier ("de-AT")."""
    if babel_identifier == ROOT_LOCALE:
        return INVARIANT_CULTURE
    return babel_identifier.replace("_", CULTURE_SEPARATOR)


@lru_cache(maxsize=None)
def describe_babel_locale(babel_identifier: str) -> CultureDescription:
    """Derive the description of a bundled locale once."""
    if babel_identifier == ROOT_LOCALE:
        return INVARIANT_DESCRIPTION
    identifier = to_culture_identifier(babel_identifier)
    locale = Locale.parse(babel_identifier)
    return CultureDescription(
        identifier=identifier,
        native_name=locale.display_name or identifier,
        english_name=locale.english_name or identifier,
    )


def _bundled_categories(babel_identifier: str) -> CultureCategory:
    if babel_identifier == ROOT_LOCALE:
        return CultureCategory.NEUTRAL | CultureCategory.INSTALLED
    _, territory, _, _ = parse_locale(babel_identifier)
    if territory is None:
        return CultureCategory.NEUTRAL | CultureCategory.INSTALLED
    return CultureCategory.SPECIFIC | CultureCategory.INSTALLED


class LocaleDatabase:
    """Known cultures with their categories.

    Bundled CLDR locales are neutral or specific, and installed. The
    invariant culture (CLDR "root") is always bundled. Cultures
    registered at runtime are custom; a custom culture that reuses a bundled
    identifier also counts as a replacement and shadows the bundled entry.
    """

    def __init__(self, babel_identifiers: list[str] | None = None) -> None:
        if babel_identifiers is None:
            # newer Babel releases no longer list "root"
            babel_identifiers = sorted({ROOT_LOCALE, *locale_identifiers()})
        self._bundled: dict[str, tuple[str, CultureCategory]] = {}
        for babel_identifier in babel_identifiers:
            identifier = to_culture_identifier(babel_identifier)
            self._bundled[culture_key(identifier)] = (
                babel_identifier,
                _bundled_categories(babel_identifier),
            )
        self._custom: dict[str, tuple[CultureDescription, CultureCategory]] = {}
        self._lock = threading.Lock()

    def register(
        self, identifier: str, native_name: str, english_name: str | None = None
    ) -> CultureDescription:
        """Register a custom culture.

        Raises:
            InvalidArgumentError: if the identifier is blank.
        """
        if not identifier or not identifier.strip():
            raise InvalidArgumentError("identifier")
        identifier = identifier.strip()
        description = CultureDescription(
            identifier=identifier,
            native_name=native_name,
            english_name=english_name or native_name,
        )
        categories = CultureCategory.CUSTOM
        if culture_key(identifier) in self._bundled:
            categories |= CultureCategory.REPLACEMENT
        with self._lock:
            self._custom[culture_key(identifier)] = (description, categories)
        logger.info(
            "custom_culture_registered",
            culture=identifier,
            replacement=bool(categories & CultureCategory.REPLACEMENT),
        )
        return description

    def _entries(self) -> list[tuple[str, str, CultureCategory]]:
        # (key, identifier, categories); custom entries shadow bundled ones
        with self._lock:
            custom = dict(self._custom)
        entries = [
            (key, to_culture_identifier(babel_identifier), categories)
            for key, (babel_identifier, categories) in self._bundled.items()
            if key not in custom
        ]
        entries.extend(
            (key, description.identifier, categories)
            for key, (description, categories) in custom.items()
        )
        return entries

    def _describe(self, key: str) -> CultureDescription:
        with self._lock:
            custom = self._custom.get(key)
        if custom is not None:
            return custom[0]
        return describe_babel_locale(self._bundled[key][0])

    def identifiers(self, scope: CultureScope | None = None) -> list[str]:
        """Identifiers of all cultures passing the scope filter."""
        selected = (scope or CultureScope()).categories()
        return [
            identifier
            for _, identifier, categories in self._entries()
            if categories & selected
        ]

    def cultures(self, scope: CultureScope | None = None) -> list[CultureDescription]:
        """Descriptions of all cultures passing the scope filter."""
        selected = (scope or CultureScope()).categories()
        return [
            self._describe(key)
            for key, _, categories in self._entries()
            if categories & selected
        ]

    def find(
        self, name: str, scope: CultureScope | None = None
    ) -> CultureDescription | None:
        """Case-insensitive exact lookup restricted to the scope filter."""
        selected = (scope or CultureScope()).categories()
        key = culture_key(name)
        with self._lock:
            custom = self._custom.get(key)
        if custom is not None:
            categories = custom[1]
        elif key in self._bundled:
            categories = self._bundled[key][1]
        else:
            return None
        if not categories & selected:
            return None
        return self._describe(key)


@lru_cache
def get_locale_database() -> LocaleDatabase:
    return LocaleDatabase()
