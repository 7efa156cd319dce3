"""Supported cultures and the current culture.

Provides the validated culture catalog built from the Babel (CLDR) locale
database, and the per-thread or process-wide current culture context.
"""

from rest_localization.cultures.catalog import CultureCatalog, ambient_culture
from rest_localization.cultures.context import CultureContext
from rest_localization.cultures.database import LocaleDatabase, get_locale_database
from rest_localization.cultures.middleware import (
    CultureMiddleware,
    parse_accept_language,
)
from rest_localization.cultures.models import (
    INVARIANT_CULTURE,
    CultureCategory,
    CultureContextKind,
    CultureDescription,
    CultureScope,
)

__all__ = [
    "INVARIANT_CULTURE",
    "CultureCatalog",
    "CultureCategory",
    "CultureContext",
    "CultureContextKind",
    "CultureDescription",
    "CultureMiddleware",
    "CultureScope",
    "LocaleDatabase",
    "ambient_culture",
    "get_locale_database",
    "parse_accept_language",
]
