"""Supported culture catalog.

A catalog is built once at startup from a list of culture names, validated
against the locale database. It is immutable afterwards: construction either
produces a complete, valid catalog or raises.
"""

from collections.abc import Iterable, Iterator
import locale

from rest_localization.core.exceptions import (
    EmptyCatalogError,
    InvalidArgumentError,
    UnknownCultureError,
    UnknownDefaultCultureError,
)
from rest_localization.core.logging import get_logger
from rest_localization.cultures.database import LocaleDatabase, get_locale_database
from rest_localization.cultures.models import (
    CULTURE_SEPARATOR,
    INVARIANT_CULTURE,
    CultureContextKind,
    CultureDescription,
    CultureScope,
    culture_key,
)

logger = get_logger(__name__)


def ambient_culture(kind: CultureContextKind) -> str:
    """Culture the environment implies when nothing is configured.

    Process wide: the process locale (LC_CTYPE), e.g. "en_US.UTF-8" -> "en-US".
    Per thread: Python threads carry no locale of their own, so the invariant
    culture.
    """
    if kind is CultureContextKind.PER_THREAD:
        return INVARIANT_CULTURE
    language_code, _ = locale.getlocale()
    if not language_code or language_code in ("C", "POSIX"):
        return INVARIANT_CULTURE
    return language_code.replace("_", CULTURE_SEPARATOR)


class CultureCatalog:
    """Ordered, validated set of supported cultures with a default culture."""

    def __init__(
        self,
        entries: Iterable[CultureDescription],
        default_culture: str,
        context_kind: CultureContextKind = CultureContextKind.PER_THREAD,
    ) -> None:
        # first spelling wins; the invariant (blank) culture is never supported
        self._index: dict[str, CultureDescription] = {}
        for entry in entries:
            if entry.identifier.strip():
                self._index.setdefault(culture_key(entry.identifier), entry)
        self._entries: tuple[CultureDescription, ...] = tuple(self._index.values())
        if not self._entries:
            raise EmptyCatalogError()
        default_entry = self._index.get(culture_key(default_culture))
        if default_entry is None:
            raise UnknownDefaultCultureError(default_culture)
        self._default_culture = default_entry.identifier
        self._context_kind = context_kind

    @classmethod
    def build(
        cls,
        candidates: Iterable[str],
        scope: CultureScope | None = None,
        default_culture: str | None = None,
        context_kind: CultureContextKind = CultureContextKind.PER_THREAD,
        database: LocaleDatabase | None = None,
    ) -> "CultureCatalog":
        """Build a catalog from culture names.

        Names are matched case-insensitively against the locale database,
        restricted by ``scope``. Names resolving to the invariant culture are
        skipped. Without ``default_culture`` the ambient culture of
        ``context_kind`` is used.

        Raises:
            EmptyCatalogError: no candidate given.
            InvalidCultureFilterError: ``scope`` enables no category.
            UnknownCultureError: a candidate is not in the locale database.
            UnknownDefaultCultureError: the default is not a catalog culture.
        """
        names = list(dict.fromkeys(candidates))
        if not names:
            raise EmptyCatalogError()

        scope = scope or CultureScope()
        # validate the filter before any lookup
        scope.categories()
        database = database or get_locale_database()

        entries: list[CultureDescription] = []
        for name in names:
            description = database.find(name, scope)
            if description is None:
                raise UnknownCultureError(name)
            entries.append(description)

        if default_culture is None:
            default_culture = ambient_culture(context_kind)

        catalog = cls(entries, default_culture, context_kind)
        logger.info(
            "culture_catalog_built",
            cultures=catalog.list_supported_cultures(),
            default_culture=catalog.default_culture,
            context_kind=context_kind.value,
        )
        return catalog

    @classmethod
    def from_database(
        cls,
        scope: CultureScope | None = None,
        default_culture: str | None = None,
        context_kind: CultureContextKind = CultureContextKind.PER_THREAD,
        database: LocaleDatabase | None = None,
    ) -> "CultureCatalog":
        """Build a catalog supporting every database culture in ``scope``."""
        database = database or get_locale_database()
        return cls.build(
            database.identifiers(scope),
            scope=scope,
            default_culture=default_culture,
            context_kind=context_kind,
            database=database,
        )

    @property
    def context_kind(self) -> CultureContextKind:
        return self._context_kind

    @property
    def default_culture(self) -> str:
        return self._default_culture

    def default_culture_identifier(self) -> str:
        return self._default_culture

    def get_culture(self, name: str) -> CultureDescription | None:
        """Case-insensitive lookup of a supported culture.

        Raises:
            InvalidArgumentError: if ``name`` is blank.
        """
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        return self._index.get(culture_key(name))

    def list_supported_cultures(self) -> list[str]:
        return [entry.identifier for entry in self._entries]

    def list_supported_culture_descriptions(self) -> list[CultureDescription]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and culture_key(name) in self._index

    def __iter__(self) -> Iterator[CultureDescription]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"CultureCatalog(cultures={self.list_supported_cultures()!r}, "
            f"default_culture={self._default_culture!r})"
        )
