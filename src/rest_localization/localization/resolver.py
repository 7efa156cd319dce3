"""Localized value resolution.

Picks the best localized variant of a property for a requested culture:

1. exact culture match ("de-AT" -> "de-AT")
2. for a bare two-letter request, the first variant of that language
   ("en" -> "en-GB")
3. the neutral language of the request ("de-CH" -> "de")
4. the base value

A matching entry whose value is None is a "no override" marker and yields
the base value. Resolution never mutates the source object.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from rest_localization.core.exceptions import (
    InvalidArgumentError,
    MissingBaseValueError,
    MissingLocalizablePropertyError,
)
from rest_localization.cultures.context import CultureContext
from rest_localization.cultures.models import (
    CULTURE_SEPARATOR,
    INVARIANT_CULTURE,
    culture_key,
    neutral_culture,
)
from rest_localization.localization.descriptors import (
    PropertyDescriptorCache,
    annotation_matches,
    descriptor_cache,
)
from rest_localization.localization.fields import (
    localization_value_type,
    localizations_name,
)

T = TypeVar("T")

# Length of a bare ISO 639-1 language tag ("en", "de")
NEUTRAL_TAG_LENGTH = 2


def _find_key(localizations: Mapping[str, Any], culture: str) -> str | None:
    key = culture_key(culture)
    return next((k for k in localizations if culture_key(k) == key), None)


def select_localization(
    localizations: Mapping[str, Any], culture: str, base_value: T
) -> T:
    """Apply the fallback chain to a localizations mapping."""
    if not localizations:
        return base_value
    culture = culture.strip()

    # specific culture (e.g. en-US)
    match = _find_key(localizations, culture)
    if match is not None:
        value = localizations[match]
        return base_value if value is None else value

    # bare neutral culture: any country variant of the language
    if CULTURE_SEPARATOR not in culture and len(culture) == NEUTRAL_TAG_LENGTH:
        prefix = culture_key(culture)
        match = next(
            (k for k in localizations if culture_key(k).startswith(prefix)), None
        )
        if match is None:
            return base_value
        value = localizations[match]
        return base_value if value is None else value

    # neutral culture of a specific request (e.g. de-CH -> de)
    neutral = neutral_culture(culture)
    if neutral and neutral != culture:
        match = _find_key(localizations, neutral)
        if match is not None:
            value = localizations[match]
            return base_value if value is None else value

    return base_value


class LocalizationResolver:
    """Resolves localized property values of arbitrary objects.

    The culture defaults to the current UI culture of the injected culture
    context, or to the invariant culture without one.
    """

    def __init__(
        self,
        context: CultureContext | None = None,
        cache: PropertyDescriptorCache | None = None,
    ) -> None:
        self.context = context
        self.cache = cache or descriptor_cache

    def default_culture(self) -> str:
        if self.context is not None:
            return self.context.current_ui_culture()
        return INVARIANT_CULTURE

    def is_localizable(self, cls: type, name: str) -> bool:
        """Test if ``cls`` has a localizations mapping for ``name``."""
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        companion = self.cache.find_property(cls, localizations_name(name))
        return (
            companion is not None
            and localization_value_type(companion.annotation) is not None
        )

    def get_localizations(self, source: object, name: str) -> dict[str, Any]:
        """Copy of the localizations mapping of ``name`` (empty when absent)."""
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        companion = self.cache.find_property(type(source), localizations_name(name))
        if companion is None:
            return {}
        localizations = companion.get_value(source)
        if not isinstance(localizations, Mapping):
            return {}
        return {str(key): value for key, value in localizations.items()}

    def _base_value(self, source: object, name: str, expected_type: Any) -> Any:
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        source_type = type(source)
        base = self.cache.find_property(source_type, name)
        if base is None:
            raise MissingLocalizablePropertyError(source_type.__qualname__, name)

        if expected_type is None:
            companion = self.cache.find_property(source_type, localizations_name(name))
            if companion is not None:
                expected_type = localization_value_type(companion.annotation)
                if expected_type is None:
                    raise MissingLocalizablePropertyError(
                        source_type.__qualname__,
                        localizations_name(name),
                        "localizations must be a mapping",
                    )
        if expected_type is not None and not annotation_matches(
            base.annotation, expected_type
        ):
            raise MissingLocalizablePropertyError(
                source_type.__qualname__,
                name,
                f"expected type {expected_type!r}",
            )
        return base.get_value(source)

    def resolve_optional(
        self,
        source: object,
        name: str,
        culture: str | None = None,
        *,
        expected_type: type[T] | Any = None,
    ) -> T | None:
        """Localized value of ``name``, or None if the base value is absent.

        Raises:
            InvalidArgumentError: if ``name`` is blank.
            MissingLocalizablePropertyError: if the base property is missing
                or does not have the expected type.
        """
        base_value = self._base_value(source, name, expected_type)
        if base_value is None:
            return None
        return self._localize(source, name, base_value, culture)

    def resolve(
        self,
        source: object,
        name: str,
        culture: str | None = None,
        *,
        expected_type: type[T] | Any = None,
    ) -> T:
        """Localized value of ``name``, falling back to its base value.

        Raises:
            InvalidArgumentError: if ``name`` is blank.
            MissingLocalizablePropertyError: if the base property is missing
                or does not have the expected type.
            MissingBaseValueError: if the base value is absent.
        """
        base_value = self._base_value(source, name, expected_type)
        if base_value is None:
            raise MissingBaseValueError(type(source).__qualname__, name)
        return self._localize(source, name, base_value, culture)

    def _localize(
        self, source: object, name: str, base_value: T, culture: str | None
    ) -> T:
        localizations = self.get_localizations(source, name)
        if not localizations:
            return base_value
        if culture is None:
            culture = self.default_culture()
        return select_localization(localizations, culture, base_value)
