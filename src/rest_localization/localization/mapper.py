"""Copy localized values from a localizable source into a plain target.

Typical use is a DTO built from a record, then localized in place:

    dto = ProductDto.model_validate(product, from_attributes=True)
    mapper.map_all(dto, product, "de-AT")
"""

from typing import TypeVar

from rest_localization.core.exceptions import (
    InvalidArgumentError,
    MissingTargetPropertyError,
)
from rest_localization.core.logging import get_logger
from rest_localization.localization.fields import get_localized_fields
from rest_localization.localization.resolver import LocalizationResolver

logger = get_logger(__name__)

TTarget = TypeVar("TTarget")


class LocalizationMapper:
    """Writes resolved localized values onto target objects.

    The source object is only read. The culture defaults to the resolver's
    current UI culture.
    """

    def __init__(self, resolver: LocalizationResolver | None = None) -> None:
        self.resolver = resolver or LocalizationResolver()

    def map_one(
        self,
        target: object,
        source: object,
        name: str,
        culture: str | None = None,
        *,
        strict: bool = False,
    ) -> None:
        """Resolve ``name`` on ``source`` and write it to ``target.name``.

        Nothing is written when the source has no base value. A target
        without a writable ``name`` attribute is skipped, unless ``strict``.

        Raises:
            InvalidArgumentError: if ``name`` is blank.
            MissingLocalizablePropertyError: if the source lacks the property.
            MissingTargetPropertyError: in strict mode, if the target lacks a
                writable ``name`` attribute.
        """
        if not name or not name.strip():
            raise InvalidArgumentError("name")
        if culture is None:
            culture = self.resolver.default_culture()

        value = self.resolver.resolve_optional(source, name, culture)
        if value is None:
            return

        descriptor = self.resolver.cache.find_property(type(target), name)
        if descriptor is None or descriptor.readonly:
            if strict:
                raise MissingTargetPropertyError(type(target).__qualname__, name)
            logger.debug(
                "localization_target_skipped",
                target=type(target).__qualname__,
                property=name,
            )
            return
        descriptor.set_value(target, value)

    def map_all(
        self, target: TTarget, source: object, culture: str | None = None
    ) -> TTarget:
        """Map every localizable field of ``source`` present on ``target``.

        Returns:
            The target, for chaining.
        """
        if culture is None:
            culture = self.resolver.default_culture()

        target_type = type(target)
        for field in get_localized_fields(type(source), self.resolver.cache):
            if self.resolver.cache.find_property(target_type, field.name) is None:
                continue
            self.map_one(target, source, field.name, culture)
        return target
