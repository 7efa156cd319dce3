"""Localizable field bindings.

A localizable field pairs a base attribute ``name`` holding the default value
with a companion ``name_localizations`` mapping culture identifiers to
localized values (``None`` meaning "no override"). Types declare their
bindings with ``@localizable`` and get them checked once, at class creation.
Undeclared types fall back to discovery by the naming convention.
"""

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
import threading
from typing import Any, TypeVar, get_args, get_origin, overload

from rest_localization.core.exceptions import MissingLocalizablePropertyError
from rest_localization.localization.descriptors import (
    PropertyDescriptorCache,
    annotation_matches,
    descriptor_cache,
    unwrap_optional,
)

T = TypeVar("T", bound=type)

LOCALIZATIONS_SUFFIX = "_localizations"

_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)


def localizations_name(name: str) -> str:
    """Companion attribute name of a base attribute ("name" -> "name_localizations")."""
    return f"{name}{LOCALIZATIONS_SUFFIX}"


def base_name(companion: str) -> str:
    """Base attribute name of a companion attribute."""
    return companion.removesuffix(LOCALIZATIONS_SUFFIX)


@dataclass(frozen=True)
class LocalizedField:
    """Binding of a base attribute to its localizations mapping."""

    name: str
    localizations_name: str
    value_type: Any = Any


def localization_value_type(annotation: Any) -> Any | None:
    """Value type of a localizations mapping annotation.

    Returns ``Any`` for an unparametrized mapping and None for a non-mapping
    annotation.
    """
    annotation = unwrap_optional(annotation)
    if annotation is Any:
        return Any
    origin = get_origin(annotation) or annotation
    if origin not in _MAPPING_ORIGINS:
        return None
    args = get_args(annotation)
    if len(args) != 2:
        return Any
    return unwrap_optional(args[1])


def _bind(cls: type, name: str, cache: PropertyDescriptorCache) -> LocalizedField:
    base = cache.find_property(cls, name)
    if base is None:
        raise MissingLocalizablePropertyError(cls.__qualname__, name)
    companion_name = localizations_name(name)
    companion = cache.find_property(cls, companion_name)
    if companion is None:
        raise MissingLocalizablePropertyError(
            cls.__qualname__, companion_name, "missing localizations mapping"
        )
    value_type = localization_value_type(companion.annotation)
    if value_type is None:
        raise MissingLocalizablePropertyError(
            cls.__qualname__, companion_name, "localizations must be a mapping"
        )
    if not annotation_matches(base.annotation, value_type):
        raise MissingLocalizablePropertyError(
            cls.__qualname__,
            name,
            f"type {base.annotation!r} does not match localization type {value_type!r}",
        )
    return LocalizedField(name, companion_name, value_type)


class _FieldRegistry:
    def __init__(self) -> None:
        self._fields: dict[type, tuple[LocalizedField, ...]] = {}
        self._lock = threading.Lock()

    def register(self, cls: type, fields: tuple[LocalizedField, ...]) -> None:
        with self._lock:
            self._fields[cls] = fields

    def lookup(self, cls: type) -> tuple[type, tuple[LocalizedField, ...]] | None:
        """Nearest declared class in the MRO of ``cls`` and its bindings."""
        for klass in cls.__mro__:
            fields = self._fields.get(klass)
            if fields is not None:
                return klass, fields
        return None


_registry = _FieldRegistry()


def discover_localized_fields(
    cls: type, cache: PropertyDescriptorCache = descriptor_cache
) -> tuple[LocalizedField, ...]:
    """Bindings found by the ``*_localizations`` naming convention.

    Companions without a matching base attribute are ignored.
    """
    fields = []
    for descriptor in cache.describe(cls):
        if not descriptor.name.endswith(LOCALIZATIONS_SUFFIX):
            continue
        name = base_name(descriptor.name)
        if not name or cache.find_property(cls, name) is None:
            continue
        value_type = localization_value_type(descriptor.annotation)
        fields.append(LocalizedField(name, descriptor.name, value_type or Any))
    return tuple(fields)


@overload
def localizable(cls: T, /) -> T: ...


@overload
def localizable(*names: str) -> Callable[[T], T]: ...


def localizable(*args: Any) -> Any:
    """Class decorator declaring localizable fields.

    Usage:
        @localizable("name", "price")
        class Product(BaseModel):
            name: str
            name_localizations: dict[str, str | None] | None = None
            price: Decimal
            price_localizations: dict[str, Decimal | None] | None = None

    Without names (``@localizable``) every convention-named pair is
    registered. Raises MissingLocalizablePropertyError when a binding is
    incomplete or its types disagree.
    """

    def decorator(cls: T, names: tuple[str, ...]) -> T:
        if names:
            fields = tuple(_bind(cls, name, descriptor_cache) for name in names)
        else:
            fields = tuple(
                _bind(cls, field.name, descriptor_cache)
                for field in discover_localized_fields(cls)
            )
        _registry.register(cls, fields)
        return cls

    if len(args) == 1 and isinstance(args[0], type):
        return decorator(args[0], ())
    return lambda cls: decorator(cls, args)


def get_localized_fields(
    cls: type, cache: PropertyDescriptorCache = descriptor_cache
) -> tuple[LocalizedField, ...]:
    """Declared bindings of ``cls``, or the convention bindings if undeclared.

    An undeclared subclass of a declared type keeps the inherited bindings
    and adds the convention pairs whose companion it introduces itself.
    """
    found = _registry.lookup(cls)
    if found is None:
        return discover_localized_fields(cls, cache)
    owner, fields = found
    if owner is cls:
        return fields

    inherited = {descriptor.name for descriptor in cache.describe(owner)}
    names = {field.name for field in fields}
    added = tuple(
        field
        for field in discover_localized_fields(cls, cache)
        if field.localizations_name not in inherited and field.name not in names
    )
    return fields + added
