"""Type-keyed cache of public data member descriptors.

Introspecting a class (pydantic fields, dataclass fields, annotations and
properties) is comparatively slow, and resolution needs it on every call.
Descriptors are computed once per type and shared by all threads.
"""

from collections.abc import Callable
import dataclasses
from dataclasses import dataclass
import threading
import types
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from rest_localization.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """A named, typed public data member of a type."""

    name: str
    annotation: Any = Any
    readonly: bool = False

    def get_value(self, obj: Any, default: Any = None) -> Any:
        value = getattr(obj, self.name, None)
        return default if value is None else value

    def set_value(self, obj: Any, value: Any) -> None:
        setattr(obj, self.name, value)


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from ``X | None`` / ``Optional[X]``."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        # unresolved forward references: keep the raw annotations
        hints: dict[str, Any] = {}
        for base in reversed(cls.__mro__):
            hints.update(getattr(base, "__annotations__", {}))
        return hints


def _field_descriptors(cls: type) -> list[PropertyDescriptor]:
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        frozen = bool(cls.model_config.get("frozen"))
        return [
            PropertyDescriptor(name, field.annotation, readonly=frozen)
            for name, field in cls.model_fields.items()
        ]

    hints = _type_hints(cls)
    if dataclasses.is_dataclass(cls):
        params = getattr(cls, "__dataclass_params__", None)
        frozen = bool(params and params.frozen)
        return [
            PropertyDescriptor(field.name, hints.get(field.name, field.type), frozen)
            for field in dataclasses.fields(cls)
        ]

    return [
        PropertyDescriptor(name, annotation)
        for name, annotation in hints.items()
        if not name.startswith("_")
        and annotation is not ClassVar
        and get_origin(annotation) is not ClassVar
    ]


def _property_descriptors(cls: type) -> list[PropertyDescriptor]:
    descriptors: dict[str, PropertyDescriptor] = {}
    for base in cls.__mro__:
        if base is object or base is BaseModel or base.__module__.startswith("pydantic"):
            continue
        for name, member in vars(base).items():
            if name.startswith("_") or name in descriptors:
                continue
            if not isinstance(member, property):
                continue
            try:
                annotation = get_type_hints(member.fget).get("return", Any)
            except (NameError, TypeError):
                annotation = Any
            descriptors[name] = PropertyDescriptor(
                name, annotation, readonly=member.fset is None
            )
    return list(descriptors.values())


def introspect_type(cls: type) -> tuple[PropertyDescriptor, ...]:
    """Public data members of ``cls``: fields first, then properties."""
    descriptors = _field_descriptors(cls)
    known = {descriptor.name for descriptor in descriptors}
    descriptors.extend(
        descriptor
        for descriptor in _property_descriptors(cls)
        if descriptor.name not in known
    )
    return tuple(descriptors)


class PropertyDescriptorCache:
    """Concurrency-safe cache of descriptors per type.

    Lookups of cached types never take the lock. The lock only covers the
    check-and-populate of a type seen for the first time, so each type is
    introspected exactly once.
    """

    def __init__(
        self,
        introspect: Callable[[type], tuple[PropertyDescriptor, ...]] = introspect_type,
    ) -> None:
        self._introspect = introspect
        self._descriptors: dict[type, tuple[PropertyDescriptor, ...]] = {}
        self._lock = threading.Lock()

    def describe(self, cls: type) -> tuple[PropertyDescriptor, ...]:
        descriptors = self._descriptors.get(cls)
        if descriptors is not None:
            return descriptors

        with self._lock:
            descriptors = self._descriptors.get(cls)
            if descriptors is None:
                descriptors = self._introspect(cls)
                self._descriptors[cls] = descriptors
                logger.debug(
                    "descriptor_cache_populated",
                    type=cls.__qualname__,
                    count=len(descriptors),
                )
        return descriptors

    def find_property(
        self, cls: type, name: str, *, ignore_case: bool = False
    ) -> PropertyDescriptor | None:
        """Find a descriptor by name (case-sensitive unless ``ignore_case``)."""
        if ignore_case:
            key = name.casefold()
            return next(
                (d for d in self.describe(cls) if d.name.casefold() == key), None
            )
        return next((d for d in self.describe(cls) if d.name == name), None)

    def contains_property(self, cls: type, name: str, annotation: Any) -> bool:
        """Test if ``cls`` has a property ``name`` of type ``annotation``."""
        descriptor = self.find_property(cls, name)
        return descriptor is not None and annotation_matches(
            descriptor.annotation, annotation
        )

    def clear(self) -> None:
        with self._lock:
            self._descriptors.clear()
        logger.debug("descriptor_cache_cleared")

    def __contains__(self, cls: object) -> bool:
        return cls in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


def annotation_matches(declared: Any, expected: Any) -> bool:
    """Compare a declared annotation with an expected value type.

    ``Optional`` is ignored on both sides and ``Any`` matches everything.
    """
    declared = unwrap_optional(declared)
    expected = unwrap_optional(expected)
    if declared is Any or expected is Any:
        return True
    if declared == expected:
        return True
    if (
        isinstance(declared, type)
        and isinstance(expected, type)
        and get_origin(declared) is None
        and get_origin(expected) is None
    ):
        return issubclass(declared, expected)
    return False


# Global cache instance shared by resolvers and mappers
descriptor_cache = PropertyDescriptorCache()
