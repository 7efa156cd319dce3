"""Localized property values.

Resolves the best localized variant of a property for a culture and copies
localized values from localizable records into plain objects such as DTOs.
"""

from rest_localization.localization.descriptors import (
    PropertyDescriptor,
    PropertyDescriptorCache,
    descriptor_cache,
)
from rest_localization.localization.fields import (
    LOCALIZATIONS_SUFFIX,
    LocalizedField,
    get_localized_fields,
    localizable,
)
from rest_localization.localization.mapper import LocalizationMapper
from rest_localization.localization.resolver import (
    LocalizationResolver,
    select_localization,
)

__all__ = [
    "LOCALIZATIONS_SUFFIX",
    "LocalizationMapper",
    "LocalizationResolver",
    "LocalizedField",
    "PropertyDescriptor",
    "PropertyDescriptorCache",
    "descriptor_cache",
    "get_localized_fields",
    "localizable",
    "select_localization",
]
