"""Culture identifiers, descriptions and scope filters.

Culture identifiers are BCP 47 style tags ("en", "de-AT") compared
case-insensitively everywhere. The empty identifier is the invariant culture.
"""

from dataclasses import dataclass
from enum import Enum, Flag, auto

from pydantic import BaseModel, ConfigDict, Field

from rest_localization.core.exceptions import InvalidCultureFilterError

# Separator between the language subtag and the region/script subtags
CULTURE_SEPARATOR = "-"

# Identifier of the invariant culture (CLDR "root")
INVARIANT_CULTURE = ""


class CultureContextKind(str, Enum):
    """Scope of the "current culture" state."""

    PER_THREAD = "thread"
    PROCESS_WIDE = "process"


class CultureCategory(Flag):
    """Locale database categories a culture can belong to."""

    NEUTRAL = auto()
    SPECIFIC = auto()
    INSTALLED = auto()
    CUSTOM = auto()
    REPLACEMENT = auto()


class CultureDescription(BaseModel):
    """Human-facing metadata of a culture identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    native_name: str = Field(serialization_alias="nativeName")
    english_name: str = Field(serialization_alias="englishName")

    @property
    def is_neutral(self) -> bool:
        return CULTURE_SEPARATOR not in self.identifier


@dataclass(frozen=True)
class CultureScope:
    """Filter over the locale database categories.

    The defaults select neutral, specific and installed cultures.
    """

    neutral: bool = True
    specific: bool = True
    installed: bool = True
    custom: bool = False
    replacement: bool = False

    def categories(self) -> CultureCategory:
        """Return the enabled categories.

        Raises:
            InvalidCultureFilterError: if no category is enabled.
        """
        selected = CultureCategory(0)
        if self.neutral:
            selected |= CultureCategory.NEUTRAL
        if self.specific:
            selected |= CultureCategory.SPECIFIC
        if self.installed:
            selected |= CultureCategory.INSTALLED
        if self.custom:
            selected |= CultureCategory.CUSTOM
        if self.replacement:
            selected |= CultureCategory.REPLACEMENT
        if not selected:
            raise InvalidCultureFilterError()
        return selected


def culture_key(name: str) -> str:
    """Case-insensitive comparison key of a culture identifier."""
    return name.casefold()


def neutral_culture(name: str) -> str:
    """Language subtag of a culture identifier ("de-AT" -> "de")."""
    return name.split(CULTURE_SEPARATOR, 1)[0]
