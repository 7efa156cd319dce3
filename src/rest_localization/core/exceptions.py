"""Centralized exception hierarchy for the application.

All custom exceptions inherit from AppException, which provides:
- Consistent error response format
- HTTP status codes
- Machine-readable error codes
- i18n support via message_key and params
- Optional details dict for additional context

The culture and localization core raises these synchronously; nothing is
retried. The exception handler in main.py converts them to JSON responses.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Provides a consistent structure for error responses with:
    - message: Human-readable error description (fallback if translation fails)
    - message_key: Translation key for i18n (e.g., "error_unknown_culture")
    - params: Interpolation parameters for the translation
    - error_code: Machine-readable code (e.g., "UNKNOWN_CULTURE")
    - status_code: HTTP status code
    - details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.message_key:
            result["message_key"] = self.message_key
        return result


class InvalidArgumentError(AppException):
    """A required name argument is blank."""

    def __init__(self, argument: str):
        super().__init__(
            f"Argument '{argument}' must not be blank",
            "INVALID_ARGUMENT",
            422,
            {"argument": argument},
            message_key="error_invalid_argument",
            params={"argument": argument},
        )


class CultureError(AppException):
    """Base exception for culture catalog and culture context errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "CULTURE_ERROR",
        status_code: int = 400,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            error_code,
            status_code,
            details,
            message_key=message_key,
            params=params,
        )


class EmptyCatalogError(CultureError):
    """No candidate culture was supplied for a catalog."""

    def __init__(self) -> None:
        super().__init__(
            "Missing cultures",
            "EMPTY_CATALOG",
            500,
            message_key="error_empty_catalog",
        )


class InvalidCultureFilterError(CultureError):
    """A culture scope filter has no category enabled."""

    def __init__(self) -> None:
        super().__init__(
            "Missing culture type selection",
            "INVALID_CULTURE_FILTER",
            400,
            message_key="error_invalid_culture_filter",
        )


class UnknownCultureError(CultureError):
    """Culture is not known to the locale database or the catalog."""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown culture {name}",
            "UNKNOWN_CULTURE",
            400,
            {"culture": name},
            message_key="error_unknown_culture",
            params={"name": name},
        )
        self.name = name


class UnknownDefaultCultureError(CultureError):
    """The default culture is not one of the catalog cultures."""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown default culture {name}",
            "UNKNOWN_DEFAULT_CULTURE",
            500,
            {"culture": name},
            message_key="error_unknown_default_culture",
            params={"name": name},
        )
        self.name = name


class LocalizationError(AppException):
    """Base exception for localized value resolution and mapping errors.

    These report structural misconfiguration of a data type. A missing
    localized variant is never an error: resolution falls back to the
    base value instead.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "LOCALIZATION_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            error_code,
            status_code,
            details,
            message_key=message_key,
            params=params,
        )


class MissingLocalizablePropertyError(LocalizationError):
    """Source type does not expose the base property (of the expected type)."""

    def __init__(self, type_name: str, property_name: str, reason: str | None = None):
        msg = f"Type {type_name} is missing property {property_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(
            msg,
            "MISSING_LOCALIZABLE_PROPERTY",
            500,
            {"type": type_name, "property": property_name},
            message_key="error_missing_localizable_property",
            params={"type": type_name, "property": property_name},
        )


class MissingBaseValueError(LocalizationError):
    """Base property exists but holds no value."""

    def __init__(self, type_name: str, property_name: str):
        super().__init__(
            f"Type {type_name} is missing value of property {property_name}",
            "MISSING_BASE_VALUE",
            500,
            {"type": type_name, "property": property_name},
            message_key="error_missing_base_value",
            params={"type": type_name, "property": property_name},
        )


class MissingTargetPropertyError(LocalizationError):
    """Mapping target has no writable property for a localized value."""

    def __init__(self, type_name: str, property_name: str):
        super().__init__(
            f"Target type {type_name} is missing property {property_name}",
            "MISSING_TARGET_PROPERTY",
            500,
            {"type": type_name, "property": property_name},
            message_key="error_missing_target_property",
            params={"type": type_name, "property": property_name},
        )
