"""
Централизованные исключения ядра codecraft.

Иерархия:
    CodeCraftError (базовое)
    ├── ValidationError
    │   ├── QRValidationError
    │   └── BarcodeValidationError
    │       └── ChecksumMismatchError
    └── UnknownTypeError

Validation errors are always recoverable: the caller shows ``message`` next to
the form input named by ``field`` and re-prompts. ``UnknownTypeError`` signals
a programming error (a payload type or barcode format outside the closed
enumerations) and must not be swallowed.

Example:
    >>> from codecraft.exceptions import QRValidationError
    >>> try:
    ...     core.encode("wifi", {"security": "WPA"})
    ... except QRValidationError as e:
    ...     print(e.field, e.message)
    ssid Network name (SSID) is required
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "CodeCraftError",
    "ValidationError",
    "QRValidationError",
    "BarcodeValidationError",
    "ChecksumMismatchError",
    "UnknownTypeError",
]


class CodeCraftError(Exception):
    """
    Базовое исключение для всех ошибок codecraft.

    Attributes:
        message: Human-readable message, safe to show to the user.
        field: Offending attribute path (``categories[0].items[1].price``),
            or None when the error is not tied to one field.
        context: Extra debugging context.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.context = context or {}

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} (field: {self.field})"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, field={self.field!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for collaborators (UI, bridges)."""
        result: Dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.field is not None:
            result["field"] = self.field
        return result


class ValidationError(CodeCraftError, ValueError):
    """Field-level validation failure: missing, malformed or out of range."""


class QRValidationError(ValidationError):
    """
    QR payload failed validation.

    Example:
        >>> raise QRValidationError("Latitude must be between -90 and 90", field="latitude")
    """

    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, field=field, **kwargs)


class BarcodeValidationError(ValidationError):
    """Barcode data violates its symbology's length/alphabet rules."""

    def __init__(
        self,
        message: str,
        *,
        barcode_format: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.barcode_format = barcode_format


class ChecksumMismatchError(BarcodeValidationError):
    """Barcode has the right shape but its check digit does not verify."""


class UnknownTypeError(CodeCraftError, ValueError):
    """
    Payload type or barcode format outside the closed enumeration.

    Attributes:
        value: The rejected type/format value.
    """

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(message, context={"value": value})
        self.value = value
