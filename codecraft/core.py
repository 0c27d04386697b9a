"""
Capability interface of the encoding/validation core.

``CodeCraftCore`` is the object UI and platform layers talk to: it encodes
payloads for the QR renderer, decodes strings handed over by a camera
scanner and validates barcode input. It holds only immutable configuration,
so one instance can be shared freely.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from codecraft.barcode.validators import get_barcode_constraints
from codecraft.barcode.validators import validate_barcode as _validate_barcode
from codecraft.config import DEFAULT_CONFIG, CoreConfig
from codecraft.exceptions import BarcodeValidationError, ChecksumMismatchError
from codecraft.model.enums import BarcodeFormat, PayloadType
from codecraft.model.payloads import payload_fields as _payload_fields
from codecraft.model.results import BarcodeConstraint, DecodedPayload, ValidationResult
from codecraft.qr.detector import detect_type as _detect_type
from codecraft.qr.formatter import format_qr_data
from codecraft.qr.parser import parse_qr_data
from codecraft.qr.validators import qr_validation_result, validate_qr_payload

logger = logging.getLogger(__name__)

__all__ = [
    "CodeCraftCore",
    "get_core",
    "encode",
    "validate",
    "detect_type",
    "decode",
    "validate_barcode",
    "barcode_constraints",
]


class CodeCraftCore:
    """
    Encode, validate, detect and decode QR payloads; validate barcodes.

    Args:
        config: Core configuration (defaults to ``DEFAULT_CONFIG``).
        logger: Logger to report through; defaults to this module's logger.
            Messages below ``config.log_level`` are dropped here, the
            logger's own level is left alone.

    Example:
        >>> core = CodeCraftCore()
        >>> core.encode("sms", {"phoneNumber": "+15551234567", "message": "Hi there"})
        'sms:+15551234567?body=Hi%20there'
        >>> core.validate_barcode("UPC_A", "036000291452").is_valid
        True
    """

    def __init__(
        self,
        config: Optional[CoreConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config: CoreConfig = config or DEFAULT_CONFIG
        self._logger: logging.Logger = logger if logger is not None else logging.getLogger(__name__)

    def _log(self, level: int, msg: str, *args: Any) -> None:
        if level >= self.config.level_number:
            prefix = self.config.log_prefix.replace("%", "%%")
            self._logger.log(level, f"{prefix} {msg}", *args)

    # --- QR ---

    def encode(self, payload_type: Any, data: Any) -> str:
        """
        Validate, then format a payload.

        Raises:
            QRValidationError: payload violates a rule of its type.
            UnknownTypeError: payload_type is outside the enumeration.
        """
        ptype = PayloadType.coerce(payload_type)
        warnings = validate_qr_payload(ptype, data, self.config)
        for warning in warnings:
            self._log(logging.WARNING, "%s payload: %s", ptype.value, warning)
        encoded = format_qr_data(ptype, data, config=self.config)
        self._log(logging.DEBUG, "Encoded %s payload (%d chars)", ptype.value, len(encoded))
        return encoded

    def validate(self, payload_type: Any, data: Any) -> ValidationResult:
        """Non-throwing validation; only ``UnknownTypeError`` propagates."""
        result = qr_validation_result(payload_type, data, self.config)
        if not result.is_valid:
            self._log(logging.INFO, "Validation failed: %s", "; ".join(result.errors))
        return result

    def detect_type(self, raw: Any) -> PayloadType:
        return _detect_type(raw)

    def decode(self, raw: Any) -> DecodedPayload:
        decoded = parse_qr_data(raw)
        self._log(logging.DEBUG, "Decoded %s content", decoded.type.value)
        return decoded

    def payload_fields(self, payload_type: Any) -> Dict[str, bool]:
        """Field name -> required flag, for form builders."""
        return _payload_fields(PayloadType.coerce(payload_type))

    # --- Barcodes ---

    def validate_barcode(self, barcode_format: Any, data: Any) -> ValidationResult:
        result = _validate_barcode(barcode_format, data)
        if not result.is_valid:
            self._log(logging.INFO, "Barcode rejected: %s", "; ".join(result.errors))
        return result

    def require_valid_barcode(self, barcode_format: Any, data: Any) -> None:
        """
        Raising variant of ``validate_barcode``.

        Raises:
            ChecksumMismatchError: data is well-formed but its check digit is wrong.
            BarcodeValidationError: any other rule violation (including an
                unknown format).
        """
        result = _validate_barcode(barcode_format, data)
        if result.is_valid:
            return
        message = result.errors[0]
        fmt = barcode_format.value if isinstance(barcode_format, BarcodeFormat) else str(barcode_format)
        if "checksum" in message.lower():
            raise ChecksumMismatchError(message, barcode_format=fmt)
        raise BarcodeValidationError(message, barcode_format=fmt)

    def barcode_constraints(self, barcode_format: Any) -> BarcodeConstraint:
        """
        Raises:
            UnknownTypeError: format is outside the enumeration.
        """
        return get_barcode_constraints(barcode_format)


_core: Optional[CodeCraftCore] = None


def get_core() -> CodeCraftCore:
    """Shared default instance (created on first use)."""
    global _core
    if _core is None:
        _core = CodeCraftCore()
    return _core


def encode(payload_type: Any, data: Any) -> str:
    return get_core().encode(payload_type, data)


def validate(payload_type: Any, data: Any) -> ValidationResult:
    return get_core().validate(payload_type, data)


def detect_type(raw: Any) -> PayloadType:
    return get_core().detect_type(raw)


def decode(raw: Any) -> DecodedPayload:
    return get_core().decode(raw)


def validate_barcode(barcode_format: Any, data: Any) -> ValidationResult:
    return get_core().validate_barcode(barcode_format, data)


def barcode_constraints(barcode_format: Any) -> BarcodeConstraint:
    return get_core().barcode_constraints(barcode_format)
