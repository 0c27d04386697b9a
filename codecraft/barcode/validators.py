# RU: Валидация данных штрихкода по правилам символогии: длина, алфавит, контрольная цифра.
# EN: Symbology validation for barcode data: length, alphabet and check digit rules.

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Final, Optional

from codecraft.exceptions import UnknownTypeError
from codecraft.model.enums import BarcodeFormat
from codecraft.model.results import BarcodeConstraint, ValidationResult

from .checksums import (
    verify_ean8_checksum,
    verify_ean13_checksum,
    verify_gtin_checksum,
    verify_upca_checksum,
    verify_upce_checksum,
)

logger = logging.getLogger(__name__)

__all__ = [
    "BARCODE_CONSTRAINTS",
    "get_barcode_constraints",
    "validate_barcode",
    "is_valid",
    "is_valid_ean13",
    "is_valid_ean8",
    "is_valid_upca",
    "is_valid_upce",
    "is_valid_code128",
    "is_valid_code39",
    "is_valid_code93",
    "is_valid_itf",
    "is_valid_codabar",
    "is_valid_msi",
    "is_valid_pharmacode",
]

_CODE39_PATTERN: Final[str] = r"^[A-Z0-9 \-.$/+%]+$"
_CODABAR_PATTERN: Final[str] = r"^[ABCD][0-9\-$:/.+]+[ABCD]$"

PHARMACODE_MIN: Final[int] = 3
PHARMACODE_MAX: Final[int] = 131070

BARCODE_CONSTRAINTS: Final[Dict[BarcodeFormat, BarcodeConstraint]] = {
    BarcodeFormat.QR_CODE: BarcodeConstraint(
        min_length=1, max_length=2953, description="Any text (1-2953 chars)"
    ),
    BarcodeFormat.DATA_MATRIX: BarcodeConstraint(
        min_length=1, max_length=2335, description="Any text (1-2335 chars)"
    ),
    BarcodeFormat.AZTEC: BarcodeConstraint(
        min_length=1, max_length=3067, description="Any text (1-3067 chars)"
    ),
    BarcodeFormat.PDF_417: BarcodeConstraint(
        min_length=1, max_length=1850, description="Any text (1-1850 chars)"
    ),
    BarcodeFormat.MAXICODE: BarcodeConstraint(
        min_length=1, max_length=93, description="Any text (1-93 chars)"
    ),
    BarcodeFormat.EAN_13: BarcodeConstraint(
        fixed_length=13, pattern=r"^\d{13}$", description="13 digits including check digit"
    ),
    BarcodeFormat.EAN_8: BarcodeConstraint(
        fixed_length=8, pattern=r"^\d{8}$", description="8 digits including check digit"
    ),
    BarcodeFormat.UPC_A: BarcodeConstraint(
        fixed_length=12, pattern=r"^\d{12}$", description="12 digits including check digit"
    ),
    BarcodeFormat.UPC_E: BarcodeConstraint(
        fixed_length=8, pattern=r"^\d{8}$", description="8 digits including check digit"
    ),
    BarcodeFormat.CODE_128: BarcodeConstraint(
        min_length=1, max_length=80, description="ASCII characters (1-80 chars)"
    ),
    BarcodeFormat.CODE_39: BarcodeConstraint(
        min_length=1,
        max_length=48,
        pattern=_CODE39_PATTERN,
        description="Uppercase letters, digits and - . $ / + % space (1-48 chars)",
    ),
    BarcodeFormat.CODE_93: BarcodeConstraint(
        min_length=1,
        max_length=48,
        pattern=_CODE39_PATTERN,
        description="Uppercase letters, digits and - . $ / + % space (1-48 chars)",
    ),
    BarcodeFormat.CODABAR: BarcodeConstraint(
        min_length=3,
        pattern=_CODABAR_PATTERN,
        description="Digits and - $ : / . + between start/stop characters A-D",
    ),
    BarcodeFormat.ITF: BarcodeConstraint(
        min_length=2, pattern=r"^(\d\d)+$", description="Even number of digits"
    ),
    BarcodeFormat.ITF_14: BarcodeConstraint(
        min_length=2,
        pattern=r"^(\d\d)+$",
        description="Even number of digits (14 for a GTIN-14 carton code)",
    ),
    BarcodeFormat.MSI: BarcodeConstraint(
        min_length=1, max_length=30, pattern=r"^\d+$", description="Digits only (1-30 digits)"
    ),
    BarcodeFormat.MSI_PLESSEY: BarcodeConstraint(
        min_length=1, max_length=30, pattern=r"^\d+$", description="Digits only (1-30 digits)"
    ),
    BarcodeFormat.PHARMACODE: BarcodeConstraint(
        min_length=1,
        max_length=6,
        pattern=r"^\d+$",
        description=f"Integer between {PHARMACODE_MIN} and {PHARMACODE_MAX}",
    ),
    BarcodeFormat.RSS_14: BarcodeConstraint(
        fixed_length=14, pattern=r"^\d{14}$", description="14-digit GTIN including check digit"
    ),
    BarcodeFormat.RSS_EXPANDED: BarcodeConstraint(
        min_length=1,
        max_length=74,
        pattern=r"^[\x20-\x7E]+$",
        description="Printable ASCII characters (1-74 chars)",
    ),
}


def get_barcode_constraints(barcode_format: Any) -> BarcodeConstraint:
    """
    Declarative length/pattern rule for a format.

    Raises:
        UnknownTypeError: format is not a BarcodeFormat.
    """
    return BARCODE_CONSTRAINTS[BarcodeFormat.coerce(barcode_format)]


# ==============================================================================
# Named predicates (total: never raise)
# ==============================================================================


def _is_digits(data: Any, length: Optional[int] = None) -> bool:
    if not isinstance(data, str) or not data.isascii() or not data.isdigit():
        return False
    return length is None or len(data) == length


def is_valid_ean13(data: Any) -> bool:
    return _is_digits(data, 13) and verify_ean13_checksum(data)


def is_valid_ean8(data: Any) -> bool:
    return _is_digits(data, 8) and verify_ean8_checksum(data)


def is_valid_upca(data: Any) -> bool:
    return _is_digits(data, 12) and verify_upca_checksum(data)


def is_valid_upce(data: Any) -> bool:
    """Eight digits; the check digit is deliberately not enforced."""
    return _is_digits(data, 8)


def is_valid_code128(data: Any) -> bool:
    return (
        isinstance(data, str)
        and 1 <= len(data) <= 80
        and all(ord(ch) <= 127 for ch in data)
    )


def is_valid_code39(data: Any) -> bool:
    return (
        isinstance(data, str)
        and 1 <= len(data) <= 48
        and re.fullmatch(_CODE39_PATTERN, data) is not None
    )


def is_valid_code93(data: Any) -> bool:
    return is_valid_code39(data)


def is_valid_itf(data: Any) -> bool:
    return _is_digits(data) and len(data) >= 2 and len(data) % 2 == 0


def is_valid_codabar(data: Any) -> bool:
    return (
        isinstance(data, str)
        and len(data) >= 3
        and re.fullmatch(_CODABAR_PATTERN, data) is not None
    )


def is_valid_msi(data: Any) -> bool:
    return _is_digits(data) and len(data) <= 30


def is_valid_pharmacode(data: Any) -> bool:
    return _is_digits(data) and len(data) <= 6 and PHARMACODE_MIN <= int(data) <= PHARMACODE_MAX


# ==============================================================================
# ValidationResult producers
# ==============================================================================


def _check_digits(
    result: ValidationResult,
    data: str,
    name: str,
    length: int,
    verify: Callable[[str], bool],
) -> None:
    if not _is_digits(data, length):
        result.add_error(f"{name} must be exactly {length} digits")
    elif not verify(data):
        result.add_error(f"Invalid {name} checksum")


def _check_free_text(result: ValidationResult, data: str, fmt: BarcodeFormat) -> None:
    constraint = BARCODE_CONSTRAINTS[fmt]
    if not constraint.matches_length(data):
        result.add_error(
            f"{fmt.display_name} data must be at most {constraint.max_length} characters"
        )


def _validate_ean13(result: ValidationResult, data: str) -> None:
    _check_digits(result, data, "EAN-13", 13, verify_ean13_checksum)


def _validate_ean8(result: ValidationResult, data: str) -> None:
    _check_digits(result, data, "EAN-8", 8, verify_ean8_checksum)


def _validate_upca(result: ValidationResult, data: str) -> None:
    _check_digits(result, data, "UPC-A", 12, verify_upca_checksum)


def _validate_upce(result: ValidationResult, data: str) -> None:
    if not is_valid_upce(data):
        result.add_error("UPC-E must be exactly 8 digits")
    elif not verify_upce_checksum(data):
        result.add_warning("UPC-E check digit does not match the expanded UPC-A code")


def _validate_code128(result: ValidationResult, data: str) -> None:
    if len(data) > 80:
        result.add_error("Code 128 data must be at most 80 characters")
    elif any(ord(ch) > 127 for ch in data):
        result.add_error("Code 128 can only contain ASCII characters")


def _validate_code39(result: ValidationResult, data: str) -> None:
    if len(data) > 48:
        result.add_error("Code 39 data must be at most 48 characters")
    elif not is_valid_code39(data):
        result.add_error(
            "Code 39 can only contain uppercase letters, numbers, and - . $ / + % space"
        )


def _validate_code93(result: ValidationResult, data: str) -> None:
    if len(data) > 48:
        result.add_error("Code 93 data must be at most 48 characters")
    elif not is_valid_code93(data):
        result.add_error(
            "Code 93 can only contain uppercase letters, numbers, and - . $ / + % space"
        )


def _validate_itf(result: ValidationResult, data: str) -> None:
    if not is_valid_itf(data):
        result.add_error("ITF must contain an even number of digits")


def _validate_itf14(result: ValidationResult, data: str) -> None:
    _validate_itf(result, data)
    if not result.is_valid:
        return
    if len(data) != 14:
        result.add_warning("ITF-14 carton codes are normally 14 digits")
    elif not verify_gtin_checksum(data):
        result.add_warning("ITF-14 check digit does not match the GS1 mod-10 checksum")


def _validate_codabar(result: ValidationResult, data: str) -> None:
    if len(data) < 3:
        result.add_error("Codabar must be at least 3 characters including start/stop")
    elif not is_valid_codabar(data):
        result.add_error(
            "Codabar must start and end with A, B, C or D and contain only digits and - $ : / . +"
        )


def _validate_msi(result: ValidationResult, data: str) -> None:
    if not _is_digits(data):
        result.add_error("MSI must contain only digits")
    elif len(data) > 30:
        result.add_error("MSI data must be at most 30 digits")


def _validate_pharmacode(result: ValidationResult, data: str) -> None:
    if not is_valid_pharmacode(data):
        result.add_error(
            f"Pharmacode must be an integer between {PHARMACODE_MIN} and {PHARMACODE_MAX}"
        )


def _validate_rss14(result: ValidationResult, data: str) -> None:
    _check_digits(result, data, "GS1 DataBar", 14, verify_gtin_checksum)


def _validate_rss_expanded(result: ValidationResult, data: str) -> None:
    constraint = BARCODE_CONSTRAINTS[BarcodeFormat.RSS_EXPANDED]
    if len(data) > 74:
        result.add_error("GS1 DataBar Expanded data must be at most 74 characters")
    elif not constraint.matches_pattern(data):
        result.add_error("GS1 DataBar Expanded can only contain printable ASCII characters")


_VALIDATORS: Final[Dict[BarcodeFormat, Callable[[ValidationResult, str], None]]] = {
    BarcodeFormat.EAN_13: _validate_ean13,
    BarcodeFormat.EAN_8: _validate_ean8,
    BarcodeFormat.UPC_A: _validate_upca,
    BarcodeFormat.UPC_E: _validate_upce,
    BarcodeFormat.CODE_128: _validate_code128,
    BarcodeFormat.CODE_39: _validate_code39,
    BarcodeFormat.CODE_93: _validate_code93,
    BarcodeFormat.ITF: _validate_itf,
    BarcodeFormat.ITF_14: _validate_itf14,
    BarcodeFormat.CODABAR: _validate_codabar,
    BarcodeFormat.MSI: _validate_msi,
    BarcodeFormat.MSI_PLESSEY: _validate_msi,
    BarcodeFormat.PHARMACODE: _validate_pharmacode,
    BarcodeFormat.RSS_14: _validate_rss14,
    BarcodeFormat.RSS_EXPANDED: _validate_rss_expanded,
}


def validate_barcode(barcode_format: Any, data: Any) -> ValidationResult:
    """
    Validate barcode data against its symbology.

    Never raises: an unknown format or non-string data yields an invalid
    result. Checksum failures are reported as ``Invalid <name> checksum`` so
    callers can tell them apart from length/alphabet errors.

    Example:
        >>> validate_barcode("EAN_13", "5901234123456").errors
        ['Invalid EAN-13 checksum']
    """
    try:
        fmt = BarcodeFormat.coerce(barcode_format)
    except UnknownTypeError:
        logger.debug("Rejecting unknown barcode format %r", barcode_format)
        return ValidationResult.failure("Unknown format")

    if not isinstance(data, str) or not data:
        return ValidationResult.failure("Data is required")

    result = ValidationResult()
    check = _VALIDATORS.get(fmt)
    if check is None:
        _check_free_text(result, data, fmt)
    else:
        check(result, data)

    if result.warnings:
        logger.debug("Barcode %s warnings: %s", fmt.value, result.warnings)
    return result


def is_valid(barcode_format: Any, data: Any) -> bool:
    return validate_barcode(barcode_format, data).is_valid
