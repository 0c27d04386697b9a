"""
barcode

Валидация 1D/2D штрихкодов и алгоритмы контрольных цифр.

Public API:
    - validate_barcode: ValidationResult for (format, data)
    - is_valid: boolean shortcut
    - get_barcode_constraints: declarative length/pattern rule per format
    - checksums: EAN-13/8, UPC-A/E, Code 39/93/128, ITF/GTIN, Codabar, MSI

Примеры:
    >>> from codecraft.barcode import validate_barcode, calculate_ean13_checksum
    >>> validate_barcode("EAN_13", "5901234123457").is_valid
    True
    >>> calculate_ean13_checksum("590123412345")
    '7'
"""

from .checksums import (
    calculate_codabar_checksum,
    calculate_code39_checksum,
    calculate_code93_checksum,
    calculate_code128_checksum,
    calculate_ean8_checksum,
    calculate_ean13_checksum,
    calculate_gtin_checksum,
    calculate_itf_checksum,
    calculate_msi_checksum,
    calculate_upca_checksum,
    calculate_upce_checksum,
    expand_upce,
)
from .validators import (
    BARCODE_CONSTRAINTS,
    get_barcode_constraints,
    is_valid,
    is_valid_codabar,
    is_valid_code39,
    is_valid_code93,
    is_valid_code128,
    is_valid_ean8,
    is_valid_ean13,
    is_valid_itf,
    is_valid_msi,
    is_valid_pharmacode,
    is_valid_upca,
    is_valid_upce,
    validate_barcode,
)

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
    "calculate_ean13_checksum",
    "calculate_ean8_checksum",
    "calculate_upca_checksum",
    "calculate_upce_checksum",
    "expand_upce",
    "calculate_code39_checksum",
    "calculate_code93_checksum",
    "calculate_code128_checksum",
    "calculate_itf_checksum",
    "calculate_gtin_checksum",
    "calculate_codabar_checksum",
    "calculate_msi_checksum",
]
