"""
Check-digit algorithms for 1D symbologies.

All functions are pure. ``calculate_*`` raise ``ValueError`` when the input is
outside the symbology's alphabet or too short; ``verify_*`` never raise and
return False for malformed input.

Example:
    >>> calculate_ean13_checksum("590123412345")
    '7'
    >>> verify_ean13_checksum("5901234123457")
    True
"""

from __future__ import annotations

from typing import Callable, Dict, Final, Sequence, Tuple

__all__ = [
    "CODE39_ALPHABET",
    "CODE93_SYMBOLS",
    "CODABAR_ALPHABET",
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
    "verify_ean13_checksum",
    "verify_ean8_checksum",
    "verify_upca_checksum",
    "verify_upce_checksum",
    "verify_code39_checksum",
    "verify_itf_checksum",
    "verify_gtin_checksum",
    "verify_codabar_checksum",
    "verify_msi_checksum",
]

CODE39_ALPHABET: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%"

# Code 93: the 43 Code 39 characters followed by the four shift symbols
CODE93_SYMBOLS: Final[Tuple[str, ...]] = tuple(CODE39_ALPHABET) + ("($)", "(%)", "(/)", "(+)")

# Codabar check values: digits 0-9, then - $ : / . +, then start/stop A-D
CODABAR_ALPHABET: Final[str] = "0123456789-$:/.+ABCD"

_CODE128_START: Final[Dict[str, int]] = {"A": 103, "B": 104}


def _digits(data: str, count: int, name: str) -> Sequence[int]:
    if not isinstance(data, str) or len(data) < count or not data[:count].isdigit():
        raise ValueError(f"{name} checksum needs at least {count} leading digits")
    if not data[:count].isascii():
        raise ValueError(f"{name} checksum accepts ASCII digits only")
    return [int(c) for c in data[:count]]


def _mod10(total: int) -> str:
    return str((10 - total % 10) % 10)


# ==============================================================================
# EAN / UPC
# ==============================================================================


def calculate_ean13_checksum(data: str) -> str:
    """Check digit over the first 12 digits (weights 1,3,1,3,... from the left)."""
    digits = _digits(data, 12, "EAN-13")
    total = sum(d * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits))
    return _mod10(total)


def calculate_ean8_checksum(data: str) -> str:
    """Check digit over the first 7 digits (weights 3,1,3,1,... from the left)."""
    digits = _digits(data, 7, "EAN-8")
    total = sum(d * (3 if i % 2 == 0 else 1) for i, d in enumerate(digits))
    return _mod10(total)


def calculate_upca_checksum(data: str) -> str:
    """Check digit over the first 11 digits (weights 3,1,3,1,... from the left)."""
    digits = _digits(data, 11, "UPC-A")
    total = sum(d * (3 if i % 2 == 0 else 1) for i, d in enumerate(digits))
    return _mod10(total)


def expand_upce(data: str) -> str:
    """
    Expand a UPC-E code to the 11-digit UPC-A body (no check digit).

    Accepts 6 digits (number system 0 assumed), 7 digits (number system +
    6 data digits) or 8 digits (trailing check digit ignored). The last data
    digit selects where the suppressed zeros are re-inserted.

    Example:
        >>> expand_upce("04252614")
        '04210000526'
    """
    if not isinstance(data, str) or not data.isdigit() or not data.isascii():
        raise ValueError("UPC-E must contain digits only")
    if len(data) == 6:
        number_system, body = "0", data
    elif len(data) in (7, 8):
        number_system, body = data[0], data[1:7]
    else:
        raise ValueError("UPC-E must be 6, 7 or 8 digits")
    if number_system not in ("0", "1"):
        raise ValueError("UPC-E number system must be 0 or 1")

    d1, d2, d3, d4, d5, d6 = body
    if d6 in "012":
        manufacturer, product = d1 + d2 + d6 + "00", "00" + d3 + d4 + d5
    elif d6 == "3":
        manufacturer, product = d1 + d2 + d3 + "00", "000" + d4 + d5
    elif d6 == "4":
        manufacturer, product = d1 + d2 + d3 + d4 + "0", "0000" + d5
    else:
        manufacturer, product = d1 + d2 + d3 + d4 + d5, "0000" + d6
    return number_system + manufacturer + product


def calculate_upce_checksum(data: str) -> str:
    """UPC-E check digit, computed on the expanded UPC-A representation."""
    return calculate_upca_checksum(expand_upce(data))


def calculate_gtin_checksum(data: str) -> str:
    """
    GS1 mod-10 check digit for any GTIN body (weights 3,1 from the right).

    Used by ITF-14 and GS1 DataBar.
    """
    if not isinstance(data, str) or not data or not data.isdigit() or not data.isascii():
        raise ValueError("GTIN checksum needs a non-empty digit string")
    total = sum(int(c) * (3 if i % 2 == 0 else 1) for i, c in enumerate(reversed(data)))
    return _mod10(total)


def calculate_itf_checksum(data: str) -> str:
    """Optional ITF check digit (GS1 mod-10 over the data digits)."""
    return calculate_gtin_checksum(data)


# ==============================================================================
# Code 39 / 93 / 128
# ==============================================================================


def calculate_code39_checksum(data: str) -> str:
    """Mod-43 check character."""
    if not isinstance(data, str) or not data:
        raise ValueError("Code 39 checksum needs non-empty data")
    total = 0
    for ch in data:
        idx = CODE39_ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Character {ch!r} is not in the Code 39 alphabet")
        total += idx
    return CODE39_ALPHABET[total % 43]


def _code93_check(values: Sequence[int], max_weight: int) -> int:
    total = 0
    for i, value in enumerate(reversed(values)):
        total += value * ((i % max_weight) + 1)
    return total % 47


def calculate_code93_checksum(data: str) -> str:
    """
    The two Code 93 check symbols "C" and "K".

    C weights cycle 1..20 from the right, K weights cycle 1..15 from the right
    over the data plus C. Shift symbols are rendered as ``($)``, ``(%)``,
    ``(/)`` and ``(+)``.

    Example:
        >>> calculate_code93_checksum("TEST93")
        '+6'
    """
    if not isinstance(data, str) or not data:
        raise ValueError("Code 93 checksum needs non-empty data")
    values = []
    for ch in data:
        idx = CODE39_ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Character {ch!r} is not in the Code 93 base alphabet")
        values.append(idx)
    c = _code93_check(values, 20)
    k = _code93_check(values + [c], 15)
    return CODE93_SYMBOLS[c] + CODE93_SYMBOLS[k]


def _code128_value(ch: str, code_set: str) -> int:
    code = ord(ch)
    if code_set == "B":
        if 32 <= code <= 127:
            return code - 32
    elif code < 32:
        return code + 64
    elif code <= 95:
        return code - 32
    raise ValueError(f"Character {ch!r} cannot be encoded in Code 128 set {code_set}")


def calculate_code128_checksum(data: str, code_set: str = "B") -> int:
    """
    Mod-103 check symbol value of a single-code-set Code 128 symbol.

    Args:
        data: Characters to encode (set B: ASCII 32-127, set A: ASCII 0-95).
        code_set: "A" or "B".

    Returns:
        Check symbol value 0..102.
    """
    if code_set not in _CODE128_START:
        raise ValueError("code_set must be 'A' or 'B'")
    if not isinstance(data, str) or not data:
        raise ValueError("Code 128 checksum needs non-empty data")
    total = _CODE128_START[code_set]
    for position, ch in enumerate(data, start=1):
        total += _code128_value(ch, code_set) * position
    return total % 103


# ==============================================================================
# Codabar / MSI
# ==============================================================================


def calculate_codabar_checksum(data: str) -> str:
    """
    Optional mod-16 Codabar check character.

    The sum covers every character including start/stop; the check character
    is inserted before the stop character.

    Example:
        >>> calculate_codabar_checksum("A37859B")
        '+'
    """
    if not isinstance(data, str) or not data:
        raise ValueError("Codabar checksum needs non-empty data")
    total = 0
    for ch in data.upper():
        idx = CODABAR_ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Character {ch!r} is not in the Codabar alphabet")
        total += idx
    return CODABAR_ALPHABET[(16 - total % 16) % 16]


def calculate_msi_checksum(data: str) -> str:
    """MSI Mod 10 (Luhn) check digit."""
    if not isinstance(data, str) or not data or not data.isdigit() or not data.isascii():
        raise ValueError("MSI checksum needs a non-empty digit string")
    total = 0
    for i, c in enumerate(reversed(data)):
        d = int(c)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return str((10 - total % 10) % 10)


# ==============================================================================
# Verification
# ==============================================================================


def _verify_trailing(data: object, length: int, calc: Callable[[str], str]) -> bool:
    if not isinstance(data, str) or len(data) != length:
        return False
    try:
        return calc(data[:-1]) == data[-1]
    except ValueError:
        return False


def verify_ean13_checksum(data: str) -> bool:
    return _verify_trailing(data, 13, calculate_ean13_checksum)


def verify_ean8_checksum(data: str) -> bool:
    return _verify_trailing(data, 8, calculate_ean8_checksum)


def verify_upca_checksum(data: str) -> bool:
    return _verify_trailing(data, 12, calculate_upca_checksum)


def verify_upce_checksum(data: str) -> bool:
    return _verify_trailing(data, 8, calculate_upce_checksum)


def verify_code39_checksum(data: str) -> bool:
    """Data whose last character is its mod-43 check character."""
    if not isinstance(data, str) or len(data) < 2:
        return False
    try:
        return calculate_code39_checksum(data[:-1]) == data[-1]
    except ValueError:
        return False


def verify_gtin_checksum(data: str) -> bool:
    if not isinstance(data, str) or len(data) < 2:
        return False
    try:
        return calculate_gtin_checksum(data[:-1]) == data[-1]
    except ValueError:
        return False


def verify_itf_checksum(data: str) -> bool:
    return verify_gtin_checksum(data)


def verify_codabar_checksum(data: str) -> bool:
    """Codabar with its check character just before the stop character."""
    if not isinstance(data, str) or len(data) < 4:
        return False
    body = data[:-2] + data[-1]
    try:
        return calculate_codabar_checksum(body) == data[-2].upper()
    except ValueError:
        return False


def verify_msi_checksum(data: str) -> bool:
    if not isinstance(data, str) or len(data) < 2:
        return False
    try:
        return calculate_msi_checksum(data[:-1]) == data[-1]
    except ValueError:
        return False
