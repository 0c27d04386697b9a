"""
qr

Кодирование, валидация и декодирование содержимого QR-кодов.

Public API:
    - validate_qr_payload / qr_validation_result / validate_qr_data
    - format_qr_data: payload -> encoded string
    - detect_type: encoded string -> PayloadType
    - parse_qr_data: encoded string -> DecodedPayload

Примеры:
    >>> from codecraft.qr import format_qr_data, detect_type
    >>> s = format_qr_data("phone", {"phoneNumber": "+1 555 123 4567"})
    >>> s
    'tel:+1 555 123 4567'
    >>> detect_type(s)
    <PayloadType.PHONE: 'phone'>
"""

from .detector import JSON_TYPE_TAGS, detect_type
from .formatter import (
    encode_uri_component,
    escape_text,
    escape_wifi_value,
    format_ical_datetime,
    format_qr_data,
    to_json,
)
from .parser import parse_content_lines, parse_qr_data, parse_wifi
from .validators import (
    QR_VALIDATORS,
    is_valid_date,
    is_valid_email,
    is_valid_phone_number,
    is_valid_url,
    parse_date,
    qr_validation_result,
    validate_qr_data,
    validate_qr_payload,
)

__all__ = [
    "QR_VALIDATORS",
    "validate_qr_payload",
    "qr_validation_result",
    "validate_qr_data",
    "is_valid_url",
    "is_valid_email",
    "is_valid_phone_number",
    "is_valid_date",
    "parse_date",
    "format_qr_data",
    "encode_uri_component",
    "escape_wifi_value",
    "escape_text",
    "format_ical_datetime",
    "to_json",
    "JSON_TYPE_TAGS",
    "detect_type",
    "parse_qr_data",
    "parse_wifi",
    "parse_content_lines",
]
