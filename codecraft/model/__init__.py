"""
model

Value objects of the encoding/validation core: enumerations, payload
attribute sets and result records. No encoding logic here.
"""

from .enums import BarcodeFormat, PayloadType, WifiSecurity
from .payloads import PAYLOAD_SCHEMAS, Payload, payload_fields
from .results import BarcodeConstraint, DecodedPayload, ValidationResult

__all__ = [
    "BarcodeFormat",
    "PayloadType",
    "WifiSecurity",
    "Payload",
    "PAYLOAD_SCHEMAS",
    "payload_fields",
    "BarcodeConstraint",
    "DecodedPayload",
    "ValidationResult",
]
