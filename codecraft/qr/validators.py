"""
validators.py: fail-fast field validation of QR payloads, one rule set per
payload type.

Each type has a check function that raises ``QRValidationError`` on the first
violated rule and appends non-blocking remarks to a warnings list. The
non-throwing surfaces (``validate_qr_data``, ``qr_validation_result``) are
built on top of the same checks.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Final, List, Mapping, Optional
from urllib.parse import urlsplit

from codecraft.config import DEFAULT_CONFIG, CoreConfig
from codecraft.exceptions import QRValidationError, UnknownTypeError
from codecraft.model.enums import PayloadType, WifiSecurity
from codecraft.model.results import ValidationResult

logger = logging.getLogger(__name__)

__all__ = [
    "QR_VALIDATORS",
    "validate_qr_payload",
    "validate_qr_data",
    "qr_validation_result",
    "is_valid_url",
    "is_valid_email",
    "is_valid_phone_number",
    "is_valid_date",
    "parse_date",
]

_EMAIL_RE: Final = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_CHARS_RE: Final = re.compile(r"[0-9\s+\-()]+")
_WIFI_SECURITY_VALUES: Final = frozenset(s.value for s in WifiSecurity)

PHONE_MIN_DIGITS: Final[int] = 7
PHONE_MAX_DIGITS: Final[int] = 15

_Check = Callable[[Mapping[str, Any], List[str], CoreConfig], None]


# ==============================================================================
# Field helpers
# ==============================================================================


def is_valid_url(value: Any) -> bool:
    """Absolute http(s) URL with a host."""
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(host)


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None


def is_valid_phone_number(value: Any) -> bool:
    """
    Loose international rule: digits, spaces, ``+``, ``-`` and parentheses,
    with 7 to 15 digits.
    """
    if not isinstance(value, str) or _PHONE_CHARS_RE.fullmatch(value) is None:
        return False
    digits = sum(ch.isdigit() for ch in value)
    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


def parse_date(value: Any) -> Optional[datetime]:
    """
    ISO-8601 string, ``date`` or ``datetime`` -> UTC datetime.

    Naive values are taken as UTC. Returns None when the value cannot be
    interpreted as a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside datetime.min..datetime.max
        return None


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None


def _missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _require(data: Mapping[str, Any], key: str, message: str) -> Any:
    value = data.get(key)
    if _missing(value):
        raise QRValidationError(message, key)
    return value


def _require_url(data: Mapping[str, Any], key: str, missing_message: str) -> str:
    value = _require(data, key, missing_message)
    if not is_valid_url(value):
        raise QRValidationError("Invalid URL format", key)
    return value


def _optional_url(data: Mapping[str, Any], key: str, message: str) -> None:
    value = data.get(key)
    if not _missing(value) and not is_valid_url(value):
        raise QRValidationError(message, key)


def _optional_email(data: Mapping[str, Any], key: str, message: str) -> None:
    value = data.get(key)
    if not _missing(value) and not is_valid_email(value):
        raise QRValidationError(message, key)


def _require_list(data: Mapping[str, Any], key: str, message: str) -> List[Any]:
    value = data.get(key)
    if not isinstance(value, (list, tuple)) or len(value) == 0:
        raise QRValidationError(message, key)
    return list(value)


def _require_phone(data: Mapping[str, Any]) -> None:
    phone = _require(data, "phoneNumber", "Phone number is required")
    if not is_valid_phone_number(phone):
        raise QRValidationError("Invalid phone number format", "phoneNumber")


def _entry(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


# ==============================================================================
# Per-type rules
# ==============================================================================


def _check_website(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_url(data, "url", "URL is required")


def _check_pdf(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    url = _require_url(data, "url", "PDF URL is required")
    if "pdf" not in url.lower():
        warnings.append("URL does not appear to be a PDF file")


def _check_video(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_url(data, "url", "Video URL is required")


def _check_mp3(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_url(data, "url", "Audio URL is required")


def _check_images(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    images = _require_list(data, "images", "At least one image is required")
    for index, raw in enumerate(images):
        img = _entry(raw)
        path = f"images[{index}].url"
        if _missing(img.get("url")):
            raise QRValidationError(f"Image {index + 1} URL is required", path)
        if not is_valid_url(img.get("url")):
            raise QRValidationError(f"Invalid URL format for image {index + 1}", path)


def _check_wifi(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require(data, "ssid", "Network name (SSID) is required")
    security = _require(data, "security", "Security type is required")
    if not isinstance(security, str) or security not in _WIFI_SECURITY_VALUES:
        raise QRValidationError("Invalid security type", "security")
    if security != WifiSecurity.NOPASS.value and _missing(data.get("password")):
        raise QRValidationError("Password is required for secured networks", "password")


def _check_menu(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require(data, "restaurantName", "Restaurant name is required")
    categories = _require_list(data, "categories", "At least one menu category is required")
    for cat_index, raw_cat in enumerate(categories):
        cat = _entry(raw_cat)
        cat_path = f"categories[{cat_index}]"
        if _missing(cat.get("name")):
            raise QRValidationError(f"Category {cat_index + 1} name is required", f"{cat_path}.name")
        items = cat.get("items")
        if not isinstance(items, (list, tuple)) or len(items) == 0:
            raise QRValidationError(
                f'Category "{cat.get("name")}" must have at least one item', f"{cat_path}.items"
            )
        for item_index, raw_item in enumerate(items):
            item = _entry(raw_item)
            item_path = f"{cat_path}.items[{item_index}]"
            if _missing(item.get("name")):
                raise QRValidationError("Item name is required", f"{item_path}.name")
            if _missing(item.get("price")):
                raise QRValidationError("Item price is required", f"{item_path}.price")


def _check_business(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require(data, "name", "Business name is required")
    _optional_email(data, "email", "Invalid email format")
    _optional_url(data, "website", "Invalid website URL")


def _check_vcard(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    if all(_missing(data.get(k)) for k in ("firstName", "lastName", "organization")):
        raise QRValidationError("At least one of firstName, lastName, or organization is required")
    _optional_email(data, "email", "Invalid email format")
    _optional_url(data, "website", "Invalid website URL")
    if _missing(data.get("phone")) and _missing(data.get("mobile")) and _missing(data.get("email")):
        warnings.append("Contact has no phone number or email address")


def _check_apps(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    stores = {
        "appStoreUrl": "Invalid App Store URL",
        "playStoreUrl": "Invalid Play Store URL",
        "windowsStoreUrl": "Invalid Windows Store URL",
        "customUrl": "Invalid custom URL",
    }
    if all(_missing(data.get(k)) for k in stores):
        raise QRValidationError("At least one app store URL is required")
    for key, message in stores.items():
        _optional_url(data, key, message)


def _check_links_list(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    links = _require_list(data, "links", "At least one link is required")
    for index, raw in enumerate(links):
        link = _entry(raw)
        if _missing(link.get("title")):
            raise QRValidationError(f"Link {index + 1} title is required", f"links[{index}].title")
        if _missing(link.get("url")):
            raise QRValidationError(f"Link {index + 1} URL is required", f"links[{index}].url")
        if not is_valid_url(link.get("url")):
            raise QRValidationError(f"Invalid URL format for link {index + 1}", f"links[{index}].url")


def _check_coupon(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require(data, "code", "Coupon code is required")
    valid_until = data.get("validUntil")
    if not _missing(valid_until) and not is_valid_date(valid_until):
        raise QRValidationError("Invalid date format for validUntil", "validUntil")


def _check_facebook(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    url = _require(data, "pageUrl", "Facebook page URL is required")
    if not is_valid_url(url) or "facebook.com" not in url:
        raise QRValidationError("Invalid Facebook URL", "pageUrl")


def _check_instagram(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    url = _require(data, "profileUrl", "Instagram profile URL is required")
    if not is_valid_url(url) or "instagram.com" not in url:
        raise QRValidationError("Invalid Instagram URL", "profileUrl")


def _check_social_media(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    networks = [k for k, v in data.items() if k != "type" and not _missing(v)]
    if not networks:
        raise QRValidationError("At least one social media link is required")
    for network in networks:
        if not is_valid_url(data[network]):
            raise QRValidationError(f"Invalid URL for {network}", network)


def _check_whatsapp(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_phone(data)
    if not str(data["phoneNumber"]).lstrip().startswith("+"):
        warnings.append("WhatsApp numbers should include the country code")


def _check_text(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    text = data.get("text")
    if not isinstance(text, str) or text == "":
        raise QRValidationError("Text content is required", "text")
    if len(text) > config.max_text_length:
        raise QRValidationError(
            f"Text is too long (max {config.max_text_length} characters)", "text"
        )


def _check_email(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    to = _require(data, "to", "Recipient email is required")
    if not is_valid_email(to):
        raise QRValidationError("Invalid email format", "to")
    _optional_email(data, "cc", "Invalid CC email format")
    _optional_email(data, "bcc", "Invalid BCC email format")


def _check_sms(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_phone(data)


def _check_phone(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require_phone(data)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    # int has no inf/nan and may exceed float range
    return isinstance(value, int) or (isinstance(value, float) and math.isfinite(value))


def _check_location(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    latitude = data.get("latitude")
    longitude = data.get("longitude")
    if not _is_number(latitude):
        raise QRValidationError("Latitude must be a number", "latitude")
    if not _is_number(longitude):
        raise QRValidationError("Longitude must be a number", "longitude")
    if latitude < -90 or latitude > 90:
        raise QRValidationError("Latitude must be between -90 and 90", "latitude")
    if longitude < -180 or longitude > 180:
        raise QRValidationError("Longitude must be between -180 and 180", "longitude")


def _check_event(data: Mapping[str, Any], warnings: List[str], config: CoreConfig) -> None:
    _require(data, "title", "Event title is required")
    _require(data, "startDate", "Start date is required")
    start = parse_date(data.get("startDate"))
    if start is None:
        raise QRValidationError("Invalid start date format", "startDate")
    if _missing(data.get("endDate")):
        return
    end = parse_date(data.get("endDate"))
    if end is None:
        raise QRValidationError("Invalid end date format", "endDate")
    if end < start:
        raise QRValidationError("End date must be after start date", "endDate")


QR_VALIDATORS: Final[Dict[PayloadType, _Check]] = {
    PayloadType.WEBSITE: _check_website,
    PayloadType.PDF: _check_pdf,
    PayloadType.IMAGES: _check_images,
    PayloadType.VIDEO: _check_video,
    PayloadType.WIFI: _check_wifi,
    PayloadType.MENU: _check_menu,
    PayloadType.BUSINESS: _check_business,
    PayloadType.VCARD: _check_vcard,
    PayloadType.MP3: _check_mp3,
    PayloadType.APPS: _check_apps,
    PayloadType.LINKS_LIST: _check_links_list,
    PayloadType.COUPON: _check_coupon,
    PayloadType.FACEBOOK: _check_facebook,
    PayloadType.INSTAGRAM: _check_instagram,
    PayloadType.SOCIAL_MEDIA: _check_social_media,
    PayloadType.WHATSAPP: _check_whatsapp,
    PayloadType.TEXT: _check_text,
    PayloadType.EMAIL: _check_email,
    PayloadType.SMS: _check_sms,
    PayloadType.PHONE: _check_phone,
    PayloadType.LOCATION: _check_location,
    PayloadType.EVENT: _check_event,
}


# ==============================================================================
# Public surfaces
# ==============================================================================


def validate_qr_payload(
    payload_type: Any,
    data: Any,
    config: Optional[CoreConfig] = None,
) -> List[str]:
    """
    Validate a payload, raising on the first violated rule.

    Args:
        payload_type: PayloadType member, value or name.
        data: Payload mapping.
        config: Core configuration (text length limit).

    Returns:
        Non-blocking warnings (possibly empty).

    Raises:
        UnknownTypeError: payload_type is outside the enumeration.
        QRValidationError: first violated rule, with the offending field path.
    """
    ptype = PayloadType.coerce(payload_type)
    if not isinstance(data, Mapping):
        raise QRValidationError("Payload must be an object")
    warnings: List[str] = []
    QR_VALIDATORS[ptype](data, warnings, config or DEFAULT_CONFIG)
    return warnings


def qr_validation_result(
    payload_type: Any,
    data: Any,
    config: Optional[CoreConfig] = None,
) -> ValidationResult:
    """
    Non-throwing variant returning a ValidationResult.

    ``UnknownTypeError`` still propagates: an unknown type is a programming
    error, not bad user input.
    """
    try:
        warnings = validate_qr_payload(payload_type, data, config)
    except QRValidationError as e:
        logger.debug("QR payload rejected: %s", e)
        return ValidationResult.failure(e.message, field=e.field)
    return ValidationResult.ok(warnings)


def validate_qr_data(payload_type: Any, data: Any) -> bool:
    """Yes/no check; unknown types are simply invalid."""
    try:
        validate_qr_payload(payload_type, data)
    except (QRValidationError, UnknownTypeError):
        return False
    return True
