"""
QR payload formatter: structured payload -> canonical encoded string.

Standard conventions are reproduced exactly where one exists (``mailto:``,
``tel:``, ``sms:``, ``geo:``, ``WIFI:``, vCard 3.0, iCalendar); the remaining
types use this library's own compact JSON schema tagged with ``"type"``.

The formatter trusts its input: run ``validate_qr_payload`` first. It never
embeds timestamps or random values, so equal input gives equal output.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import timezone
from typing import Any, Callable, Dict, Final, List, Mapping, Optional
from urllib.parse import quote

from codecraft.config import DEFAULT_CONFIG, CoreConfig
from codecraft.exceptions import UnknownTypeError
from codecraft.model.enums import PayloadType, WifiSecurity

from .validators import parse_date

logger = logging.getLogger(__name__)

__all__ = [
    "format_qr_data",
    "encode_uri_component",
    "escape_wifi_value",
    "escape_text",
    "format_ical_datetime",
    "to_json",
]

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_SAFE: Final[str] = "-_.!~*'()"
_WIFI_SPECIAL_RE: Final = re.compile(r'([\\;,:"])')
_TEXT_SPECIAL_RE: Final = re.compile(r"\r\n|[\\;,\r\n]")
_TEXT_ESCAPES: Final[Dict[str, str]] = {
    "\\": "\\\\",
    ";": "\\;",
    ",": "\\,",
    "\r\n": "\\n",
    "\r": "\\n",
    "\n": "\\n",
}

_Formatter = Callable[[Mapping[str, Any], CoreConfig, bool], str]


# ==============================================================================
# Helpers
# ==============================================================================


def encode_uri_component(value: Any) -> str:
    """Percent-encode like JavaScript's ``encodeURIComponent``."""
    return quote(_text(value), safe=_URI_SAFE)


def escape_wifi_value(value: Any) -> str:
    r"""Backslash-escape ``\ ; , : "`` as the WiFi QR convention requires."""
    return _WIFI_SPECIAL_RE.sub(r"\\\1", _text(value))


def escape_text(value: Any) -> str:
    r"""vCard/iCalendar TEXT escaping: ``\`` ``;`` ``,`` and line breaks."""
    return _TEXT_SPECIAL_RE.sub(lambda m: _TEXT_ESCAPES[m.group(0)], _text(value))


def format_ical_datetime(value: Any) -> str:
    """
    UTC basic format ``YYYYMMDDTHHMMSSZ``; naive values are taken as UTC.

    Returns an empty string for values that are not dates.

    Example:
        >>> format_ical_datetime("2024-03-15T10:30:00+02:00")
        '20240315T083000Z'
    """
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def to_json(data: Mapping[str, Any]) -> str:
    """Compact JSON, non-ASCII kept, ``None`` values dropped at the top level."""
    return json.dumps(
        {k: v for k, v in data.items() if v is not None},
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _number(value: Any) -> str:
    # Integral floats print without ".0", matching JS number formatting
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _text(value)


def _query(params: List[tuple[str, Any]]) -> str:
    parts = [f"{key}={encode_uri_component(value)}" for key, value in params if value]
    return "?" + "&".join(parts) if parts else ""


# ==============================================================================
# URI-scheme and text-block types
# ==============================================================================


def _format_url(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return _text(data.get("url"))


def _format_text(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return _text(data.get("text"))


def _format_email(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    params = [(key, data.get(key)) for key in ("subject", "body", "cc", "bcc")]
    return f"mailto:{_text(data.get('to'))}{_query(params)}"


def _format_phone(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return f"tel:{_text(data.get('phoneNumber'))}"


def _format_sms(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return f"sms:{_text(data.get('phoneNumber'))}{_query([('body', data.get('message'))])}"


def _format_whatsapp(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    digits = re.sub(r"[^0-9]", "", _text(data.get("phoneNumber")))
    return f"https://wa.me/{digits}{_query([('text', data.get('message'))])}"


def _format_location(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    geo = f"geo:{_number(data.get('latitude'))},{_number(data.get('longitude'))}"
    return geo + _query([("q", data.get("address"))])


def _format_wifi(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    security = _text(data.get("security")) or WifiSecurity.WPA.value
    password = "" if security == WifiSecurity.NOPASS.value else escape_wifi_value(data.get("password"))
    hidden = "true" if data.get("hidden") else "false"
    return (
        f"WIFI:T:{security};S:{escape_wifi_value(data.get('ssid'))};"
        f"P:{password};H:{hidden};;"
    )


def _format_vcard(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    first = _text(data.get("firstName"))
    last = _text(data.get("lastName"))
    lines = ["BEGIN:VCARD", "VERSION:3.0"]
    if first or last:
        lines.append("FN:" + escape_text(" ".join(part for part in (first, last) if part)))
        lines.append(f"N:{escape_text(last)};{escape_text(first)};;;")
    # (key, template, TEXT-valued)
    optional = (
        ("organization", "ORG:{}", True),
        ("title", "TITLE:{}", True),
        ("phone", "TEL:{}", False),
        ("mobile", "TEL;TYPE=CELL:{}", False),
        ("email", "EMAIL:{}", False),
        ("website", "URL:{}", False),
        ("address", "ADR:;;{};;;;", True),
        ("note", "NOTE:{}", True),
    )
    for key, template, is_text in optional:
        if data.get(key):
            value = escape_text(data[key]) if is_text else _text(data[key])
            lines.append(template.format(value))
    lines.append("END:VCARD")
    return "\n".join(lines)


def _format_event(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{config.calendar_prodid}",
        "BEGIN:VEVENT",
        f"DTSTART:{format_ical_datetime(data.get('startDate'))}",
    ]
    if data.get("endDate"):
        lines.append(f"DTEND:{format_ical_datetime(data['endDate'])}")
    lines.append(f"SUMMARY:{escape_text(data.get('title'))}")
    for key, prop in (("location", "LOCATION"), ("description", "DESCRIPTION")):
        if data.get(key):
            lines.append(f"{prop}:{escape_text(data[key])}")
    if data.get("url"):
        lines.append(f"URL:{_text(data['url'])}")
    lines.extend(["END:VEVENT", "END:VCALENDAR"])
    return "\n".join(lines)


def _format_facebook(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return _text(data.get("pageUrl"))


def _format_instagram(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return _text(data.get("profileUrl"))


# ==============================================================================
# JSON-blob types
# ==============================================================================


def _format_menu(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return to_json(
        {
            "type": "menu",
            "restaurant": data.get("restaurantName"),
            "currency": data.get("currency") or config.default_currency,
            "categories": data.get("categories"),
        }
    )


def _format_business(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    keys = ("name", "industry", "phone", "email", "website", "address", "hours", "description")
    return to_json({"type": "business", **{k: data.get(k) for k in keys}})


def _format_images(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return to_json(
        {
            "type": "images",
            "title": data.get("title"),
            "description": data.get("description"),
            "images": data.get("images"),
        }
    )


def _format_apps(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    for key in ("customUrl", "appStoreUrl", "playStoreUrl", "windowsStoreUrl"):
        if data.get(key) and not prefer_json:
            return _text(data[key])
    stores = {
        "appStore": data.get("appStoreUrl"),
        "playStore": data.get("playStoreUrl"),
        "windowsStore": data.get("windowsStoreUrl"),
        "custom": data.get("customUrl"),
    }
    return to_json(
        {
            "type": "apps",
            "appName": data.get("appName"),
            "description": data.get("description"),
            "stores": {k: v for k, v in stores.items() if v is not None},
        }
    )


def _format_links_list(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    return to_json({"type": "links", "title": data.get("title"), "links": data.get("links")})


def _format_coupon(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    keys = ("code", "description", "discount", "validUntil", "terms")
    return to_json({"type": "coupon", **{k: data.get(k) for k in keys}})


def _format_mp3(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    if not prefer_json:
        return _text(data.get("url"))
    keys = ("url", "title", "artist", "album", "coverArt")
    return to_json({"type": "mp3", **{k: data.get(k) for k in keys}})


def _format_social_media(data: Mapping[str, Any], config: CoreConfig, prefer_json: bool) -> str:
    networks = {k: v for k, v in data.items() if k != "type" and v}
    if prefer_json or not networks:
        return to_json({"type": "social_media", **networks})
    return "\n".join(f"{network}: {_text(url)}" for network, url in networks.items())


_FORMATTERS: Final[Dict[PayloadType, _Formatter]] = {
    PayloadType.WEBSITE: _format_url,
    PayloadType.PDF: _format_url,
    PayloadType.VIDEO: _format_url,
    PayloadType.MP3: _format_mp3,
    PayloadType.FACEBOOK: _format_facebook,
    PayloadType.INSTAGRAM: _format_instagram,
    PayloadType.TEXT: _format_text,
    PayloadType.EMAIL: _format_email,
    PayloadType.PHONE: _format_phone,
    PayloadType.SMS: _format_sms,
    PayloadType.WHATSAPP: _format_whatsapp,
    PayloadType.LOCATION: _format_location,
    PayloadType.WIFI: _format_wifi,
    PayloadType.VCARD: _format_vcard,
    PayloadType.EVENT: _format_event,
    PayloadType.MENU: _format_menu,
    PayloadType.BUSINESS: _format_business,
    PayloadType.IMAGES: _format_images,
    PayloadType.APPS: _format_apps,
    PayloadType.LINKS_LIST: _format_links_list,
    PayloadType.COUPON: _format_coupon,
    PayloadType.SOCIAL_MEDIA: _format_social_media,
}


def format_qr_data(
    payload_type: Any,
    data: Mapping[str, Any],
    *,
    prefer_json: Optional[bool] = None,
    config: Optional[CoreConfig] = None,
) -> str:
    """
    Encode a payload into the string embedded in the QR symbol.

    Args:
        payload_type: PayloadType member, value or name.
        data: Payload mapping (extra keys are ignored).
        prefer_json: Encode MP3/SOCIAL_MEDIA (and APPS with store URLs) as
            JSON blobs. Defaults to ``config.prefer_json``.
        config: Core configuration.

    Returns:
        Encoded string. Unknown types fall back to compact JSON of ``data``.

    Example:
        >>> format_qr_data("wifi", {"ssid": "MyNetwork", "password": "password123",
        ...                         "security": "WPA", "hidden": False})
        'WIFI:T:WPA;S:MyNetwork;P:password123;H:false;;'
    """
    cfg = config or DEFAULT_CONFIG
    as_json = cfg.prefer_json if prefer_json is None else prefer_json
    try:
        ptype = PayloadType.coerce(payload_type)
    except UnknownTypeError:
        logger.debug("No formatter for %r, falling back to JSON", payload_type)
        if isinstance(data, Mapping):
            return to_json(data)
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)
    encoded = _FORMATTERS[ptype](data, cfg, as_json)
    logger.debug("Encoded %s payload into %d characters", ptype.value, len(encoded))
    return encoded
