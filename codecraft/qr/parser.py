"""
parser.py: best-effort decoding of scanned QR strings back into payload
fields.

The decoder is the inverse of the formatter for every type the formatter
produces, and tolerant of third-party variants (WiFi fields in any order,
folded vCard/iCalendar lines, ``;PARAM=`` property parameters). It never
raises: content it cannot interpret comes back as ``{"text": raw}``.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Final, List, Optional, Tuple
from urllib.parse import parse_qsl, unquote

from codecraft.model.enums import PayloadType
from codecraft.model.results import DecodedPayload

from .detector import detect_type

logger = logging.getLogger(__name__)

__all__ = [
    "parse_qr_data",
    "parse_wifi",
    "parse_content_lines",
]

_Parser = Callable[[str], Dict[str, Any]]

_ICAL_DATETIME_RE: Final = re.compile(r"^(\d{8})(?:T(\d{6})(Z)?)?$")


def _compact(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None and v != ""}


def _after_scheme(raw: str) -> str:
    return raw.split(":", 1)[1] if ":" in raw else ""


def _split_query(rest: str) -> Tuple[str, Dict[str, str]]:
    target, _, query = rest.partition("?")
    params: Dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key.lower(), value)
    return unquote(target), params


# ==============================================================================
# URI schemes
# ==============================================================================


def _parse_url(raw: str) -> Dict[str, Any]:
    return {"url": raw}


def _parse_facebook(raw: str) -> Dict[str, Any]:
    return {"pageUrl": raw}


def _parse_instagram(raw: str) -> Dict[str, Any]:
    return {"profileUrl": raw}


def _parse_email(raw: str) -> Dict[str, Any]:
    to, params = _split_query(_after_scheme(raw))
    return _compact(
        {
            "to": to,
            "subject": params.get("subject"),
            "body": params.get("body"),
            "cc": params.get("cc"),
            "bcc": params.get("bcc"),
        }
    )


def _parse_phone(raw: str) -> Dict[str, Any]:
    return _compact({"phoneNumber": unquote(_after_scheme(raw)).strip()})


def _parse_sms(raw: str) -> Dict[str, Any]:
    number, params = _split_query(_after_scheme(raw))
    return _compact({"phoneNumber": number, "message": params.get("body")})


def _parse_whatsapp(raw: str) -> Dict[str, Any]:
    start = raw.lower().find("wa.me/")
    number, params = _split_query(raw[start + len("wa.me/"):] if start >= 0 else "")
    digits = re.sub(r"[^0-9]", "", number)
    return _compact({"phoneNumber": f"+{digits}" if digits else None, "message": params.get("text")})


def _coordinate(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def _parse_location(raw: str) -> Dict[str, Any]:
    coords, params = _split_query(_after_scheme(raw))
    # geo URIs may carry ";crs=" / ";u=" parameters and an altitude
    parts = coords.split(";", 1)[0].split(",")
    if len(parts) < 2:
        return {"text": raw}
    latitude = _coordinate(parts[0])
    longitude = _coordinate(parts[1])
    if latitude is None or longitude is None:
        return {"text": raw}
    return _compact({"latitude": latitude, "longitude": longitude, "address": params.get("q")})


# ==============================================================================
# WIFI
# ==============================================================================


def _split_unescaped(text: str, separator: str, limit: int = -1) -> List[str]:
    parts: List[str] = []
    current: List[str] = []
    escaped = False
    for ch in text:
        if escaped:
            current.append("\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == separator and limit != 0:
            parts.append("".join(current))
            current = []
            limit -= 1
        else:
            current.append(ch)
    if escaped:
        current.append("\\")
    parts.append("".join(current))
    return parts


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)


def parse_wifi(raw: str) -> Dict[str, Any]:
    """
    Parse ``WIFI:T:..;S:..;P:..;H:..;;`` in any field order.

    Example:
        >>> parse_wifi(r"WIFI:S:Cafe\\;Bar;T:WPA2;P:pa\\:ss;;")
        {'ssid': 'Cafe;Bar', 'security': 'WPA2', 'password': 'pa:ss'}
    """
    body = raw[len("WIFI:"):] if raw[:5].upper() == "WIFI:" else raw
    result: Dict[str, Any] = {}
    for field in _split_unescaped(body, ";"):
        if not field:
            continue
        key, sep, value = _partition_field(field)
        if not sep:
            continue
        value = _unescape(value)
        key = key.upper()
        if key == "T":
            result["security"] = value or None
        elif key == "S":
            result["ssid"] = value
        elif key == "P":
            result["password"] = value
        elif key == "H":
            result["hidden"] = value.lower() == "true"
    return _compact(result)


def _partition_field(field: str) -> Tuple[str, str, str]:
    parts = _split_unescaped(field, ":", limit=1)
    if len(parts) == 1:
        return parts[0], "", ""
    return parts[0], ":", parts[1]


# ==============================================================================
# vCard / iCalendar
# ==============================================================================


def parse_content_lines(raw: str) -> List[Tuple[str, Dict[str, str], str]]:
    """
    Split a vCard/iCalendar block into ``(NAME, params, value)`` triples.

    Continuation lines (starting with a space or tab) are unfolded first.
    Parameter names are upper-cased; bare parameters (``TEL;CELL:``) are
    recorded as ``TYPE``.
    """
    unfolded: List[str] = []
    for line in re.split(r"\r\n|\r|\n", raw):
        if line[:1] in (" ", "\t") and unfolded:
            unfolded[-1] += line[1:]
        elif line:
            unfolded.append(line)

    entries: List[Tuple[str, Dict[str, str], str]] = []
    for line in unfolded:
        head, sep, value = line.partition(":")
        if not sep:
            continue
        name, *raw_params = head.split(";")
        params: Dict[str, str] = {}
        for param in raw_params:
            p_name, p_sep, p_value = param.partition("=")
            if p_sep:
                params[p_name.upper()] = p_value
            else:
                params["TYPE"] = param
        # vCard 2.1/3.0 group prefixes ("item1.EMAIL")
        entries.append((name.rsplit(".", 1)[-1].upper(), params, value))
    return entries


def _unescape_text(value: str) -> str:
    return re.sub(r"\\(.)", lambda m: "\n" if m.group(1) in "nN" else m.group(1), value)


def _parse_vcard(raw: str) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    structured_name: Optional[List[str]] = None
    formatted_name = ""
    for name, params, value in parse_content_lines(raw):
        if name == "N":
            structured_name = [_unescape_text(part) for part in _split_unescaped(value, ";")]
        elif name == "FN":
            formatted_name = _unescape_text(value)
        elif name == "ORG":
            result.setdefault("organization", _unescape_text(_split_unescaped(value, ";")[0]))
        elif name == "TITLE":
            result.setdefault("title", _unescape_text(value))
        elif name == "TEL":
            key = "mobile" if "CELL" in params.get("TYPE", "").upper() else "phone"
            result.setdefault(key, value)
        elif name == "EMAIL":
            result.setdefault("email", value)
        elif name == "URL":
            result.setdefault("website", value)
        elif name == "ADR":
            street = [_unescape_text(part) for part in _split_unescaped(value, ";") if part]
            result.setdefault("address", ", ".join(street))
        elif name == "NOTE":
            result.setdefault("note", _unescape_text(value))
    if structured_name is not None:
        result["lastName"] = structured_name[0]
        if len(structured_name) > 1:
            result["firstName"] = structured_name[1]
    elif formatted_name:
        first, _, last = formatted_name.partition(" ")
        result["firstName"], result["lastName"] = first, last
    return _compact(result)


def _parse_ical_datetime(value: str) -> Optional[str]:
    match = _ICAL_DATETIME_RE.match(value.strip())
    if match is None:
        return None
    day, clock, utc = match.groups()
    parsed = datetime.strptime(day + (clock or "000000"), "%Y%m%d%H%M%S")
    if utc:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat()


def _parse_event(raw: str) -> Dict[str, Any]:
    text_properties = {
        "SUMMARY": "title",
        "LOCATION": "location",
        "DESCRIPTION": "description",
    }
    result: Dict[str, Any] = {}
    in_event = not re.match(r"^BEGIN:VCALENDAR", raw, re.IGNORECASE)
    for name, _params, value in parse_content_lines(raw):
        if name == "BEGIN" and value.upper() == "VEVENT":
            in_event = True
            continue
        if name == "END" and value.upper() == "VEVENT":
            break
        if not in_event:
            continue
        if name in text_properties:
            result.setdefault(text_properties[name], _unescape_text(value))
        elif name == "URL":
            result.setdefault("url", value)
        elif name == "DTSTART":
            result.setdefault("startDate", _parse_ical_datetime(value))
        elif name == "DTEND":
            result.setdefault("endDate", _parse_ical_datetime(value))
    return _compact(result)


# ==============================================================================
# JSON blobs
# ==============================================================================


def _load_object(raw: str) -> Dict[str, Any]:
    try:
        doc = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return doc if isinstance(doc, dict) else {}


def _parse_menu(raw: str) -> Dict[str, Any]:
    doc = _load_object(raw)
    return _compact(
        {
            "restaurantName": doc.get("restaurant"),
            "currency": doc.get("currency"),
            "categories": doc.get("categories"),
        }
    )


def _parse_apps(raw: str) -> Dict[str, Any]:
    doc = _load_object(raw)
    stores = doc.get("stores") if isinstance(doc.get("stores"), dict) else {}
    return _compact(
        {
            "appName": doc.get("appName"),
            "description": doc.get("description"),
            "appStoreUrl": stores.get("appStore"),
            "playStoreUrl": stores.get("playStore"),
            "windowsStoreUrl": stores.get("windowsStore"),
            "customUrl": stores.get("custom"),
        }
    )


def _parse_tagged_blob(raw: str) -> Dict[str, Any]:
    doc = _load_object(raw)
    return _compact({k: v for k, v in doc.items() if k != "type"})


_PARSERS: Final[Dict[PayloadType, _Parser]] = {
    PayloadType.WEBSITE: _parse_url,
    PayloadType.PDF: _parse_url,
    PayloadType.VIDEO: _parse_url,
    PayloadType.FACEBOOK: _parse_facebook,
    PayloadType.INSTAGRAM: _parse_instagram,
    PayloadType.WHATSAPP: _parse_whatsapp,
    PayloadType.EMAIL: _parse_email,
    PayloadType.PHONE: _parse_phone,
    PayloadType.SMS: _parse_sms,
    PayloadType.LOCATION: _parse_location,
    PayloadType.WIFI: parse_wifi,
    PayloadType.VCARD: _parse_vcard,
    PayloadType.EVENT: _parse_event,
    PayloadType.MENU: _parse_menu,
    PayloadType.APPS: _parse_apps,
    PayloadType.BUSINESS: _parse_tagged_blob,
    PayloadType.IMAGES: _parse_tagged_blob,
    PayloadType.LINKS_LIST: _parse_tagged_blob,
    PayloadType.COUPON: _parse_tagged_blob,
    PayloadType.MP3: _parse_tagged_blob,
    PayloadType.SOCIAL_MEDIA: _parse_tagged_blob,
}


def parse_qr_data(raw: Any) -> DecodedPayload:
    """
    Decode scanned QR content into its type and best-effort fields.

    Args:
        raw: Decoded QR string.

    Returns:
        DecodedPayload; unrecognised content has ``parsed_data == {"text": raw}``.

    Example:
        >>> parse_qr_data("tel:+15551234567").parsed_data
        {'phoneNumber': '+15551234567'}
    """
    content = raw if isinstance(raw, str) else ("" if raw is None else str(raw))
    ptype = detect_type(content)
    parser = _PARSERS.get(ptype)
    if parser is None:
        return DecodedPayload(content, ptype, {"text": content})
    try:
        parsed = parser(content)
    except (ValueError, TypeError, IndexError) as e:
        logger.warning("Could not parse %s content: %s", ptype.value, e)
        parsed = {}
    if not parsed:
        parsed = {"text": content}
    logger.debug("Decoded %s content into %d fields", ptype.value, len(parsed))
    return DecodedPayload(content, ptype, parsed)
