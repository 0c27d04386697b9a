"""
Content-type detection of decoded QR strings.

Prefix rules are tried in order and the first match wins; matching is
case-insensitive. Anything unrecognised is TEXT.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Final, List, Optional, Tuple

from codecraft.model.enums import PayloadType

logger = logging.getLogger(__name__)

__all__ = ["detect_type", "JSON_TYPE_TAGS", "json_type_tag"]

# "type" tags written by the formatter's JSON blobs
JSON_TYPE_TAGS: Final[Dict[str, PayloadType]] = {
    "menu": PayloadType.MENU,
    "business": PayloadType.BUSINESS,
    "images": PayloadType.IMAGES,
    "apps": PayloadType.APPS,
    "links": PayloadType.LINKS_LIST,
    "coupon": PayloadType.COUPON,
    "mp3": PayloadType.MP3,
    "social_media": PayloadType.SOCIAL_MEDIA,
}

_PREFIX_RULES: Final[List[Tuple[re.Pattern[str], PayloadType]]] = [
    (re.compile(r"^https://wa\.me/", re.IGNORECASE), PayloadType.WHATSAPP),
    (re.compile(r"^https?://", re.IGNORECASE), PayloadType.WEBSITE),
    (re.compile(r"^WIFI:", re.IGNORECASE), PayloadType.WIFI),
    (re.compile(r"^BEGIN:VCARD", re.IGNORECASE), PayloadType.VCARD),
    (re.compile(r"^mailto:", re.IGNORECASE), PayloadType.EMAIL),
    (re.compile(r"^tel:", re.IGNORECASE), PayloadType.PHONE),
    (re.compile(r"^sms:", re.IGNORECASE), PayloadType.SMS),
    (re.compile(r"^geo:", re.IGNORECASE), PayloadType.LOCATION),
    (re.compile(r"^BEGIN:(VEVENT|VCALENDAR)", re.IGNORECASE), PayloadType.EVENT),
]

_VIDEO_HOSTS: Final[Tuple[str, ...]] = ("youtube.com", "youtu.be")


def _refine_url(url: str) -> PayloadType:
    lowered = url.lower()
    if any(host in lowered for host in _VIDEO_HOSTS):
        return PayloadType.VIDEO
    if "facebook.com" in lowered:
        return PayloadType.FACEBOOK
    if "instagram.com" in lowered:
        return PayloadType.INSTAGRAM
    if ".pdf" in lowered:
        return PayloadType.PDF
    return PayloadType.WEBSITE


def json_type_tag(raw: str) -> Optional[PayloadType]:
    """Payload type named by a JSON object's ``type`` tag, if any."""
    stripped = raw.strip()
    if not stripped.startswith("{"):
        return None
    try:
        doc = json.loads(stripped)
    except (ValueError, RecursionError):
        return None
    if not isinstance(doc, dict):
        return None
    tag = doc.get("type")
    return JSON_TYPE_TAGS.get(tag) if isinstance(tag, str) else None


def detect_type(raw: Any) -> PayloadType:
    """
    Classify a decoded QR string.

    Args:
        raw: Decoded QR content. Non-string input is TEXT.

    Returns:
        Detected PayloadType.

    Example:
        >>> detect_type("https://youtu.be/dQw4w9WgXcQ")
        <PayloadType.VIDEO: 'video'>
        >>> detect_type("WIFI:T:WPA;S:Home;P:secret;H:false;;")
        <PayloadType.WIFI: 'wifi'>
    """
    if not isinstance(raw, str):
        return PayloadType.TEXT
    for pattern, ptype in _PREFIX_RULES:
        if pattern.match(raw):
            if ptype is PayloadType.WEBSITE:
                ptype = _refine_url(raw)
            logger.debug("Detected %s content", ptype.value)
            return ptype
    tagged = json_type_tag(raw)
    if tagged is not None:
        logger.debug("Detected %s JSON blob", tagged.value)
        return tagged
    return PayloadType.TEXT
