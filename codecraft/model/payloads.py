"""
Payload attribute sets, one TypedDict per QR payload type.

Keys are camelCase because payloads arrive as JSON from the UI/camera layers.
Extra keys are allowed everywhere: the formatter ignores them and the
validators never reject them.

Note: this module intentionally avoids ``from __future__ import annotations``
so that ``Required[...]`` markers are visible in ``__required_keys__``.
"""

from typing import Any, Dict, List, Mapping, Required, Type, TypedDict, Union

from .enums import PayloadType


class ImageEntry(TypedDict, total=False):
    url: Required[str]
    caption: str


class MenuItem(TypedDict, total=False):
    name: Required[str]
    price: Required[Union[str, float, int]]
    description: str
    image: str


class MenuCategory(TypedDict, total=False):
    name: Required[str]
    items: Required[List[MenuItem]]


class LinkEntry(TypedDict, total=False):
    title: Required[str]
    url: Required[str]
    icon: str


class WebsitePayload(TypedDict, total=False):
    url: Required[str]
    title: str
    description: str


class PDFPayload(TypedDict, total=False):
    url: Required[str]
    title: str
    description: str


class ImagesPayload(TypedDict, total=False):
    images: Required[List[ImageEntry]]
    title: str
    description: str


class VideoPayload(TypedDict, total=False):
    url: Required[str]
    title: str
    description: str
    thumbnail: str


class WiFiPayload(TypedDict, total=False):
    ssid: Required[str]
    security: Required[str]  # WEP | WPA | WPA2 | WPA3 | nopass
    password: str
    hidden: bool


class MenuPayload(TypedDict, total=False):
    restaurantName: Required[str]
    categories: Required[List[MenuCategory]]
    currency: str


class BusinessPayload(TypedDict, total=False):
    name: Required[str]
    industry: str
    phone: str
    email: str
    website: str
    address: str
    description: str
    hours: str
    logo: str


class VCardPayload(TypedDict, total=False):
    # At least one of firstName / lastName / organization
    firstName: str
    lastName: str
    organization: str
    title: str
    phone: str
    mobile: str
    email: str
    website: str
    address: str
    note: str


class MP3Payload(TypedDict, total=False):
    url: Required[str]
    title: str
    artist: str
    album: str
    coverArt: str


class AppsPayload(TypedDict, total=False):
    # At least one store URL
    appStoreUrl: str
    playStoreUrl: str
    windowsStoreUrl: str
    customUrl: str
    appName: str
    description: str
    icon: str


class LinksListPayload(TypedDict, total=False):
    links: Required[List[LinkEntry]]
    title: str


class CouponPayload(TypedDict, total=False):
    code: Required[str]
    description: str
    discount: str
    validUntil: str
    terms: str
    logo: str


class FacebookPayload(TypedDict, total=False):
    pageUrl: Required[str]
    pageName: str


class InstagramPayload(TypedDict, total=False):
    profileUrl: Required[str]
    username: str


class SocialMediaPayload(TypedDict, total=False):
    # Any other network key is accepted as well
    facebook: str
    instagram: str
    twitter: str
    linkedin: str
    youtube: str
    tiktok: str
    pinterest: str
    snapchat: str
    reddit: str


class WhatsAppPayload(TypedDict, total=False):
    phoneNumber: Required[str]
    message: str


class TextPayload(TypedDict, total=False):
    text: Required[str]


class EmailPayload(TypedDict, total=False):
    to: Required[str]
    subject: str
    body: str
    cc: str
    bcc: str


class SMSPayload(TypedDict, total=False):
    phoneNumber: Required[str]
    message: str


class PhonePayload(TypedDict, total=False):
    phoneNumber: Required[str]


class LocationPayload(TypedDict, total=False):
    latitude: Required[float]
    longitude: Required[float]
    address: str
    name: str


class EventPayload(TypedDict, total=False):
    title: Required[str]
    startDate: Required[str]
    endDate: str
    location: str
    description: str
    url: str


Payload = Mapping[str, Any]

PAYLOAD_SCHEMAS: Dict[PayloadType, Type[Any]] = {
    PayloadType.WEBSITE: WebsitePayload,
    PayloadType.PDF: PDFPayload,
    PayloadType.IMAGES: ImagesPayload,
    PayloadType.VIDEO: VideoPayload,
    PayloadType.WIFI: WiFiPayload,
    PayloadType.MENU: MenuPayload,
    PayloadType.BUSINESS: BusinessPayload,
    PayloadType.VCARD: VCardPayload,
    PayloadType.MP3: MP3Payload,
    PayloadType.APPS: AppsPayload,
    PayloadType.LINKS_LIST: LinksListPayload,
    PayloadType.COUPON: CouponPayload,
    PayloadType.FACEBOOK: FacebookPayload,
    PayloadType.INSTAGRAM: InstagramPayload,
    PayloadType.SOCIAL_MEDIA: SocialMediaPayload,
    PayloadType.WHATSAPP: WhatsAppPayload,
    PayloadType.TEXT: TextPayload,
    PayloadType.EMAIL: EmailPayload,
    PayloadType.SMS: SMSPayload,
    PayloadType.PHONE: PhonePayload,
    PayloadType.LOCATION: LocationPayload,
    PayloadType.EVENT: EventPayload,
}


def payload_fields(payload_type: PayloadType) -> Dict[str, bool]:
    """
    Field name -> required flag, in declaration order.

    Used by form builders to render inputs and required markers.

    Example:
        >>> payload_fields(PayloadType.WIFI)
        {'ssid': True, 'security': True, 'password': False, 'hidden': False}
    """
    schema = PAYLOAD_SCHEMAS[payload_type]
    required = schema.__required_keys__
    return {name: name in required for name in schema.__annotations__}


__all__ = [
    "Payload",
    "PAYLOAD_SCHEMAS",
    "payload_fields",
    "ImageEntry",
    "MenuItem",
    "MenuCategory",
    "LinkEntry",
    "WebsitePayload",
    "PDFPayload",
    "ImagesPayload",
    "VideoPayload",
    "WiFiPayload",
    "MenuPayload",
    "BusinessPayload",
    "VCardPayload",
    "MP3Payload",
    "AppsPayload",
    "LinksListPayload",
    "CouponPayload",
    "FacebookPayload",
    "InstagramPayload",
    "SocialMediaPayload",
    "WhatsAppPayload",
    "TextPayload",
    "EmailPayload",
    "SMSPayload",
    "PhonePayload",
    "LocationPayload",
    "EventPayload",
]
