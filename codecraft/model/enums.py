"""
model/enums.py

(Краткое RU: Перечисления типов QR-нагрузки и форматов штрихкодов.)

EN: Closed enumerations of QR payload types and barcode symbologies.
Values are the wire tags exchanged with the camera/UI collaborators, so they
must never change. No encoding logic here!

See Also:
    - codecraft.qr (payload encoding/decoding)
    - codecraft.barcode (symbology validation)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Literal, Type, TypeVar

from codecraft.exceptions import UnknownTypeError

_E = TypeVar("_E", bound="_CoercibleEnum")


class _CoercibleEnum(str, Enum):
    @classmethod
    def coerce(cls: Type[_E], value: Any) -> _E:
        """
        Resolve a member from itself, its value or its name (case-insensitive).

        Raises:
            UnknownTypeError: value is not part of the enumeration.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for member in cls:
                if key == member.value or key.upper() == member.name:
                    return member
            lowered = key.lower()
            for member in cls:
                if lowered == member.value.lower():
                    return member
        raise UnknownTypeError(f"Unknown {cls.__name__}: {value!r}", value=value)

    @classmethod
    def is_member(cls, value: Any) -> bool:
        try:
            cls.coerce(value)
        except UnknownTypeError:
            return False
        return True


class PayloadType(_CoercibleEnum):
    WEBSITE = "website"
    PDF = "pdf"
    IMAGES = "images"
    VIDEO = "video"
    WIFI = "wifi"
    MENU = "menu"
    BUSINESS = "business"
    VCARD = "vcard"
    MP3 = "mp3"
    APPS = "apps"
    LINKS_LIST = "links_list"
    COUPON = "coupon"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    SOCIAL_MEDIA = "social_media"
    WHATSAPP = "whatsapp"
    TEXT = "text"
    EMAIL = "email"
    SMS = "sms"
    PHONE = "phone"
    LOCATION = "location"
    EVENT = "event"

    @property
    def is_uri_scheme(self) -> bool:
        """Encoded by a standard URI scheme or text convention readers understand."""
        return self in _URI_SCHEME_TYPES

    @property
    def is_json_blob(self) -> bool:
        """Encoded with this library's own JSON schema (no universal convention)."""
        return self in _JSON_BLOB_TYPES

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            PayloadType.WEBSITE: "Веб-сайт",
            PayloadType.PDF: "PDF-документ",
            PayloadType.IMAGES: "Галерея изображений",
            PayloadType.VIDEO: "Видео",
            PayloadType.WIFI: "Wi-Fi",
            PayloadType.MENU: "Меню ресторана",
            PayloadType.BUSINESS: "Бизнес",
            PayloadType.VCARD: "Визитка (vCard)",
            PayloadType.MP3: "Аудио",
            PayloadType.APPS: "Приложения",
            PayloadType.LINKS_LIST: "Список ссылок",
            PayloadType.COUPON: "Купон",
            PayloadType.FACEBOOK: "Facebook",
            PayloadType.INSTAGRAM: "Instagram",
            PayloadType.SOCIAL_MEDIA: "Соцсети",
            PayloadType.WHATSAPP: "WhatsApp",
            PayloadType.TEXT: "Текст",
            PayloadType.EMAIL: "Эл. почта",
            PayloadType.SMS: "SMS",
            PayloadType.PHONE: "Телефон",
            PayloadType.LOCATION: "Местоположение",
            PayloadType.EVENT: "Событие",
        }
        if lang == "ru":
            return names_ru[self]
        return _NAMES_EN.get(self, self.name.replace("_", " ").title())


_NAMES_EN = {
    PayloadType.PDF: "PDF",
    PayloadType.WIFI: "WiFi",
    PayloadType.VCARD: "vCard",
    PayloadType.MP3: "MP3",
    PayloadType.WHATSAPP: "WhatsApp",
    PayloadType.SMS: "SMS",
}

_URI_SCHEME_TYPES: FrozenSet[PayloadType] = frozenset(
    {
        PayloadType.WEBSITE,
        PayloadType.PDF,
        PayloadType.VIDEO,
        PayloadType.FACEBOOK,
        PayloadType.INSTAGRAM,
        PayloadType.WHATSAPP,
        PayloadType.WIFI,
        PayloadType.EMAIL,
        PayloadType.SMS,
        PayloadType.PHONE,
        PayloadType.LOCATION,
        PayloadType.VCARD,
        PayloadType.EVENT,
    }
)

_JSON_BLOB_TYPES: FrozenSet[PayloadType] = frozenset(
    {
        PayloadType.MENU,
        PayloadType.BUSINESS,
        PayloadType.IMAGES,
        PayloadType.APPS,
        PayloadType.LINKS_LIST,
        PayloadType.COUPON,
    }
)


class WifiSecurity(_CoercibleEnum):
    WEP = "WEP"
    WPA = "WPA"
    WPA2 = "WPA2"
    WPA3 = "WPA3"
    NOPASS = "nopass"


class BarcodeFormat(_CoercibleEnum):
    # 2D
    QR_CODE = "QR_CODE"
    DATA_MATRIX = "DATA_MATRIX"
    AZTEC = "AZTEC"
    PDF_417 = "PDF_417"
    MAXICODE = "MAXICODE"
    # 1D product codes
    EAN_13 = "EAN_13"
    EAN_8 = "EAN_8"
    UPC_A = "UPC_A"
    UPC_E = "UPC_E"
    # 1D industrial codes
    CODE_128 = "CODE_128"
    CODE_39 = "CODE_39"
    CODE_93 = "CODE_93"
    CODABAR = "CODABAR"
    ITF = "ITF"
    ITF_14 = "ITF_14"
    # Specialty
    MSI = "MSI"
    MSI_PLESSEY = "MSI_PLESSEY"
    PHARMACODE = "PHARMACODE"
    RSS_14 = "RSS_14"
    RSS_EXPANDED = "RSS_EXPANDED"

    @property
    def is_2d(self) -> bool:
        return self in {
            BarcodeFormat.QR_CODE,
            BarcodeFormat.DATA_MATRIX,
            BarcodeFormat.AZTEC,
            BarcodeFormat.PDF_417,
            BarcodeFormat.MAXICODE,
        }

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.value.replace("_", " ").title())


_DISPLAY_NAMES = {
    BarcodeFormat.EAN_13: "EAN-13",
    BarcodeFormat.EAN_8: "EAN-8",
    BarcodeFormat.UPC_A: "UPC-A",
    BarcodeFormat.UPC_E: "UPC-E",
    BarcodeFormat.CODE_128: "Code 128",
    BarcodeFormat.CODE_39: "Code 39",
    BarcodeFormat.CODE_93: "Code 93",
    BarcodeFormat.ITF_14: "ITF-14",
    BarcodeFormat.PDF_417: "PDF417",
    BarcodeFormat.QR_CODE: "QR Code",
    BarcodeFormat.RSS_14: "GS1 DataBar",
    BarcodeFormat.RSS_EXPANDED: "GS1 DataBar Expanded",
    BarcodeFormat.MSI_PLESSEY: "MSI Plessey",
}


__all__ = [
    "PayloadType",
    "WifiSecurity",
    "BarcodeFormat",
]
