"""
Модульные тесты для codecraft/qr/validators.py
Пополевая валидация 22 типов QR-нагрузки: первое нарушенное правило и путь к полю.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict

import pytest

from codecraft.config import CoreConfig
from codecraft.exceptions import QRValidationError, UnknownTypeError
from codecraft.model.enums import PayloadType
from codecraft.model.payloads import payload_fields
from codecraft.model.results import ValidationResult
from codecraft.qr.validators import (
    QR_VALIDATORS,
    is_valid_email,
    is_valid_phone_number,
    is_valid_url,
    parse_date,
    qr_validation_result,
    validate_qr_data,
    validate_qr_payload,
)


def _error(payload_type: Any, data: Any) -> QRValidationError:
    with pytest.raises(QRValidationError) as exc_info:
        validate_qr_payload(payload_type, data)
    return exc_info.value


class TestFieldHelpers:
    """URL, e-mail, телефон, даты."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com", True),
            ("http://localhost:8080/path?q=1", True),
            ("HTTPS://EXAMPLE.COM", True),
            ("ftp://example.com", False),
            ("example.com", False),
            ("https://", False),
            ("https://exa mple.com", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_valid_url(self, url: Any, expected: bool) -> None:
        assert is_valid_url(url) is expected

    @pytest.mark.parametrize(
        "email,expected",
        [
            ("test@example.com", True),
            ("a.b+c@sub.example.org", True),
            ("no-at-sign.com", False),
            ("two@@example.com", False),
            ("space in@example.com", False),
            ("user@localhost", False),
        ],
    )
    def test_is_valid_email(self, email: str, expected: bool) -> None:
        assert is_valid_email(email) is expected

    @pytest.mark.parametrize(
        "phone,expected",
        [
            ("+1 (555) 123-4567", True),
            ("5551234", True),
            ("123456789012345", True),
            ("123456", False),
            ("1234567890123456", False),
            ("+1 555 CALL NOW", False),
            ("", False),
        ],
    )
    def test_is_valid_phone_number(self, phone: str, expected: bool) -> None:
        assert is_valid_phone_number(phone) is expected

    def test_parse_date_variants(self) -> None:
        assert parse_date("2024-03-15") == datetime(2024, 3, 15, tzinfo=timezone.utc)
        assert parse_date(date(2024, 3, 15)) == datetime(2024, 3, 15, tzinfo=timezone.utc)
        aware = parse_date("2024-03-15T10:30:00+02:00")
        assert aware is not None and aware.utcoffset() is not None
        assert parse_date("not a date") is None
        assert parse_date(20240315) is None


class TestValidPayloads:
    """Корректная нагрузка каждого типа проходит без ошибок и предупреждений."""

    def test_registry_covers_all_types(self) -> None:
        assert set(QR_VALIDATORS) == set(PayloadType)

    @pytest.mark.parametrize("payload_type", list(PayloadType))
    def test_valid(
        self, payload_type: PayloadType, valid_payloads: Dict[PayloadType, Dict[str, Any]]
    ) -> None:
        assert validate_qr_payload(payload_type, valid_payloads[payload_type]) == []
        assert validate_qr_data(payload_type.value, valid_payloads[payload_type])

    def test_extra_keys_ignored(self) -> None:
        assert validate_qr_payload("website", {"url": "https://a.com", "color": "red"}) == []


class TestFirstViolatedRule:
    """Сообщение и путь к полю первого нарушенного правила."""

    @pytest.mark.parametrize(
        "payload_type,data,message,field",
        [
            ("website", {}, "URL is required", "url"),
            ("website", {"url": "not a url"}, "Invalid URL format", "url"),
            ("pdf", {"url": ""}, "PDF URL is required", "url"),
            ("video", {}, "Video URL is required", "url"),
            ("mp3", {}, "Audio URL is required", "url"),
            ("images", {"images": []}, "At least one image is required", "images"),
            ("images", {"images": [{"url": ""}]}, "Image 1 URL is required", "images[0].url"),
            (
                "images",
                {"images": [{"url": "https://a.com/x.png"}, {"url": "x"}]},
                "Invalid URL format for image 2",
                "images[1].url",
            ),
            ("wifi", {"security": "WPA"}, "Network name (SSID) is required", "ssid"),
            ("wifi", {"ssid": "Home"}, "Security type is required", "security"),
            ("wifi", {"ssid": "Home", "security": "WPA4"}, "Invalid security type", "security"),
            (
                "wifi",
                {"ssid": "Home", "security": "WPA2"},
                "Password is required for secured networks",
                "password",
            ),
            ("business", {}, "Business name is required", "name"),
            ("business", {"name": "A", "email": "bad"}, "Invalid email format", "email"),
            ("business", {"name": "A", "website": "bad"}, "Invalid website URL", "website"),
            ("vcard", {"firstName": "A", "email": "bad"}, "Invalid email format", "email"),
            ("apps", {"appStoreUrl": "bad"}, "Invalid App Store URL", "appStoreUrl"),
            ("apps", {"customUrl": "bad"}, "Invalid custom URL", "customUrl"),
            ("links_list", {"links": []}, "At least one link is required", "links"),
            ("links_list", {"links": [{"url": "https://a.com"}]}, "Link 1 title is required", "links[0].title"),
            ("links_list", {"links": [{"title": "A"}]}, "Link 1 URL is required", "links[0].url"),
            (
                "links_list",
                {"links": [{"title": "A", "url": "bad"}]},
                "Invalid URL format for link 1",
                "links[0].url",
            ),
            ("coupon", {}, "Coupon code is required", "code"),
            ("coupon", {"code": "X", "validUntil": "someday"}, "Invalid date format for validUntil", "validUntil"),
            ("facebook", {"pageUrl": "https://twitter.com/x"}, "Invalid Facebook URL", "pageUrl"),
            ("instagram", {"profileUrl": "instagram.com/x"}, "Invalid Instagram URL", "profileUrl"),
            ("social_media", {"twitter": "bad"}, "Invalid URL for twitter", "twitter"),
            ("whatsapp", {}, "Phone number is required", "phoneNumber"),
            ("whatsapp", {"phoneNumber": "abc"}, "Invalid phone number format", "phoneNumber"),
            ("text", {"text": ""}, "Text content is required", "text"),
            ("text", {"text": "x" * 2001}, "Text is too long (max 2000 characters)", "text"),
            ("email", {}, "Recipient email is required", "to"),
            ("email", {"to": "bad"}, "Invalid email format", "to"),
            ("email", {"to": "a@b.com", "cc": "bad"}, "Invalid CC email format", "cc"),
            ("email", {"to": "a@b.com", "bcc": "bad"}, "Invalid BCC email format", "bcc"),
            ("sms", {"phoneNumber": "12"}, "Invalid phone number format", "phoneNumber"),
            ("phone", {"phoneNumber": "   "}, "Phone number is required", "phoneNumber"),
            ("location", {"longitude": 0}, "Latitude must be a number", "latitude"),
            ("location", {"latitude": 0, "longitude": "0"}, "Longitude must be a number", "longitude"),
            ("location", {"latitude": 91, "longitude": 0}, "Latitude must be between -90 and 90", "latitude"),
            (
                "location",
                {"latitude": 0, "longitude": -180.5},
                "Longitude must be between -180 and 180",
                "longitude",
            ),
            ("event", {"startDate": "2024-01-01"}, "Event title is required", "title"),
            ("event", {"title": "E"}, "Start date is required", "startDate"),
            ("event", {"title": "E", "startDate": "soon"}, "Invalid start date format", "startDate"),
            (
                "event",
                {"title": "E", "startDate": "2024-01-01", "endDate": "later"},
                "Invalid end date format",
                "endDate",
            ),
            (
                "event",
                {"title": "E", "startDate": "2024-01-02", "endDate": "2024-01-01"},
                "End date must be after start date",
                "endDate",
            ),
        ],
    )
    def test_message_and_field(
        self, payload_type: str, data: Dict[str, Any], message: str, field: str
    ) -> None:
        err = _error(payload_type, data)
        assert err.message == message
        assert err.field == field

    @pytest.mark.parametrize(
        "payload_type,data,message",
        [
            ("vcard", {"email": "a@b.com"}, "At least one of firstName, lastName, or organization is required"),
            ("apps", {"appName": "X"}, "At least one app store URL is required"),
            ("social_media", {}, "At least one social media link is required"),
        ],
    )
    def test_message_without_field(self, payload_type: str, data: Dict[str, Any], message: str) -> None:
        err = _error(payload_type, data)
        assert err.message == message
        assert err.field is None


class TestMenuRules:
    """Вложенные пути в меню."""

    def test_missing_price_path(self) -> None:
        data = {
            "restaurantName": "R",
            "categories": [
                {"name": "A", "items": [{"name": "x", "price": 1}]},
                {"name": "B", "items": [{"name": "y", "price": 2}, {"name": "z"}]},
            ],
        }
        err = _error("menu", data)
        assert err.message == "Item price is required"
        assert err.field == "categories[1].items[1].price"

    def test_empty_category(self) -> None:
        data = {"restaurantName": "R", "categories": [{"name": "Drinks", "items": []}]}
        err = _error("menu", data)
        assert err.message == 'Category "Drinks" must have at least one item'
        assert err.field == "categories[0].items"

    def test_zero_price_is_present(self) -> None:
        data = {
            "restaurantName": "R",
            "categories": [{"name": "A", "items": [{"name": "Free water", "price": 0}]}],
        }
        assert validate_qr_payload("menu", data) == []

    def test_missing_restaurant(self) -> None:
        assert _error("menu", {"categories": []}).message == "Restaurant name is required"


class TestEdgeCases:
    """Граничные значения и предупреждения."""

    @pytest.mark.parametrize("lat,lon", [(90, 180), (-90, -180), (0.0, 0.0)])
    def test_location_bounds_inclusive(self, lat: float, lon: float) -> None:
        assert validate_qr_payload("location", {"latitude": lat, "longitude": lon}) == []

    def test_location_rejects_bool_and_nan(self) -> None:
        assert _error("location", {"latitude": True, "longitude": 0}).field == "latitude"
        assert _error("location", {"latitude": float("nan"), "longitude": 0}).field == "latitude"

    def test_text_limit_exact(self) -> None:
        assert validate_qr_payload("text", {"text": "x" * 2000}) == []

    def test_text_limit_from_config(self) -> None:
        config = CoreConfig(max_text_length=5)
        with pytest.raises(QRValidationError, match="max 5 characters"):
            validate_qr_payload("text", {"text": "abcdef"}, config)

    def test_wifi_nopass_without_password(self) -> None:
        assert validate_qr_payload("wifi", {"ssid": "Cafe", "security": "nopass"}) == []

    def test_event_equal_dates_allowed(self) -> None:
        data = {"title": "E", "startDate": "2024-01-01T10:00:00", "endDate": "2024-01-01T10:00:00"}
        assert validate_qr_payload("event", data) == []

    def test_pdf_warning(self) -> None:
        warnings = validate_qr_payload("pdf", {"url": "https://example.com/document"})
        assert warnings == ["URL does not appear to be a PDF file"]

    def test_vcard_contact_warning(self) -> None:
        warnings = validate_qr_payload("vcard", {"organization": "Acme"})
        assert warnings == ["Contact has no phone number or email address"]

    def test_whatsapp_country_code_warning(self) -> None:
        warnings = validate_qr_payload("whatsapp", {"phoneNumber": "555 123 4567"})
        assert warnings == ["WhatsApp numbers should include the country code"]

    def test_non_mapping_payload(self) -> None:
        assert _error("text", "hello").message == "Payload must be an object"


class TestNonThrowingSurfaces:
    """qr_validation_result и validate_qr_data."""

    def test_result_failure(self) -> None:
        result = qr_validation_result("wifi", {"ssid": "Home", "security": "WPA2"})
        assert not result.is_valid
        assert result.errors == ["Password is required for secured networks"]
        assert result.to_dict()["field"] == "password"

    def test_result_keeps_warnings(self) -> None:
        result = qr_validation_result("pdf", {"url": "https://example.com/doc"})
        assert result.is_valid
        assert result.warnings == ["URL does not appear to be a PDF file"]

    def test_unknown_type_propagates_from_result(self) -> None:
        with pytest.raises(UnknownTypeError):
            qr_validation_result("hologram", {})

    def test_unknown_type_is_false_for_bool_variant(self) -> None:
        assert validate_qr_data("hologram", {}) is False

    def test_bool_variant(self) -> None:
        assert validate_qr_data(PayloadType.PHONE, {"phoneNumber": "+15551234567"}) is True
        assert validate_qr_data(PayloadType.PHONE, {"phoneNumber": "call me"}) is False

    @pytest.mark.parametrize("lat", [10**400, -(10**400)])
    def test_huge_int_coordinates(self, lat: int) -> None:
        result = qr_validation_result("location", {"latitude": lat, "longitude": 0})
        assert not result.is_valid
        assert result.error_field == "latitude"
        assert result.errors == ["Latitude must be between -90 and 90"]


class TestDateRange:
    """Даты у границ datetime.min/datetime.max."""

    def test_parse_date_normalises_to_utc(self) -> None:
        parsed = parse_date("2024-03-15T10:30:00+02:00")
        assert parsed == datetime(2024, 3, 15, 8, 30, tzinfo=timezone.utc)
        assert parsed is not None and parsed.tzinfo is timezone.utc

    @pytest.mark.parametrize(
        "value",
        [
            "0001-01-01T00:00:00+05:00",
            "9999-12-31T23:59:59-05:00",
            datetime.max.replace(tzinfo=timezone(timedelta(hours=-1))),
        ],
    )
    def test_out_of_range_instant_rejected(self, value: Any) -> None:
        assert parse_date(value) is None
        result = qr_validation_result("event", {"title": "Edge", "startDate": value})
        assert not result.is_valid
        assert result.errors == ["Invalid start date format"]

    @pytest.mark.parametrize("value", ["0001-01-01T00:00:00", "9999-12-31T23:59:59Z"])
    def test_range_ends_in_utc_accepted(self, value: str) -> None:
        assert validate_qr_payload("event", {"title": "Edge", "startDate": value}) == []


_JUNK_VALUES = [
    None,
    10**400,
    -(10**400),
    float("nan"),
    float("inf"),
    True,
    "",
    "   ",
    "\x00",
    b"bytes",
    [],
    [None, 1, "x"],
    ("tuple",),
    {1, 2},
    {"nested": {"deeper": [object()]}},
    object(),
    datetime.max.replace(tzinfo=timezone(timedelta(hours=-1))),
]


class TestTotality:
    """qr_validation_result никогда не бросает на мусорных данных."""

    @pytest.mark.parametrize("payload_type", list(PayloadType))
    @pytest.mark.parametrize("junk", _JUNK_VALUES)
    def test_every_field_junk(self, payload_type: PayloadType, junk: Any) -> None:
        data = {name: junk for name in payload_fields(payload_type)}
        result = qr_validation_result(payload_type, data)
        assert isinstance(result, ValidationResult)

    @pytest.mark.parametrize("payload_type", list(PayloadType))
    @pytest.mark.parametrize("junk", _JUNK_VALUES)
    def test_nested_entries_junk(self, payload_type: PayloadType, junk: Any) -> None:
        data = {
            "restaurantName": "Cafe",
            "categories": [junk, {"name": "Mains", "items": [junk]}],
            "images": [junk],
            "links": [junk],
        }
        result = qr_validation_result(payload_type, data)
        assert isinstance(result, ValidationResult)

    @pytest.mark.parametrize("payload_type", list(PayloadType))
    @pytest.mark.parametrize("data", [None, [], "text", 42, [("url", "https://x.com")]])
    def test_non_mapping_payload(self, payload_type: PayloadType, data: Any) -> None:
        result = qr_validation_result(payload_type, data)
        assert result.errors == ["Payload must be an object"]
