"""
Модульные тесты для codecraft/core.py
Тестирует фасад CodeCraftCore и фильтрацию его логов.
"""

import logging
from typing import Any, Dict

import pytest

from codecraft.config import CoreConfig
from codecraft.core import CodeCraftCore, get_core
from codecraft.exceptions import (
    BarcodeValidationError,
    ChecksumMismatchError,
    QRValidationError,
    UnknownTypeError,
)
from codecraft.model.enums import BarcodeFormat, PayloadType

LOGGER_NAME = "tests.codecraft.core"

WHATSAPP_NO_COUNTRY: Dict[str, Any] = {"phoneNumber": "5551234567", "message": "Hi"}


@pytest.fixture
def core() -> CodeCraftCore:
    return CodeCraftCore()


def make_core(**config: Any) -> CodeCraftCore:
    return CodeCraftCore(CoreConfig(**config), logger=logging.getLogger(LOGGER_NAME))


class TestEncode:
    """Кодирование с предварительной валидацией."""

    def test_valid_payload(self, core: CodeCraftCore) -> None:
        data = {"ssid": "MyNetwork", "password": "password123", "security": "WPA", "hidden": False}
        assert core.encode("wifi", data) == "WIFI:T:WPA;S:MyNetwork;P:password123;H:false;;"

    def test_accepts_enum_member(self, core: CodeCraftCore) -> None:
        assert core.encode(PayloadType.TEXT, {"text": "hello"}) == "hello"

    def test_invalid_payload_raises(self, core: CodeCraftCore) -> None:
        with pytest.raises(QRValidationError) as exc_info:
            core.encode("wifi", {"security": "WPA"})
        assert exc_info.value.field == "ssid"
        assert exc_info.value.message == "Network name (SSID) is required"

    def test_unknown_type_raises(self, core: CodeCraftCore) -> None:
        with pytest.raises(UnknownTypeError):
            core.encode("hologram", {"text": "x"})

    def test_out_of_range_date_rejected_before_formatting(self, core: CodeCraftCore) -> None:
        data = {"title": "Edge", "startDate": "0001-01-01T00:00:00+05:00"}
        assert not core.validate("event", data).is_valid
        with pytest.raises(QRValidationError) as exc_info:
            core.encode("event", data)
        assert exc_info.value.field == "startDate"

    def test_decode_deeply_nested_json(self, core: CodeCraftCore) -> None:
        raw = '{"a":' + "[" * 100_000 + "]" * 100_000 + "}"
        assert core.decode(raw).type is PayloadType.TEXT

    def test_warnings_do_not_block(self, core: CodeCraftCore) -> None:
        assert core.encode("whatsapp", WHATSAPP_NO_COUNTRY) == "https://wa.me/5551234567?text=Hi"

    def test_prefer_json_from_config(self) -> None:
        core = CodeCraftCore(CoreConfig(prefer_json=True))
        assert core.encode("mp3", {"url": "https://example.com/a.mp3"}).startswith("{")


class TestValidate:
    """Неблокирующая валидация."""

    def test_failure_result(self, core: CodeCraftCore) -> None:
        result = core.validate("location", {"latitude": 91, "longitude": 0})
        assert not result.is_valid
        assert result.error_field == "latitude"

    def test_success_with_warnings(self, core: CodeCraftCore) -> None:
        result = core.validate("whatsapp", WHATSAPP_NO_COUNTRY)
        assert result.is_valid
        assert result.warnings == ["WhatsApp numbers should include the country code"]

    def test_unknown_type_propagates(self, core: CodeCraftCore) -> None:
        with pytest.raises(UnknownTypeError):
            core.validate("hologram", {})

    def test_text_limit_from_config(self) -> None:
        core = CodeCraftCore(CoreConfig(max_text_length=5))
        assert core.validate("text", {"text": "12345"}).is_valid
        assert not core.validate("text", {"text": "123456"}).is_valid


class TestDecode:
    def test_detect_and_decode(self, core: CodeCraftCore) -> None:
        assert core.detect_type("tel:+15551234567") is PayloadType.PHONE
        decoded = core.decode("tel:+15551234567")
        assert decoded.type is PayloadType.PHONE
        assert decoded.parsed_data == {"phoneNumber": "+15551234567"}

    def test_decode_encode_agree(self, core: CodeCraftCore) -> None:
        encoded = core.encode("sms", {"phoneNumber": "+15551234567", "message": "Hi there"})
        decoded = core.decode(encoded)
        assert decoded.type is PayloadType.SMS
        assert decoded.parsed_data == {"phoneNumber": "+15551234567", "message": "Hi there"}

    def test_payload_fields(self, core: CodeCraftCore) -> None:
        assert core.payload_fields("EMAIL")["to"] is True
        with pytest.raises(UnknownTypeError):
            core.payload_fields("hologram")


class TestBarcodes:
    """Фасад валидации штрихкодов."""

    def test_validate_barcode(self, core: CodeCraftCore) -> None:
        assert core.validate_barcode("EAN_13", "5901234123457").is_valid
        assert core.validate_barcode("EAN_13", "5901234123456").errors == ["Invalid EAN-13 checksum"]
        assert core.validate_barcode("NOT_A_FORMAT", "123").errors == ["Unknown format"]

    def test_require_valid_barcode_passes(self, core: CodeCraftCore) -> None:
        core.require_valid_barcode(BarcodeFormat.UPC_A, "036000291452")

    def test_require_valid_barcode_checksum(self, core: CodeCraftCore) -> None:
        with pytest.raises(ChecksumMismatchError) as exc_info:
            core.require_valid_barcode(BarcodeFormat.EAN_13, "5901234123456")
        assert exc_info.value.barcode_format == "EAN_13"

    def test_require_valid_barcode_length(self, core: CodeCraftCore) -> None:
        with pytest.raises(BarcodeValidationError) as exc_info:
            core.require_valid_barcode("EAN_13", "123")
        assert not isinstance(exc_info.value, ChecksumMismatchError)
        assert exc_info.value.barcode_format == "EAN_13"

    def test_require_valid_barcode_unknown_format(self, core: CodeCraftCore) -> None:
        with pytest.raises(BarcodeValidationError, match="Unknown format"):
            core.require_valid_barcode("NOT_A_FORMAT", "123")

    def test_barcode_constraints(self, core: CodeCraftCore) -> None:
        assert core.barcode_constraints("EAN_13").fixed_length == 13
        with pytest.raises(UnknownTypeError):
            core.barcode_constraints("NOT_A_FORMAT")


class TestLogging:
    """Фильтрация по config.log_level и префикс сообщений."""

    def test_warning_logged_with_prefix(self, caplog: pytest.LogCaptureFixture) -> None:
        core = make_core()
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            core.encode("whatsapp", WHATSAPP_NO_COUNTRY)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].getMessage() == (
            "[CodeCraftStudio] whatsapp payload: WhatsApp numbers should include the country code"
        )
        # DEBUG ниже порога WARNING из конфигурации
        assert not [r for r in caplog.records if r.levelno == logging.DEBUG]

    def test_debug_level_emits_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        core = make_core(log_level="DEBUG")
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            core.decode("tel:+15551234567")
        assert "Decoded phone content" in caplog.text

    def test_error_level_suppresses_warnings(self, caplog: pytest.LogCaptureFixture) -> None:
        core = make_core(log_level="ERROR")
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            core.encode("whatsapp", WHATSAPP_NO_COUNTRY)
        assert caplog.records == []

    def test_none_level_silences(self, caplog: pytest.LogCaptureFixture) -> None:
        core = make_core(log_level="NONE")
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            core.encode("whatsapp", WHATSAPP_NO_COUNTRY)
            core.validate_barcode("EAN_13", "123")
        assert caplog.records == []

    def test_percent_in_prefix(self, caplog: pytest.LogCaptureFixture) -> None:
        core = make_core(log_prefix="[100%]", log_level="INFO")
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            core.validate_barcode("EAN_13", "123")
        assert caplog.records[0].getMessage().startswith("[100%] Barcode rejected:")


class TestSharedCore:
    def test_get_core_is_singleton(self) -> None:
        assert get_core() is get_core()
        assert get_core().config == CoreConfig()
