"""
Пакет codecraft
===============

Ядро кодирования и валидации QR-кодов и штрихкодов.

Этот пакет предоставляет:
    - 22 типа содержимого QR: форматирование, разбор и определение типа
    - Пополевую валидацию с путём к ошибочному полю
    - Валидацию 20 форматов штрихкодов и таблицу ограничений
    - Алгоритмы контрольных цифр (EAN/UPC, Code 39/93/128, ITF/GTIN,
      Codabar, MSI)

Растеризация символов и работа с камерой в пакет не входят: ядро отдаёт
строки рендереру и принимает строки от сканера.

Пример базового использования:
    >>> from codecraft import CodeCraftCore
    >>>
    >>> core = CodeCraftCore()
    >>> core.encode("wifi", {"ssid": "MyNetwork", "password": "password123",
    ...                      "security": "WPA", "hidden": False})
    'WIFI:T:WPA;S:MyNetwork;P:password123;H:false;;'
    >>> core.decode("tel:+15551234567").type
    <PayloadType.PHONE: 'phone'>

Управление конфигурацией и логированием:
    >>> from codecraft import load_config, setup_logging, get_logger
    >>>
    >>> config = load_config()
    >>> setup_logging(config)
    >>> logger = get_logger(__name__)
    >>> logger.debug("Отладочное логирование включено")

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "CodeCraft Studio Development Team"
__description__ = "QR payload and barcode encoding/validation core"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"codecraft требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

from codecraft.config import DEFAULT_CONFIG, CoreConfig, load_config  # noqa: E402

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAMESPACE = "codecraft"

_FORMATTER = logging.Formatter(
    fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logging(
    config: Optional[CoreConfig] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Настроить логгер пакета ``codecraft``.

    Подключает:
    - Консольный обработчик (stderr) с уровнем ``config.log_level``
    - Ротирующий файловый обработчик, если передан ``log_file``

    Функция идемпотентна: если у логгера пакета уже есть обработчики,
    повторный вызов ничего не меняет. Без вызова этой функции пакет
    ничего не выводит сам (логи уходят в корневой логгер приложения).

    Аргументы:
        config: Конфигурация ядра; по умолчанию DEFAULT_CONFIG.
        log_file: Путь к файлу журнала (опционально).

    Возвращает:
        Логгер пакета.
    """
    cfg = config or DEFAULT_CONFIG
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if package_logger.handlers:
        return package_logger

    # NONE sits above CRITICAL, so nothing passes
    level = cfg.level_number
    package_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(_FORMATTER)
    package_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(_FORMATTER)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. Используется только консоль.",
                e,
            )

    package_logger.propagate = False
    return package_logger


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён ``codecraft``.

    Аргументы:
        module_name: Обычно ``__name__``; имена вне пакета получают
            префикс ``codecraft.``, ``__main__`` становится ``codecraft.main``.

    Пример:
        >>> get_logger("plugins.export").name
        'codecraft.plugins.export'
    """
    if module_name == LOGGER_NAMESPACE or module_name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOGGER_NAMESPACE}.main")
    # Удаляем ведущие точки из относительных импортов
    clean_name = module_name.lstrip(".")
    if not clean_name:
        return logging.getLogger(LOGGER_NAMESPACE)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{clean_name}")


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from codecraft.barcode import (  # noqa: E402
    BARCODE_CONSTRAINTS,
    get_barcode_constraints,
)
from codecraft.core import (  # noqa: E402
    CodeCraftCore,
    barcode_constraints,
    decode,
    detect_type,
    encode,
    get_core,
    validate,
    validate_barcode,
)
from codecraft.exceptions import (  # noqa: E402
    BarcodeValidationError,
    ChecksumMismatchError,
    CodeCraftError,
    QRValidationError,
    UnknownTypeError,
    ValidationError,
)
from codecraft.model import (  # noqa: E402
    BarcodeConstraint,
    BarcodeFormat,
    DecodedPayload,
    PayloadType,
    ValidationResult,
    WifiSecurity,
    payload_fields,
)
from codecraft.qr import format_qr_data, parse_qr_data, validate_qr_data  # noqa: E402

__all__ = [
    "__version__",
    "setup_logging",
    "get_logger",
    "CoreConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "CodeCraftCore",
    "get_core",
    "encode",
    "validate",
    "detect_type",
    "decode",
    "validate_barcode",
    "barcode_constraints",
    "BARCODE_CONSTRAINTS",
    "get_barcode_constraints",
    "format_qr_data",
    "parse_qr_data",
    "validate_qr_data",
    "payload_fields",
    "PayloadType",
    "BarcodeFormat",
    "WifiSecurity",
    "ValidationResult",
    "BarcodeConstraint",
    "DecodedPayload",
    "CodeCraftError",
    "ValidationError",
    "QRValidationError",
    "BarcodeValidationError",
    "ChecksumMismatchError",
    "UnknownTypeError",
]
