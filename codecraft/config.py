# -*- coding: utf-8 -*-
"""
RU: Конфигурация ядра кодирования/валидации, передаётся явно при создании.
EN: Encoding/validation core configuration, passed explicitly at construction.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Final, Optional

logger = logging.getLogger(__name__)

LOG_LEVELS: Final[Dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    # Silences the core completely
    "NONE": logging.CRITICAL + 10,
}


@dataclass(frozen=True)
class CoreConfig:
    """
    Core configuration.

    Attributes:
        log_level: Threshold for messages emitted by ``CodeCraftCore``
            (one of DEBUG, INFO, WARNING, ERROR, CRITICAL, NONE).
        log_prefix: Prefix prepended to core log messages.
        max_text_length: Maximum TEXT payload length in characters.
        default_currency: Currency written into MENU blobs without one.
        calendar_prodid: PRODID line of generated iCalendar blocks.
        prefer_json: Encode MP3 and SOCIAL_MEDIA payloads as JSON blobs
            instead of a bare URL / ``network: url`` lines.

    Examples:
        >>> cfg = CoreConfig(log_level="DEBUG")
        >>> cfg.level_number
        10

        >>> CoreConfig(max_text_length=0)
        Traceback (most recent call last):
        ...
        ValueError: max_text_length must be >= 1
    """

    log_level: str = "WARNING"
    log_prefix: str = "[CodeCraftStudio]"
    max_text_length: int = 2000
    default_currency: str = "USD"
    calendar_prodid: str = "-//QRCode Studio//EN"
    prefer_json: bool = False

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        if not isinstance(self.max_text_length, int) or self.max_text_length < 1:
            raise ValueError("max_text_length must be >= 1")
        if not self.default_currency:
            raise ValueError("default_currency must be a non-empty string")
        if not self.calendar_prodid:
            raise ValueError("calendar_prodid must be a non-empty string")

    @property
    def level_number(self) -> int:
        return LOG_LEVELS[self.log_level.upper()]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CoreConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in d.items() if k in known})


DEFAULT_CONFIG: Final[CoreConfig] = CoreConfig()


def load_config(config_path: Optional[Path] = None) -> CoreConfig:
    """
    Load configuration from a JSON file, merged over the defaults.

    A missing file, invalid JSON or a non-object document falls back to the
    defaults with a logged warning. Invalid values (e.g. a negative
    ``max_text_length``) still raise ``ValueError``.

    Args:
        config_path: Path to the JSON file. Defaults to ``codecraft.json`` in
            the current directory.

    Returns:
        CoreConfig instance.
    """
    if config_path is None:
        config_path = Path("codecraft.json")

    if not config_path.exists():
        logger.info("Config file %s not found, using defaults", config_path)
        return DEFAULT_CONFIG

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d; using defaults",
            config_path,
            e.lineno,
            e.colno,
        )
        return DEFAULT_CONFIG
    except OSError as e:
        logger.warning("Could not read %s: %s; using defaults", config_path, e)
        return DEFAULT_CONFIG

    if not isinstance(user_config, dict):
        logger.warning(
            "Config file must contain a JSON object, got %s; using defaults",
            type(user_config).__name__,
        )
        return DEFAULT_CONFIG

    merged = DEFAULT_CONFIG.to_dict()
    merged.update(user_config)
    logger.info("Configuration loaded from %s", config_path)
    return CoreConfig.from_dict(merged)


__all__ = [
    "LOG_LEVELS",
    "CoreConfig",
    "DEFAULT_CONFIG",
    "load_config",
]
