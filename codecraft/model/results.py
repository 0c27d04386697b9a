# RU: Value-объекты результатов: валидация, ограничения формата, результат декодирования.
# EN: Result value objects: validation outcome, barcode constraints, decode result.

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import PayloadType

__all__ = [
    "ValidationResult",
    "BarcodeConstraint",
    "DecodedPayload",
]


@dataclass
class ValidationResult:
    """
    Outcome of a non-throwing validation.

    ``errors`` holds human-readable messages; the first entry is always the
    first violated rule. ``warnings`` never affect ``is_valid``.
    """

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error_field: Optional[str] = None

    @classmethod
    def ok(cls, warnings: Optional[List[str]] = None) -> "ValidationResult":
        return cls(is_valid=True, warnings=list(warnings or []))

    @classmethod
    def failure(
        cls,
        message: str,
        field: Optional[str] = None,
        warnings: Optional[List[str]] = None,
    ) -> "ValidationResult":
        return cls(
            is_valid=False,
            errors=[message],
            warnings=list(warnings or []),
            error_field=field,
        )

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.error_field is not None:
            result["field"] = self.error_field
        return result


@dataclass(frozen=True)
class BarcodeConstraint:
    """
    Declarative length/pattern rule of one symbology.

    Drives both validation and form-field hints (max length, input pattern)
    in the UI layer.
    """

    description: str
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    fixed_length: Optional[int] = None
    pattern: Optional[str] = None

    def matches_length(self, data: str) -> bool:
        if self.fixed_length is not None and len(data) != self.fixed_length:
            return False
        if self.min_length is not None and len(data) < self.min_length:
            return False
        if self.max_length is not None and len(data) > self.max_length:
            return False
        return True

    def matches_pattern(self, data: str) -> bool:
        return self.pattern is None or re.fullmatch(self.pattern, data) is not None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.min_length is not None:
            result["minLength"] = self.min_length
        if self.max_length is not None:
            result["maxLength"] = self.max_length
        if self.fixed_length is not None:
            result["fixedLength"] = self.fixed_length
        if self.pattern is not None:
            result["pattern"] = self.pattern
        result["description"] = self.description
        return result


@dataclass(frozen=True)
class DecodedPayload:
    """Scan-path result: raw content, detected type and best-effort fields."""

    content: str
    type: PayloadType
    parsed_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "type": self.type.value,
            "parsedData": dict(self.parsed_data),
        }
