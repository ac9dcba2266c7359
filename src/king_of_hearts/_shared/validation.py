# Area: Shared
"""
king_of_hearts._shared.validation — Field validation helpers
============================================================

Composable field checks used to validate generation endpoint bodies.
Each check records a FieldError on the shared ValidationResult instead
of raising, so every problem in a body is reported at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class FieldError:
    """Single field-level validation failure."""
    field_name: str
    error_type: str
    expected: Optional[str] = None
    received: Optional[Any] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        d = {"field": self.field_name, "error_type": self.error_type}
        if self.expected:
            d["expected"] = self.expected
        if self.received is not None:
            d["received"] = str(self.received)
        if self.message:
            d["message"] = self.message
        return d

    def describe(self) -> str:
        if self.message:
            return self.message
        text = f"'{self.field_name}' {self.error_type}"
        if self.expected:
            text += f" (expected {self.expected})"
        return text


@dataclass
class ValidationResult:
    """Aggregated validation result."""
    is_valid: bool = True
    errors: List[FieldError] = field(default_factory=list)

    def add_error(self, err: FieldError):
        self.is_valid = False
        self.errors.append(err)

    def messages(self) -> List[str]:
        return [e.describe() for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }


class FieldValidator:
    """Static, composable field-check methods."""

    @staticmethod
    def required(data: dict, field_name: str, result: ValidationResult) -> Any:
        if field_name not in data or data[field_name] is None:
            result.add_error(FieldError(field_name, "missing",
                                        message=f"Missing or invalid {field_name}"))
            return None
        return data[field_name]

    @staticmethod
    def non_empty_string(value: Any, field_name: str, result: ValidationResult) -> bool:
        if value is None:
            return False
        if not isinstance(value, str) or len(value.strip()) == 0:
            result.add_error(FieldError(field_name, "invalid_value",
                                        expected="non-empty string",
                                        received=value,
                                        message=f"Missing or invalid {field_name}"))
            return False
        return True

    @staticmethod
    def positive_int(value: Any, field_name: str, result: ValidationResult) -> bool:
        if value is None:
            return False
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            result.add_error(FieldError(field_name, "out_of_range",
                                        expected="positive integer",
                                        received=value))
            return False
        return True

    @staticmethod
    def is_list(value: Any, field_name: str, result: ValidationResult,
                min_length: int = 0) -> bool:
        if value is None:
            return False
        if not isinstance(value, list):
            result.add_error(FieldError(field_name, "invalid_type",
                                        expected="array",
                                        received=type(value).__name__,
                                        message=f"{field_name} must be a non-empty array"))
            return False
        if len(value) < min_length:
            result.add_error(FieldError(field_name, "out_of_range",
                                        expected=f"min length {min_length}",
                                        received=len(value),
                                        message=f"{field_name} must be a non-empty array"))
            return False
        return True

    @staticmethod
    def one_of(value: Any, field_name: str, choices: list, result: ValidationResult) -> bool:
        if value is None:
            return False
        if value not in choices:
            result.add_error(FieldError(field_name, "invalid_value",
                                        expected=f"one of {choices}",
                                        received=value))
            return False
        return True
