#!/usr/bin/env python3
"""
🛡️ Input Validation Module for SpotiHooks
Validates every caller-supplied value before a command is built:
- Device ids (presence only, passed through unchanged)
- URIs and user ids (non-blank, stripped, length-capped)
- Volume levels (0-100)
- Seek positions (non-negative milliseconds)
- Repeat and shuffle states
- Search and library item types
- Id lists for library calls
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from ..constants import LIBRARY_ITEM_TYPES, REPEAT_STATES, SEARCH_ITEM_TYPES
from ..errors import InvalidArgument


@dataclass
class ValidationResult:
    """Result of input validation with value and error details."""
    is_valid: bool
    value: Any = None
    error: str = ""
    field_name: str = ""


class InputValidator:
    """Centralized input validation for all Web API command arguments."""

    MIN_VOLUME = 0
    MAX_VOLUME = 100
    MIN_POSITION_MS = 0
    MAX_STRING_LENGTH = 500

    @staticmethod
    def _is_integer(value: Any) -> bool:
        # bool is an int subclass; True must not pass as volume 1
        return isinstance(value, int) and not isinstance(value, bool)

    @classmethod
    def validate_required_string(cls, value: Any, field_name: str) -> ValidationResult:
        """Validate that a string argument is present and non-blank.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages

        Returns:
            ValidationResult: Validation result with stripped value or error
        """
        if value is None:
            return ValidationResult(False, None, f"{field_name} is required", field_name)

        if not isinstance(value, str):
            return ValidationResult(False, None, f"{field_name} must be a string", field_name)

        value = value.strip()
        if not value:
            return ValidationResult(False, None, f"{field_name} is required", field_name)

        if len(value) > cls.MAX_STRING_LENGTH:
            return ValidationResult(
                False, None,
                f"{field_name} is too long (max {cls.MAX_STRING_LENGTH} characters)",
                field_name
            )

        return ValidationResult(True, value, "", field_name)

    @staticmethod
    def validate_present(value: Any, field_name: str) -> ValidationResult:
        """Check that a string argument is present and non-blank.

        The value is returned unchanged; no stripping or length limit applies.
        """
        if value is None:
            return ValidationResult(False, None, f"{field_name} is required", field_name)
        if not isinstance(value, str):
            return ValidationResult(False, None, f"{field_name} must be a string", field_name)
        if not value.strip():
            return ValidationResult(False, None, f"{field_name} is required", field_name)
        return ValidationResult(True, value, "", field_name)

    @classmethod
    def validate_volume(cls, value: Any, field_name: str = "volume_percent") -> ValidationResult:
        """Validate volume input (0-100).

        Numeric strings are accepted so form input can be passed straight through.
        """
        if value is None:
            return ValidationResult(False, None, f"{field_name} is required", field_name)

        if isinstance(value, bool) or isinstance(value, float):
            return ValidationResult(False, None, f"{field_name} must be a whole number", field_name)

        try:
            volume = int(value)
        except (ValueError, TypeError):
            return ValidationResult(
                False, None,
                f"{field_name} must be a valid number between {cls.MIN_VOLUME} and {cls.MAX_VOLUME}",
                field_name
            )

        if volume < cls.MIN_VOLUME or volume > cls.MAX_VOLUME:
            return ValidationResult(
                False, None,
                f"{field_name} must be between {cls.MIN_VOLUME} and {cls.MAX_VOLUME}",
                field_name
            )
        return ValidationResult(True, volume, "", field_name)

    @classmethod
    def validate_position_ms(cls, value: Any, field_name: str = "position_ms") -> ValidationResult:
        """Validate a seek position. There is no upper bound; the service
        skips to the next track when the position exceeds the track length."""
        if value is None:
            return ValidationResult(False, None, f"{field_name} is required", field_name)

        if not cls._is_integer(value):
            return ValidationResult(False, None, f"{field_name} must be an integer", field_name)

        if value < cls.MIN_POSITION_MS:
            return ValidationResult(False, None, f"{field_name} must not be negative", field_name)

        return ValidationResult(True, value, "", field_name)

    @classmethod
    def validate_choice(cls, value: Any, allowed: Sequence[str], field_name: str) -> ValidationResult:
        """Validate that a value is one of a fixed set of strings."""
        if not isinstance(value, str) or value not in allowed:
            return ValidationResult(
                False, None,
                f"{value!r} is not valid (expected one of: {', '.join(allowed)})",
                field_name
            )
        return ValidationResult(True, value, "", field_name)

    @classmethod
    def validate_repeat_state(cls, value: Any, field_name: str = "state") -> ValidationResult:
        """Validate repeat mode (track, context or off)."""
        return cls.validate_choice(value, REPEAT_STATES, field_name)

    @classmethod
    def validate_strict_boolean(cls, value: Any, field_name: str = "state") -> ValidationResult:
        """Validate a flag that must be an actual bool.

        Unlike form handling, "true" or 1 are rejected here.
        """
        if not isinstance(value, bool):
            return ValidationResult(False, None, f"{field_name} must be a boolean", field_name)
        return ValidationResult(True, value, "", field_name)

    @classmethod
    def validate_item_types(
        cls,
        values: Any,
        allowed: Sequence[str] = SEARCH_ITEM_TYPES,
        field_name: str = "type",
    ) -> ValidationResult:
        """Validate a non-empty list of item types against a fixed set."""
        if isinstance(values, str) or not isinstance(values, Iterable):
            return ValidationResult(False, None, f"{field_name} must be a list of item types", field_name)

        items = list(values)
        if not items:
            return ValidationResult(False, None, f"{field_name} must not be empty", field_name)

        for item in items:
            if not isinstance(item, str) or item not in allowed:
                return ValidationResult(
                    False, None,
                    f"{item!r} is not a valid item type (expected one of: {', '.join(allowed)})",
                    field_name
                )
        return ValidationResult(True, items, "", field_name)

    @classmethod
    def validate_library_type(cls, value: Any, field_name: str = "item_type") -> ValidationResult:
        """Validate a saved-item type (albums, shows or tracks)."""
        return cls.validate_choice(value, LIBRARY_ITEM_TYPES, field_name)

    @classmethod
    def validate_id_list(cls, values: Any, field_name: str = "ids") -> ValidationResult:
        """Validate a non-empty list of ids.

        The 50-id ceiling is deliberately left to the caller.
        """
        if isinstance(values, str) or not isinstance(values, Iterable):
            return ValidationResult(False, None, f"{field_name} must be a list of ids", field_name)

        ids: List[str] = []
        for item in values:
            if not isinstance(item, str) or not item.strip():
                return ValidationResult(False, None, f"{field_name} contains an empty or non-string id", field_name)
            ids.append(item.strip())

        if not ids:
            return ValidationResult(False, None, f"{field_name} must not be empty", field_name)
        return ValidationResult(True, ids, "", field_name)


def ensure_valid(result: ValidationResult) -> Any:
    """Return the cleaned value or raise InvalidArgument."""
    if not result.is_valid:
        raise InvalidArgument(result.field_name, result.error)
    return result.value
