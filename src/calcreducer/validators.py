"""Input validation for action payloads."""

from calcreducer.exceptions import InvalidInputError

DIGITS = frozenset("0123456789")
OPERATORS = ("+", "-", "*", "/", "^")


def validate_digit(value: str) -> str:
    """
    Validate that a value is a single decimal digit character.

    Raises:
        InvalidInputError: If value is not one of "0" through "9"
    """
    if not isinstance(value, str) or value not in DIGITS:
        raise InvalidInputError(value, "Expected a single digit 0-9")
    return value


def validate_operator(value: str) -> str:
    """
    Validate that a value is a supported binary operator glyph.

    Raises:
        InvalidInputError: If value is not one of + - * / ^
    """
    if not isinstance(value, str) or value not in OPERATORS:
        raise InvalidInputError(value, f"Expected one of {' '.join(OPERATORS)}")
    return value


def validate_history_entry(value: str) -> str:
    """Validate a history entry is a non-empty string."""
    if not isinstance(value, str):
        raise InvalidInputError(value, f"Expected str, got {type(value).__name__}")
    if not value.strip():
        raise InvalidInputError(value, "History entry must not be empty")
    return value
