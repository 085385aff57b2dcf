"""Custom exceptions for the calculator engine.

The reducer never raises; these are for the construction boundary
(actions, keys, configuration) and the interactive session.
"""

from typing import Any


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value}"
        return self.message


class InvalidInputError(CalculatorError):
    """Raised when an action payload is malformed."""

    def __init__(self, value: Any, reason: str = "invalid input") -> None:
        super().__init__(reason, value)
        self.reason = reason


class UnknownKeyError(CalculatorError):
    """Raised by the strict key lookup when a key has no action."""

    def __init__(self, key: str) -> None:
        super().__init__("No action bound to key", key)
        self.key = key


class DomainError(CalculatorError):
    """Describes an out-of-domain numeric operation (e.g. divide by zero)."""

    def __init__(self, operation: str, *operands: float) -> None:
        super().__init__(f"Domain error in {operation}", operands)
        self.operation = operation
        self.operands = operands
