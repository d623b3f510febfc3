"""
Call results and the registry error taxonomy.

Every registry operation returns either ``Ok(value)`` or ``Err(kind)``.
Expected failures are values, never exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of expected call failure."""
    UNAUTHORIZED = "unauthorized"
    ALREADY_REGISTERED = "already_registered"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


# Numeric codes carried in receipts, err-* constants style
ERROR_CODES: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: 100,
    ErrorKind.ALREADY_REGISTERED: 101,
    ErrorKind.NOT_FOUND: 102,
    ErrorKind.INVALID_INPUT: 103,
}


class UnexpectedResultError(AssertionError):
    """Raised by expect_ok/expect_err when the result has the other shape."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def expect_ok(self) -> T:
        return self.value

    def expect_err(self) -> "ErrorKind":
        raise UnexpectedResultError(f"Expected err, got (ok {self.value!r})")

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, "value": self.value, "error": None}


@dataclass(frozen=True)
class Err:
    """Failed call result carrying the error kind."""

    kind: ErrorKind

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def code(self) -> int:
        return ERROR_CODES[self.kind]

    def expect_ok(self) -> Any:
        raise UnexpectedResultError(f"Expected ok, got (err u{self.code}) {self.kind.value}")

    def expect_err(self) -> ErrorKind:
        return self.kind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "value": None,
            "error": {"kind": self.kind.value, "code": self.code},
        }


Result = Union[Ok[T], Err]
