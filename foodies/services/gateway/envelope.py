"""Response envelope returned by every gateway and coordinator call."""
from enum import Enum
from typing import Any, Optional, Union, Literal

from pydantic import BaseModel


GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class FailureKind(str, Enum):
    """Where a failure originated."""

    TRANSPORT = "transport"  # network, DNS, timeout
    REMOTE = "remote"  # non-2xx response
    VALIDATION = "validation"  # rejected client-side before any call
    UNEXPECTED = "unexpected"  # defensive catch-all

    def __str__(self) -> str:
        """Return the string value of the kind."""
        return self.value


class ErrorInfo(BaseModel):
    """Normalized error details."""

    message: str = GENERIC_ERROR_MESSAGE
    status: int = 500
    details: Optional[Any] = None
    kind: FailureKind = FailureKind.UNEXPECTED


class Success(BaseModel):
    """Successful outcome carrying the response payload."""

    success: Literal[True] = True
    data: Any = None
    status: int = 200


class Failure(BaseModel):
    """Failed outcome carrying normalized error details."""

    success: Literal[False] = False
    error: ErrorInfo

    @classmethod
    def of(
        cls,
        message: str,
        status: int = 500,
        kind: FailureKind = FailureKind.UNEXPECTED,
        details: Optional[Any] = None,
    ) -> "Failure":
        """Build a failure from its parts."""
        return cls(
            error=ErrorInfo(message=message, status=status, kind=kind, details=details)
        )


Envelope = Union[Success, Failure]
