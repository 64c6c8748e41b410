"""
Result type

Explicit success/failure values returned by use cases instead of raising
for expected failures.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value (ok) or an error (err), never both"""

    value: Optional[T] = None
    error: Optional[Any] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    """Constructors for Result"""

    @staticmethod
    def ok(value: T = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Any) -> Result[Any]:
        if error is None:
            raise ValueError("Return.err requires an error")
        return Result(error=error)
