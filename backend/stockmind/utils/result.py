"""Result type returned by the service layer."""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from stockmind.utils.exceptions import UserError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a domain error, never both."""
    value: Optional[T] = None
    error: Optional[UserError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: UserError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
