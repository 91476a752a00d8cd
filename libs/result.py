"""Result type shared by use cases and services

Expected failures travel as values instead of exceptions:

    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
"""

from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Error(BaseModel):
    """Structured error carried by a failed Result"""

    code: str
    message: str
    reason: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class Result(Generic[T]):
    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self.value = value
        self.error = error

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise ValueError(f"{self.error.code}: {self.error.message}")
        return self.value

    def __repr__(self) -> str:
        if self.error is not None:
            return f"Result(error={self.error.code!r})"
        return f"Result(value={self.value!r})"


class Return:
    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)
