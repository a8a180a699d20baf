"""Explicit result values for contained failures.

Component boundaries call user code through `capture`, so failure
containment shows up in the types rather than in scattered catch-all blocks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    INVALID_PARAMETER = "invalid_parameter"
    LOGIC_FAILURE = "logic_failure"
    ITEM_FAILURE = "item_failure"
    DRIVER_FAILURE = "driver_failure"


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a value, or an error kind with the exception that caused it."""

    value: T | None = None
    error_kind: ErrorKind | None = None
    error: Exception | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls, kind: ErrorKind, error: Exception | None = None, message: str = ""
    ) -> Result[T]:
        if not message and error is not None:
            message = str(error) or type(error).__name__
        return cls(error_kind=kind, error=error, message=message)


def capture(
    fn: Callable[..., Any],
    /,
    *args: Any,
    kind: ErrorKind = ErrorKind.LOGIC_FAILURE,
    **kwargs: Any,
) -> Result[Any]:
    """Call `fn` and wrap its return value, or the exception it raised, in a Result.

    A Result returned by `fn` is passed through unchanged.
    """

    try:
        value = fn(*args, **kwargs)
    except Exception as exc:
        return Result.failure(kind, exc)
    if isinstance(value, Result):
        return value
    return Result.success(value)
