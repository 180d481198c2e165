"""Result[T, E] — outcome of a unit of work, Ok or Err.

Scopes capture what the work produced before deciding how to resolve the
boundary, so the resolution logic branches on a value rather than on an
``except`` clause.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


class Ok(Generic[T]):
    """Successful outcome."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Failed outcome; ``unwrap`` re-raises the original exception object."""

    __slots__ = ("_error",)

    def __init__(self, error: E) -> None:
        self._error = error

    @property
    def error(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self._error

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


type Result[T, E] = Ok[T] | Err[E]


def capture(work: Callable[[], T]) -> "Ok[T] | Err[BaseException]":
    """Run *work* and wrap its return value or raised exception."""
    try:
        return Ok(work())
    except BaseException as exc:  # noqa: BLE001 – re-raised by the caller via unwrap()
        return Err(exc)


async def acapture(work: Callable[[], Awaitable[T]]) -> "Ok[T] | Err[BaseException]":
    """Await *work* and wrap its result or raised exception (cancellation included)."""
    try:
        return Ok(await work())
    except BaseException as exc:  # noqa: BLE001 – re-raised by the caller via unwrap()
        return Err(exc)


__all__ = ["Err", "Ok", "Result", "acapture", "capture"]
