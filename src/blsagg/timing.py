"""Wall-clock measurement around otherwise pure calls."""

from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Timed(Generic[T]):
    result: T
    elapsed_ns: int

    @property
    def time_ms(self) -> float:
        return self.elapsed_ns / 1e6


def measure_time(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Timed[T]:
    """Call ``fn`` and return its unchanged result with the elapsed time."""
    t0 = time.perf_counter_ns()
    result = fn(*args, **kwargs)
    return Timed(result=result, elapsed_ns=time.perf_counter_ns() - t0)


def timed(fn: Callable[..., T]) -> Callable[..., Timed[T]]:
    """Decorator form of measure_time."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Timed[T]:
        return measure_time(fn, *args, **kwargs)

    return wrapper
