from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Value:
    """Return ``value`` from the intercepted call."""

    value: Any


@dataclass(frozen=True)
class Raise:
    """Raise ``error`` from the intercepted call."""

    error: BaseException


Effect = Value | Raise


class Undefined:
    """Permissive stand-in: every attribute and every call yields itself."""

    def __getattr__(self, name: str) -> Undefined:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> Undefined:
        return self

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Undefined"

    __str__ = __repr__


class ReturnResolver:
    """Picks the value for one call from the closure and literal queues.

    Queued closures win over queued literals. Each queue drains from the
    front until a single item is left; that last item then answers every
    further call. With both queues empty, ``default`` is asked.
    """

    def __init__(self) -> None:
        self.return_queue: list[Any] = []
        self.effect_queue: list[Callable[..., Any]] = []

    def set_returns(self, values: Sequence[Any]) -> None:
        self.return_queue = list(values)

    def set_effects(self, callables: Sequence[Callable[..., Any]]) -> None:
        self.effect_queue = list(callables)

    def resolve(self, args: Sequence[Any], default: Callable[[], Any]) -> Any:
        if len(self.effect_queue) > 1:
            return self.effect_queue.pop(0)(*args)
        if self.effect_queue:
            return self.effect_queue[0](*args)
        if len(self.return_queue) > 1:
            return self.return_queue.pop(0)
        if self.return_queue:
            return self.return_queue[0]
        return default()

    def copy(self) -> ReturnResolver:
        clone = ReturnResolver()
        clone.return_queue = list(self.return_queue)
        clone.effect_queue = list(self.effect_queue)
        return clone
