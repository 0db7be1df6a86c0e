from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from mockwright.errors import CountMismatch

if TYPE_CHECKING:
    from mockwright.expectation import Expectation


class CountValidator(ABC):
    """A bound on how many times an expectation may be called."""

    comparison = ""

    def __init__(self, expectation: Expectation, limit: int) -> None:
        self.expectation = expectation
        self.limit = limit

    def is_eligible(self, n: int) -> bool:
        """Whether one more call is still permitted after ``n`` calls."""
        return n < self.limit

    @abstractmethod
    def validate(self, n: int) -> None:
        ...

    def _mismatch(self, n: int) -> CountMismatch:
        return CountMismatch(
            str(self.expectation),
            self.expectation.name,
            self.limit,
            n,
            self.comparison,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} limit={self.limit}>"


class Exact(CountValidator):
    comparison = "exactly"

    def validate(self, n: int) -> None:
        if self.limit != n:
            raise self._mismatch(n)


class AtLeast(CountValidator):
    comparison = "at least"

    def is_eligible(self, n: int) -> bool:
        return True

    def validate(self, n: int) -> None:
        if self.limit > n:
            raise self._mismatch(n)


class AtMost(CountValidator):
    comparison = "at most"

    def validate(self, n: int) -> None:
        if self.limit < n:
            raise self._mismatch(n)


def find_conflict(validators: list[CountValidator]) -> str | None:
    """Describe why ``validators`` can never pass together, or return None."""
    exact = {v.limit for v in validators if isinstance(v, Exact)}
    if len(exact) > 1:
        return f"conflicting exact counts {sorted(exact)}"
    lower = max((v.limit for v in validators if isinstance(v, (Exact, AtLeast))), default=0)
    upper = min(
        (v.limit for v in validators if isinstance(v, (Exact, AtMost))), default=None
    )
    if upper is not None and lower > upper:
        return f"lower bound {lower} exceeds upper bound {upper}"
    return None
