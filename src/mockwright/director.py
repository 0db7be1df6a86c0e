from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from mockwright.errors import NoMatchingExpectation
from mockwright.formatting import format_args

if TYPE_CHECKING:
    from mockwright.expectation import Expectation
    from mockwright.substitute import Substitute

logger = logging.getLogger(__name__)


class CallRecord:
    """One invocation of a mocked method."""

    def __init__(self, name: str, args: tuple[Any, ...]) -> None:
        self.name = name
        self.args = args

    def __repr__(self) -> str:
        return format_args(self.name, self.args)


class ExpectationDirector:
    """All expectations declared for one method name on one mock."""

    def __init__(self, name: str, mock: Substitute) -> None:
        self.name = name
        self.mock = mock
        self._expectations: list[Expectation] = []
        self._defaults: list[Expectation] = []
        self.calls: list[CallRecord] = []

    @property
    def expectations(self) -> list[Expectation]:
        return list(self._expectations)

    @property
    def defaults(self) -> list[Expectation]:
        return list(self._defaults)

    @property
    def expectation_count(self) -> int:
        return len(self._expectations) or len(self._defaults)

    def add_expectation(self, expectation: Expectation) -> None:
        self._expectations.append(expectation)

    def make_expectation_default(self, expectation: Expectation) -> None:
        if expectation in self._expectations:
            self._expectations.remove(expectation)
        self._defaults.insert(0, expectation)

    def find_expectation(self, args: Sequence[Any]) -> Expectation | None:
        found = None
        if self._expectations:
            found = self._find_in(self._expectations, args)
        if found is None and self._defaults:
            found = self._find_in(self._defaults, args)
        return found

    def _find_in(self, expectations: list[Expectation], args: Sequence[Any]) -> Expectation | None:
        """First eligible match wins; an exhausted match is the fallback."""
        matching = [e for e in expectations if e.match_args(args)]
        for expectation in matching:
            if expectation.is_eligible():
                return expectation
        return matching[0] if matching else None

    def call(self, args: Sequence[Any]) -> Any:
        args = tuple(args)
        self.calls.append(CallRecord(self.name, args))
        expectation = self.find_expectation(args)
        if expectation is None:
            raise NoMatchingExpectation(self.name, args, format_args(self.name, args))
        logger.debug("%s dispatched to %s", format_args(self.name, args), expectation)
        return expectation.verify_call(args)

    def verify(self) -> None:
        if self._expectations:
            for expectation in self._expectations:
                expectation.verify()
        else:
            for expectation in self._defaults:
                expectation.verify()

    @property
    def call_count(self) -> int:
        return len(self.calls)
