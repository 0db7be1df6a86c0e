from __future__ import annotations

from typing import Any


class MockwrightError(Exception):
    """Base class for every error raised by mockwright."""


class ConfigurationError(MockwrightError, ValueError):
    """An expectation was declared with invalid input."""


class UnsupportedOperation(MockwrightError):
    """The substitute cannot do what the expectation asks of it."""


class OrderViolation(MockwrightError, AssertionError):
    def __init__(self, signature: str, expected_order: int, actual_order: int) -> None:
        self.signature = signature
        self.expected_order = expected_order
        self.actual_order = actual_order
        super().__init__(
            f"Method {signature} called out of order: "
            f"expected order {expected_order}, was {actual_order}"
        )


class CountMismatch(MockwrightError, AssertionError):
    def __init__(
        self,
        signature: str,
        method_name: str,
        expected: int,
        actual: int,
        comparison: str,
        related: list[CountMismatch] | None = None,
    ) -> None:
        self.signature = signature
        self.method_name = method_name
        self.expected = expected
        self.actual = actual
        self.comparison = comparison
        self.related = related or [self]
        lines = [
            f"Method {signature} should be called "
            f"{comparison} {expected} times but called {actual} times "
            f"(expected {comparison} {expected}, got {actual})."
        ]
        for other in self.related[1:]:
            lines.append(
                f"  also: expected {other.comparison} {other.expected}, "
                f"got {other.actual}"
            )
        super().__init__("\n".join(lines))

    @classmethod
    def combine(cls, mismatches: list[CountMismatch]) -> CountMismatch:
        """Fold several mismatches of one expectation into a single error."""
        if len(mismatches) == 1:
            return mismatches[0]
        first = mismatches[0]
        return cls(
            first.signature,
            first.method_name,
            first.expected,
            first.actual,
            first.comparison,
            related=[*mismatches],
        )


class NoMatchingExpectation(MockwrightError, AssertionError):
    def __init__(self, method_name: str, args: tuple[Any, ...], signature: str) -> None:
        self.method_name = method_name
        self.call_args = args
        self.signature = signature
        super().__init__(
            f"No matching handler found for {signature}. "
            "Either the method was unexpected or its arguments matched "
            "no expected argument list for this method."
        )
