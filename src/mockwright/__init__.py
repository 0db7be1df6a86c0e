from mockwright.config import MockwrightConfig
from mockwright.container import Container
from mockwright.count_validators import AtLeast, AtMost, CountValidator, Exact
from mockwright.director import CallRecord, ExpectationDirector
from mockwright.effects import Raise, ReturnResolver, Undefined, Value
from mockwright.errors import (
    ConfigurationError,
    CountMismatch,
    MockwrightError,
    NoMatchingExpectation,
    OrderViolation,
    UnsupportedOperation,
)
from mockwright.expectation import Expectation
from mockwright.matchers import (
    AnyOf,
    AnyValue,
    Closure,
    Contains,
    Ducktype,
    HasKey,
    HasValue,
    Matcher,
    MultiArgumentClosure,
    MustBe,
    Not,
    NotAnyOf,
    Subset,
    Type,
    match_one,
)
from mockwright.mock import Mock
from mockwright.ordering import OrderingScope
from mockwright.substitute import Substitute

__all__ = [
    "AnyOf",
    "AnyValue",
    "AtLeast",
    "AtMost",
    "CallRecord",
    "Closure",
    "ConfigurationError",
    "Container",
    "Contains",
    "CountMismatch",
    "CountValidator",
    "Ducktype",
    "Exact",
    "Expectation",
    "ExpectationDirector",
    "HasKey",
    "HasValue",
    "Matcher",
    "Mock",
    "MockwrightConfig",
    "MockwrightError",
    "MultiArgumentClosure",
    "MustBe",
    "NoMatchingExpectation",
    "Not",
    "NotAnyOf",
    "OrderViolation",
    "OrderingScope",
    "Raise",
    "ReturnResolver",
    "Substitute",
    "Subset",
    "Type",
    "Undefined",
    "UnsupportedOperation",
    "Value",
    "match_one",
]
