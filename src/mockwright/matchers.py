"""Argument patterns and matcher objects.

An expected argument is one of four kinds, decided by ``classify``:

  LiteralPattern   compared by identity, then by loose equality for plain values
  TextPattern      a delimited regex (``/^a.*z$/i``) for scalar actuals, or a
                   class name for object actuals
  PredicatePattern a ``Matcher`` instance, asked via ``match(actual)``
  ExternalPattern  anything else exposing ``matches(actual)`` (PyHamcrest and
                   friends)

``match_one`` walks those rules in a fixed priority; the first success wins.
"""

from __future__ import annotations

import logging
import numbers
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

from mockwright.config import MockwrightConfig

logger = logging.getLogger(__name__)

SCALAR_TYPES = (type(None), bool, numbers.Number, str, bytes)
PLAIN_TYPES = SCALAR_TYPES + (list, tuple, dict, set, frozenset)

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}
_BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_plain(value: Any) -> bool:
    """True for values compared by content rather than as objects."""
    return isinstance(value, PLAIN_TYPES)


def _strictly_equal(expected: Any, actual: Any) -> bool:
    return expected is actual or (type(expected) is type(actual) and expected == actual)


@lru_cache(maxsize=256)
def compile_delimited(text: str) -> re.Pattern[str]:
    """Compile a delimited pattern such as ``/^a.*z$/i`` or ``#\\d+#``.

    Raises ``re.error`` when ``text`` is not a well-formed delimited pattern.
    """
    if len(text) < 2:
        raise re.error("empty pattern")
    opener = text[0]
    if opener.isalnum() or opener.isspace() or opener == "\\":
        raise re.error(f"delimiter must not be alphanumeric or backslash: {opener!r}")
    closer = _BRACKET_DELIMITERS.get(opener, opener)
    end = text.rfind(closer)
    if end <= 0:
        raise re.error(f"no ending delimiter {closer!r} found")
    flags = 0
    for modifier in text[end + 1 :]:
        if modifier not in _REGEX_FLAGS:
            raise re.error(f"unknown modifier {modifier!r}")
        flags |= _REGEX_FLAGS[modifier]
    try:
        return re.compile(text[1:end], flags)
    except (OverflowError, RecursionError) as exc:
        raise re.error(f"pattern too large to compile: {exc}") from exc


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _match_regex(text: str, actual: Any, config: MockwrightConfig | None) -> bool:
    try:
        pattern = compile_delimited(text)
    except re.error as exc:
        level = (
            logging.WARNING
            if config is not None and config.warn_on_malformed_pattern
            else logging.DEBUG
        )
        logger.log(level, "Treating %r as a non-matching pattern: %s", text, exc)
        return False
    return pattern.search(_as_text(actual)) is not None


def is_instance_of_named(actual: Any, class_name: str) -> bool:
    """True when the type of ``actual``, or one of its bases, is named ``class_name``."""
    for cls in type(actual).__mro__:
        if class_name in (
            cls.__name__,
            cls.__qualname__,
            f"{cls.__module__}.{cls.__qualname__}",
        ):
            return True
    return False


# ------------------------------------------------------------------ #
# Matcher objects                                                      #
# ------------------------------------------------------------------ #


class Matcher(ABC):
    """A predicate over one actual argument."""

    def __init__(self, expected: Any = None) -> None:
        self._expected = expected

    @abstractmethod
    def match(self, actual: Any) -> bool:
        ...

    def __str__(self) -> str:
        return f"<{type(self).__name__}>"

    __repr__ = __str__


class AnyValue(Matcher):
    def match(self, actual: Any) -> bool:
        return True

    def __str__(self) -> str:
        return "<Any>"


class AnyOf(Matcher):
    def __init__(self, *values: Any) -> None:
        super().__init__(values)

    def match(self, actual: Any) -> bool:
        return any(_strictly_equal(v, actual) for v in self._expected)

    def __str__(self) -> str:
        return f"<AnyOf{list(self._expected)!r}>"


class NotAnyOf(AnyOf):
    def match(self, actual: Any) -> bool:
        return not super().match(actual)

    def __str__(self) -> str:
        return f"<NotAnyOf{list(self._expected)!r}>"


class Not(Matcher):
    def match(self, actual: Any) -> bool:
        return not _strictly_equal(self._expected, actual)

    def __str__(self) -> str:
        return f"<Not {self._expected!r}>"


class MustBe(Matcher):
    def match(self, actual: Any) -> bool:
        return _strictly_equal(self._expected, actual)

    def __str__(self) -> str:
        return f"<MustBe {self._expected!r}>"


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "int": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "float": lambda v: isinstance(v, float),
    "numeric": lambda v: isinstance(v, numbers.Number) and not isinstance(v, bool),
    "str": lambda v: isinstance(v, str),
    "bytes": lambda v: isinstance(v, bytes),
    "bool": lambda v: isinstance(v, bool),
    "list": lambda v: isinstance(v, list),
    "tuple": lambda v: isinstance(v, tuple),
    "dict": lambda v: isinstance(v, dict),
    "set": lambda v: isinstance(v, (set, frozenset)),
    "none": lambda v: v is None,
    "callable": callable,
    "iterable": lambda v: isinstance(v, Iterable),
    "scalar": is_scalar,
    "object": lambda v: not is_plain(v),
}


class Type(Matcher):
    """Match by class, or by a builtin type name such as ``"int"`` or ``"callable"``."""

    def match(self, actual: Any) -> bool:
        if isinstance(self._expected, type):
            return isinstance(actual, self._expected)
        check = _TYPE_CHECKS.get(str(self._expected).lower())
        if check is not None:
            return bool(check(actual))
        return is_instance_of_named(actual, str(self._expected))

    def __str__(self) -> str:
        name = getattr(self._expected, "__name__", self._expected)
        return f"<{str(name).capitalize()}>"


class Closure(Matcher):
    def __init__(self, predicate: Callable[[Any], Any]) -> None:
        super().__init__(predicate)

    def match(self, actual: Any) -> bool:
        return bool(self._expected(actual))

    def __str__(self) -> str:
        return "<Closure===true>"


class MultiArgumentClosure(Matcher):
    """Receives the whole argument list, spread as positional arguments."""

    def __init__(self, predicate: Callable[..., Any]) -> None:
        super().__init__(predicate)

    def match(self, actual: Any) -> bool:
        return bool(self._expected(*actual))

    def __str__(self) -> str:
        return "<MultiArgumentClosure===true>"


class Ducktype(Matcher):
    def __init__(self, *method_names: str) -> None:
        super().__init__(method_names)

    def match(self, actual: Any) -> bool:
        if is_plain(actual):
            return False
        return all(callable(getattr(actual, name, None)) for name in self._expected)

    def __str__(self) -> str:
        return f"<Ducktype[{', '.join(self._expected)}]>"


class HasKey(Matcher):
    def match(self, actual: Any) -> bool:
        return isinstance(actual, Mapping) and self._expected in actual

    def __str__(self) -> str:
        return f"<HasKey[{self._expected!r}]>"


class HasValue(Matcher):
    def match(self, actual: Any) -> bool:
        if isinstance(actual, Mapping):
            return self._expected in actual.values()
        if isinstance(actual, (str, bytes)) or not isinstance(actual, Iterable):
            return False
        return self._expected in actual

    def __str__(self) -> str:
        return f"<HasValue[{self._expected!r}]>"


class Contains(Matcher):
    """Every expected value must appear among the actual container's values."""

    def __init__(self, *values: Any) -> None:
        super().__init__(values)

    def match(self, actual: Any) -> bool:
        if isinstance(actual, Mapping):
            haystack = list(actual.values())
        elif isinstance(actual, (str, bytes)) or not isinstance(actual, Iterable):
            return False
        else:
            haystack = list(actual)
        return all(value in haystack for value in self._expected)

    def __str__(self) -> str:
        return f"<Contains[{', '.join(repr(v) for v in self._expected)}]>"


class Subset(Matcher):
    def __init__(self, subset: Mapping[Any, Any]) -> None:
        super().__init__(dict(subset))

    def match(self, actual: Any) -> bool:
        if not isinstance(actual, Mapping):
            return False
        return all(k in actual and actual[k] == v for k, v in self._expected.items())

    def __str__(self) -> str:
        return f"<Subset{self._expected!r}>"


# ------------------------------------------------------------------ #
# Pattern classification and dispatch                                  #
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class LiteralPattern:
    value: Any


@dataclass(frozen=True)
class TextPattern:
    text: str


@dataclass(frozen=True)
class PredicatePattern:
    matcher: Matcher


@dataclass(frozen=True)
class ExternalPattern:
    matcher: Any


ArgumentPattern = Union[LiteralPattern, TextPattern, PredicatePattern, ExternalPattern]


def classify(expected: Any) -> ArgumentPattern:
    if isinstance(expected, Matcher):
        return PredicatePattern(expected)
    if isinstance(expected, str):
        return TextPattern(expected)
    if not is_plain(expected) and callable(getattr(expected, "matches", None)):
        return ExternalPattern(expected)
    return LiteralPattern(expected)


def match_one(expected: Any, actual: Any, config: MockwrightConfig | None = None) -> bool:
    """Decide whether ``actual`` satisfies the expected argument ``expected``."""
    if expected is actual:
        return True
    if is_plain(expected) and is_plain(actual) and expected == actual:
        return True

    pattern = classify(expected)
    if isinstance(pattern, TextPattern):
        if is_scalar(actual):
            return _match_regex(pattern.text, actual, config)
        if not is_plain(actual):
            return is_instance_of_named(actual, pattern.text)
        return False
    if isinstance(pattern, PredicatePattern):
        return bool(pattern.matcher.match(actual))
    if isinstance(pattern, ExternalPattern):
        return bool(pattern.matcher.matches(actual))
    return False
