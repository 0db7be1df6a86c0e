from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Sequence
from typing import Any

from mockwright.count_validators import AtLeast, AtMost, CountValidator, Exact, find_conflict
from mockwright.effects import Effect, Raise, ReturnResolver, Undefined, Value
from mockwright.errors import ConfigurationError, CountMismatch, UnsupportedOperation
from mockwright.formatting import format_args
from mockwright.matchers import MultiArgumentClosure, match_one
from mockwright.substitute import Substitute

logger = logging.getLogger(__name__)


class Expectation:
    """The contract for calls to one method of a mock.

    Built through a fluent chain::

        mock.should_receive("charge").with_(100, "/^EUR|USD$/").once().and_return(True)

    and consulted by the method's director on every call. ``verify()`` is
    run when the owning container closes.

    Args:
        mock: The substitute this expectation belongs to.
        name: The intercepted method name.
    """

    def __init__(self, mock: Substitute, name: str) -> None:
        self._mock = mock
        self._name = name
        self._expected_args: list[Any] = []
        self._no_args_expectation = False
        self._count_validators: list[CountValidator] = []
        self._count_validator_class: type[CountValidator] = Exact
        self._actual_count = 0
        self._returns = ReturnResolver()
        self._set_queue: dict[str, list[Any]] = {}
        self._order_number: int | None = None
        self._global_order_number: int | None = None
        self._throw = False
        self._globally = False
        self._passthru = False

    def __str__(self) -> str:
        return format_args(self._name, self._expected_args)

    def __repr__(self) -> str:
        return f"<Expectation {self} calls={self._actual_count}>"

    # ------------------------------------------------------------------ #
    # Call time                                                            #
    # ------------------------------------------------------------------ #

    def verify_call(self, args: Sequence[Any]) -> Any:
        """Account for one call and produce its result.

        Raises OrderViolation when the call arrives too early, or the
        queued exception when this expectation was set up to raise.
        """
        self.validate_order()
        self._actual_count += 1
        logger.debug("%s accepted call #%d", self, self._actual_count)
        if self._passthru:
            return self._mock.mockwright_call_real_method(self._name, args)
        effect = self._resolve_effect(args)
        if isinstance(effect, Raise):
            raise effect.error
        self._set_values()
        return effect.value

    def _resolve_effect(self, args: Sequence[Any]) -> Effect:
        value = self._returns.resolve(
            args, lambda: self._mock.mockwright_default_value_for(self._name)
        )
        if self._throw and isinstance(value, BaseException):
            return Raise(value)
        return Value(value)

    def _set_values(self) -> None:
        for name, values in self._set_queue.items():
            if values:
                self._mock.mockwright_assign_property(name, values.pop(0))

    def match_args(self, args: Sequence[Any]) -> bool:
        if not self._expected_args and not self._no_args_expectation:
            return True
        if self._is_multi_argument_closure():
            return self._expected_args[0].match(list(args))
        if len(args) != len(self._expected_args):
            return False
        config = self._mock.mockwright_config()
        return all(
            match_one(expected, actual, config)
            for expected, actual in zip(self._expected_args, args)
        )

    def _is_multi_argument_closure(self) -> bool:
        return len(self._expected_args) == 1 and isinstance(
            self._expected_args[0], MultiArgumentClosure
        )

    def validate_order(self) -> None:
        if self._order_number:
            self._mock.mockwright_ordering_scope().validate(str(self), self._order_number)
        if self._global_order_number:
            self._mock.mockwright_shared_ordering_scope().validate(
                str(self), self._global_order_number
            )

    def is_eligible(self) -> bool:
        """Whether another call may still be routed to this expectation."""
        return all(v.is_eligible(self._actual_count) for v in self._count_validators)

    def is_call_count_constrained(self) -> bool:
        return bool(self._count_validators)

    def verify(self) -> None:
        """Check the final call count against every attached bound."""
        mismatches: list[CountMismatch] = []
        for validator in self._count_validators:
            try:
                validator.validate(self._actual_count)
            except CountMismatch as exc:
                mismatches.append(exc)
        if mismatches:
            raise CountMismatch.combine(mismatches)

    # ------------------------------------------------------------------ #
    # Arguments                                                            #
    # ------------------------------------------------------------------ #

    def with_(self, *args: Any) -> Expectation:
        """Expect exactly these arguments, each matched by ``match_one``."""
        return self.with_args(list(args))

    def with_args(self, args_or_closure: Sequence[Any] | Callable[..., Any]) -> Expectation:
        if isinstance(args_or_closure, (list, tuple)):
            if not args_or_closure:
                return self.with_no_args()
            self._expected_args = list(args_or_closure)
        elif callable(args_or_closure):
            self._expected_args = [MultiArgumentClosure(args_or_closure)]
        else:
            raise ConfigurationError(
                f"with_args() got {args_or_closure!r}; "
                "only a list, a tuple or a callable is allowed"
            )
        self._no_args_expectation = False
        return self

    def with_no_args(self) -> Expectation:
        self._no_args_expectation = True
        self._expected_args = []
        return self

    def with_any_args(self) -> Expectation:
        self._no_args_expectation = False
        self._expected_args = []
        return self

    # ------------------------------------------------------------------ #
    # Results                                                              #
    # ------------------------------------------------------------------ #

    def and_return(self, *values: Any) -> Expectation:
        """Return each value once in turn; the last one repeats."""
        self._returns.set_returns(values)
        return self

    def and_return_values(self, values: Sequence[Any]) -> Expectation:
        return self.and_return(*values)

    def and_return_using(self, *callables: Callable[..., Any]) -> Expectation:
        """Compute results with callables given the call's arguments.

        Queued callables take precedence over queued values.
        """
        self._returns.set_effects(callables)
        return self

    def and_return_self(self) -> Expectation:
        return self.and_return(self._mock)

    def and_return_undefined(self) -> Expectation:
        return self.and_return(Undefined())

    def and_return_none(self) -> Expectation:
        return self.and_return(None)

    def and_return_true(self) -> Expectation:
        return self.and_return(True)

    def and_return_false(self) -> Expectation:
        return self.and_return(False)

    def and_raise(self, exception: BaseException | type[BaseException], *args: Any) -> Expectation:
        """Raise ``exception`` (an instance, or a class built with ``args``)."""
        if isinstance(exception, BaseException):
            error = exception
        elif isinstance(exception, type) and issubclass(exception, BaseException):
            error = exception(*args)
        else:
            raise ConfigurationError(
                f"and_raise() needs an exception instance or class, got {exception!r}"
            )
        self._throw = True
        return self.and_return(error)

    def and_raise_exceptions(self, exceptions: Sequence[BaseException]) -> Expectation:
        for exception in exceptions:
            if not isinstance(exception, BaseException):
                raise ConfigurationError(
                    "You must pass a list of exception instances to "
                    f"and_raise_exceptions(), got {exception!r}"
                )
        self._throw = True
        return self.and_return_values(exceptions)

    def and_set(self, name: str, value: Any, *values: Any) -> Expectation:
        """Assign ``name`` on the mock on each call, one queued value per call."""
        self._set_queue[name] = [value, *values]
        return self

    def set(self, name: str, value: Any, *values: Any) -> Expectation:
        return self.and_set(name, value, *values)

    # ------------------------------------------------------------------ #
    # Call counts                                                          #
    # ------------------------------------------------------------------ #

    def times(self, limit: int | None = None) -> Expectation:
        if limit is None:
            return self
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ConfigurationError(
                f"The passed times limit should be an integer value, got {limit!r}"
            )
        validator = self._count_validator_class(self, limit)
        if self._mock.mockwright_config().detect_count_conflicts:
            conflict = find_conflict([*self._count_validators, validator])
            if conflict:
                raise ConfigurationError(f"{self} can never be satisfied: {conflict}")
        self._count_validators.append(validator)
        self._count_validator_class = Exact
        return self

    def never(self) -> Expectation:
        return self.times(0)

    def once(self) -> Expectation:
        return self.times(1)

    def twice(self) -> Expectation:
        return self.times(2)

    def at_least(self) -> Expectation:
        """Make the next ``times()`` a lower bound."""
        self._count_validator_class = AtLeast
        return self

    def at_most(self) -> Expectation:
        """Make the next ``times()`` an upper bound."""
        self._count_validator_class = AtMost
        return self

    def between(self, minimum: int, maximum: int) -> Expectation:
        return self.at_least().times(minimum).at_most().times(maximum)

    def zero_or_more_times(self) -> Expectation:
        return self.at_least().never()

    # ------------------------------------------------------------------ #
    # Ordering                                                             #
    # ------------------------------------------------------------------ #

    def ordered(self, group: str | None = None) -> Expectation:
        """Require this call to come after every earlier-ordered one.

        Expectations ordered under the same ``group`` share a position.
        After ``globally()`` the order spans all mocks of the container.
        """
        if self._globally:
            scope = self._mock.mockwright_shared_ordering_scope()
            self._global_order_number = scope.allocate(group)
        else:
            scope = self._mock.mockwright_ordering_scope()
            self._order_number = scope.allocate(group)
        self._globally = False
        return self

    def globally(self) -> Expectation:
        self._globally = True
        return self

    def get_order_number(self) -> int | None:
        return self._order_number

    def get_global_order_number(self) -> int | None:
        return self._global_order_number

    # ------------------------------------------------------------------ #
    # Misc                                                                 #
    # ------------------------------------------------------------------ #

    def by_default(self) -> Expectation:
        """Use this expectation only until a regular one is declared."""
        director = self._mock.mockwright_lookup_director(self._name)
        if director is not None:
            director.make_expectation_default(self)
        return self

    def passthru(self) -> Expectation:
        """Forward calls to the real object instead of producing a result."""
        if not self._mock.mockwright_can_pass_through():
            raise UnsupportedOperation(
                "Mocks not created around a real object are incapable of "
                f"passing method calls through: {self}"
            )
        self._passthru = True
        return self

    def get_mock(self) -> Substitute:
        return self._mock

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return self._actual_count

    def clone(self) -> Expectation:
        return copy.copy(self)

    def __copy__(self) -> Expectation:
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._expected_args = list(self._expected_args)
        clone._returns = self._returns.copy()
        clone._set_queue = {name: list(values) for name, values in self._set_queue.items()}
        clone._count_validators = []
        for validator in self._count_validators:
            fresh = copy.copy(validator)
            fresh.expectation = clone
            clone._count_validators.append(fresh)
        return clone
