from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from mockwright.config import MockwrightConfig
from mockwright.director import ExpectationDirector
from mockwright.errors import UnsupportedOperation
from mockwright.expectation import Expectation
from mockwright.ordering import OrderingScope

if TYPE_CHECKING:
    from mockwright.container import Container

logger = logging.getLogger(__name__)


class Mock:
    """A substitute object whose methods are driven by declared expectations.

    Calls to any name passed to ``should_receive`` are intercepted. When built
    around a ``real`` object, every other attribute is forwarded to it and
    expectations may ``passthru()`` to its methods.

    Args:
        name:      Label used in logs and ordering diagnostics.
        real:      Optional object to forward to (a partial mock).
        container: Session that owns the shared ordering scope.
        config:    Overrides the container's config.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        real: Any = None,
        container: Container | None = None,
        config: MockwrightConfig | None = None,
    ) -> None:
        self._mockwright_name = name or (
            type(real).__name__ if real is not None else "Mock"
        )
        self._mockwright_real = real
        self._mockwright_container = container
        if config is None:
            config = container.config if container is not None else MockwrightConfig()
        self._mockwright_settings = config
        self._mockwright_directors: dict[str, ExpectationDirector] = {}
        self._mockwright_ordering = OrderingScope(self._mockwright_name)
        self._mockwright_shared = (
            container.mockwright_shared_ordering_scope()
            if container is not None
            else OrderingScope(f"{self._mockwright_name} (global)")
        )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_mockwright") or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        director = self._mockwright_directors.get(name)
        if director is not None:
            return self._mockwright_method(director)
        if self._mockwright_real is not None:
            return getattr(self._mockwright_real, name)
        raise AttributeError(
            f"{self._mockwright_name} has no expectation declared for {name!r}"
        )

    def __repr__(self) -> str:
        return f"<Mock {self._mockwright_name}>"

    @staticmethod
    def _mockwright_method(director: ExpectationDirector) -> Callable[..., Any]:
        def method(*args: Any) -> Any:
            return director.call(args)

        method.__name__ = director.name
        return method

    # Declaration API

    def should_receive(self, *names: str) -> Any:
        """Declare an expectation per method name.

        Returns the expectation, or a list of them when several names are given.
        """
        expectations = []
        for name in names:
            director = self._mockwright_directors.get(name)
            if director is None:
                director = ExpectationDirector(name, self)
                self._mockwright_directors[name] = director
            expectation = Expectation(self, name)
            director.add_expectation(expectation)
            expectations.append(expectation)
            logger.debug("%s: declared expectation for %s()", self._mockwright_name, name)
        return expectations[0] if len(expectations) == 1 else expectations

    def should_not_receive(self, name: str) -> Expectation:
        return self.should_receive(name).never()

    def mockwright_verify(self) -> None:
        for director in self._mockwright_directors.values():
            director.verify()

    @property
    def mockwright_directors(self) -> dict[str, ExpectationDirector]:
        return dict(self._mockwright_directors)

    # Substitute protocol

    def mockwright_call_real_method(self, name: str, args: Sequence[Any]) -> Any:
        if self._mockwright_real is None:
            raise UnsupportedOperation(
                f"{self._mockwright_name} has no real object to call {name}() on"
            )
        return getattr(self._mockwright_real, name)(*args)

    def mockwright_can_pass_through(self) -> bool:
        return self._mockwright_real is not None

    def mockwright_default_value_for(self, name: str) -> Any:
        return None

    def mockwright_assign_property(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def mockwright_lookup_director(self, name: str) -> ExpectationDirector | None:
        return self._mockwright_directors.get(name)

    def mockwright_ordering_scope(self) -> OrderingScope:
        return self._mockwright_ordering

    def mockwright_shared_ordering_scope(self) -> OrderingScope:
        return self._mockwright_shared

    def mockwright_config(self) -> MockwrightConfig:
        return self._mockwright_settings
