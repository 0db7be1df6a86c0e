from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from mockwright.config import MockwrightConfig
    from mockwright.director import ExpectationDirector
    from mockwright.ordering import OrderingScope


class Substitute(Protocol):
    """What an expectation needs from the object it belongs to.

    Names carry a ``mockwright_`` prefix so they never shadow a method
    the test wants to mock.
    """

    def mockwright_call_real_method(self, name: str, args: Sequence[Any]) -> Any:
        ...

    def mockwright_can_pass_through(self) -> bool:
        ...

    def mockwright_default_value_for(self, name: str) -> Any:
        ...

    def mockwright_assign_property(self, name: str, value: Any) -> None:
        ...

    def mockwright_lookup_director(self, name: str) -> ExpectationDirector | None:
        ...

    def mockwright_ordering_scope(self) -> OrderingScope:
        ...

    def mockwright_shared_ordering_scope(self) -> OrderingScope:
        ...

    def mockwright_config(self) -> MockwrightConfig:
        ...
