from __future__ import annotations

import logging

from mockwright.errors import OrderViolation

logger = logging.getLogger(__name__)


class OrderingScope:
    """Hands out order tokens and checks calls arrive in non-decreasing order.

    Every mock owns one scope; a container owns the shared one used by
    ``globally().ordered()``. Expectations ordered under the same group name
    share a token, so they may be called in any order relative to each other.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._next_token = 1
        self._groups: dict[str, int] = {}
        self._highest_validated = 0

    @property
    def groups(self) -> dict[str, int]:
        return dict(self._groups)

    @property
    def highest_validated(self) -> int:
        return self._highest_validated

    def allocate(self, group: str | None = None) -> int:
        if group is not None and group in self._groups:
            return self._groups[group]
        token = self._next_token
        self._next_token += 1
        if group is not None:
            self._groups[group] = token
        return token

    def validate(self, signature: str, token: int) -> None:
        if token < self._highest_validated:
            raise OrderViolation(signature, self._highest_validated, token)
        logger.debug("%s: %s passed order check at %d", self.name, signature, token)
        self._highest_validated = max(self._highest_validated, token)
