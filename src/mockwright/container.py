from __future__ import annotations

import logging
from typing import Any

from mockwright.config import MockwrightConfig
from mockwright.mock import Mock
from mockwright.ordering import OrderingScope

logger = logging.getLogger(__name__)


class Container:
    """One mocking session.

    The container:
    1. Creates mocks that share its config and its global ordering scope.
    2. Verifies every expectation of every mock on ``verify()``/``close()``.
    3. Works as a context manager, verifying on a clean exit only so an
       error raised inside the block is not masked by count failures.

    Args:
        config: Session switches. Defaults to ``MockwrightConfig.from_env()``.
    """

    def __init__(self, config: MockwrightConfig | None = None) -> None:
        self.config = config or MockwrightConfig.from_env()
        self._mocks: list[Mock] = []
        self._ordering = OrderingScope("global")

    def __enter__(self) -> Container:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, tb: object) -> None:
        if exc_type is None:
            self.close()
        else:
            self.reset()

    def mock(self, name: str | None = None, *, real: Any = None) -> Mock:
        mock = Mock(name, real=real, container=self)
        self._mocks.append(mock)
        logger.debug("Created %r (%d mocks in session)", mock, len(self._mocks))
        return mock

    @property
    def mocks(self) -> list[Mock]:
        return list(self._mocks)

    def mockwright_shared_ordering_scope(self) -> OrderingScope:
        return self._ordering

    def verify(self) -> None:
        for mock in self._mocks:
            mock.mockwright_verify()
        logger.info("Verified %d mock(s)", len(self._mocks))

    def close(self) -> None:
        """Verify everything, then forget the session's mocks."""
        try:
            self.verify()
        finally:
            self.reset()

    def reset(self) -> None:
        """Forget the session's mocks without verifying them."""
        if self._mocks:
            logger.debug("Discarding %d mock(s)", len(self._mocks))
        self._mocks.clear()
        self._ordering = OrderingScope("global")
