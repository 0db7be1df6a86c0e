from collections.abc import Generator

import pytest

from mockwright import Container, MockwrightConfig


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mockwright")
    group.addoption(
        "--mockwright-detect-count-conflicts",
        action="store_true",
        default=None,
        help="Reject call-count bounds that can never be satisfied together.",
    )
    group.addoption(
        "--mockwright-warn-malformed-pattern",
        action="store_true",
        default=None,
        help="Log malformed regex argument patterns as warnings.",
    )


@pytest.fixture
def mockwright(request: pytest.FixtureRequest) -> Generator[Container, None, None]:
    """A mock Container verified when the test finishes.

    Usage:

        def test_checkout(mockwright):
            gateway = mockwright.mock("gateway")
            gateway.should_receive("charge").with_(100).once().and_return(True)
            assert Checkout(gateway).pay(100)
    """
    config = MockwrightConfig.from_env(
        detect_count_conflicts=request.config.getoption(
            "--mockwright-detect-count-conflicts", default=None
        ),
        warn_on_malformed_pattern=request.config.getoption(
            "--mockwright-warn-malformed-pattern", default=None
        ),
    )
    container = Container(config)

    yield container

    # Skip verification when the test body already failed
    if hasattr(request.node, "rep_call") and request.node.rep_call.failed:
        container.reset()
        return
    container.close()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: pytest.CallInfo,  # noqa: ARG001
) -> Generator[None, None, None]:
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
