import pytest

from mockwright import Container, Mock, MockwrightConfig


@pytest.fixture
def container() -> Container:
    return Container(MockwrightConfig())


@pytest.fixture
def mock(container: Container) -> Mock:
    return container.mock("gateway")
