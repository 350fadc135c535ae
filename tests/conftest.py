import pytest

from fakes import FakeLoop, FakeTransport


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def transport():
    return FakeTransport()
