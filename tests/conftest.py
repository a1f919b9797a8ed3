import pytest

from promptgate.transport import BearerTokenClient
from tests.fakes import FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> BearerTokenClient:
    return BearerTokenClient(session=session)
