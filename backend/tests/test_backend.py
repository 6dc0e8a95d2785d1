import pytest

from dailytasks.core import backend as backend_module
from dailytasks.core.backend import get_backend

from .fakes import FakeSupabase


@pytest.fixture()
def created_clients(monkeypatch):
    clients = []

    async def fake_acreate_client(url, key):
        client = FakeSupabase()
        clients.append(client)
        return client

    monkeypatch.setattr(backend_module, "acreate_client", fake_acreate_client)
    return clients


@pytest.mark.asyncio
async def test_request_client_is_bound_to_the_token_and_closed(created_clients) -> None:
    dependency = get_backend(token="user-token")
    client = await dependency.__anext__()

    assert client.postgrest.token == "user-token"
    assert not client.postgrest.closed

    await dependency.aclose()

    assert client.postgrest.closed
    assert client.auth.closed


@pytest.mark.asyncio
async def test_anonymous_client_is_closed_too(created_clients) -> None:
    dependency = get_backend(token=None)
    client = await dependency.__anext__()
    await dependency.aclose()

    assert client.postgrest.token is None
    assert client.postgrest.closed and client.auth.closed
    assert len(created_clients) == 1
