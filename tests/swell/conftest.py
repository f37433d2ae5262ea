import httpx
import pytest
from pytest_asyncio import fixture as async_fixture

from store_connectors.swell.api_client import SwellClient


class RecordingHandler:
    """Handler pour httpx.MockTransport : enregistre les requêtes reçues et délègue la réponse."""

    def __init__(self, responder):
        self.responder = responder
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture(autouse=True)
def clean_swell_env(monkeypatch):
    """Isole les tests des variables d'environnement de la machine."""
    for var in ("SWELL_STORE_ID", "SWELL_SECRET_KEY", "SWELL_API_URL", "SWELL_TIMEOUT", "APP_NAME", "APP_VERSION"):
        monkeypatch.delenv(var, raising=False)


@async_fixture
async def make_client():
    """
    Factory de SwellClient branchés sur un httpx.MockTransport.
    Retourne (client, handler) ; les clients sont fermés en fin de test.
    """
    created = []

    def _make(responder, options=None):
        handler = RecordingHandler(responder)
        client = SwellClient("id", "key", options, transport=httpx.MockTransport(handler))
        created.append(client)
        return client, handler

    yield _make

    for client in created:
        await client.aclose()
