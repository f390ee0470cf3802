"""Shared fixtures: an in-memory sync agent serving /config"""

import json

import httpx
import pytest

from cellsync.common.config import ClientSettings
from cellsync.services.settings import RemoteConfigClient, SettingsStore

AGENT_URL = "http://agent.test"

AGENT_CONFIG = {
    "Logs": {"Folder": "/var/log", "MaxFilesNumber": 5, "MaxFilesSize": 10, "MaxAgeDays": 7},
    "Updates": {},
    "Debugging": {},
    "Service": {},
}


class FakeAgent:
    """
    Echoing agent: GET returns the stored value, PUT stores the body
    (through `normalize` when set) and returns it. Queued responses are
    served first, in order.
    """

    def __init__(self, stored=None, normalize=None):
        self.stored = json.loads(json.dumps(stored if stored is not None else AGENT_CONFIG))
        self.normalize = normalize
        self.requests: list[httpx.Request] = []
        self._queued: list = []

    def queue(self, response) -> None:
        """Queue an httpx.Response, or an exception to raise"""
        self._queued.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self._queued:
            queued = self._queued.pop(0)
            if isinstance(queued, httpx.RequestError):
                queued.request = request
                raise queued
            return queued

        if request.url.path != "/config":
            return httpx.Response(404, json={"error": "not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self.stored)

        if request.method == "PUT":
            body = json.loads(request.content)
            self.stored = self.normalize(body) if self.normalize else body
            return httpx.Response(200, json=self.stored)

        return httpx.Response(405, json={"error": "method not allowed"})


@pytest.fixture
def agent() -> FakeAgent:
    return FakeAgent()


@pytest.fixture
def client_settings() -> ClientSettings:
    return ClientSettings(api_url=AGENT_URL)


@pytest.fixture
def client(agent, client_settings) -> RemoteConfigClient:
    return RemoteConfigClient(
        settings=client_settings,
        transport=httpx.MockTransport(agent.handler),
    )


@pytest.fixture
def make_store(client):
    def _make(data=None, **kwargs) -> SettingsStore:
        return SettingsStore(data, client=client, **kwargs)

    return _make
