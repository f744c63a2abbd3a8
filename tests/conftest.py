import json

import pytest
import requests
from authlib.integrations.requests_client import OAuth2Session

from steemconnect.config import EndpointConfig
from steemconnect.provider import Provider


# --- Canned HTTP layer, every session the provider opens sends through it ---
class FakeTransport:
    def __init__(self):
        self._responses = []
        self.requests = []

    def queue(self, payload, status_code=200):
        self._responses.append((payload, status_code))

    def send(self, request, **kwargs):
        self.requests.append(request)
        payload, status_code = self._responses.pop(0)
        response = requests.Response()
        response.status_code = status_code
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def session_factory(self, **kwargs):
        session = OAuth2Session(**kwargs)
        session.send = self.send
        return session


@pytest.fixture
def token_data():
    return {
        "access_token": "mock-access-token",
        "scope": "login,vote",
        "expires_in": 3600,
        "username": "dummy-user",
        "refresh_token": "mock-refresh-token",
        "token_type": "bearer",
    }


@pytest.fixture
def account_data():
    return {"account": {"name": "dummy-name", "foo": "bar"}}


@pytest.fixture
def config():
    return EndpointConfig(
        "hernandev.app", "4c90e2e77840b97ac001b37236be966cf73ce1373f4b4b5a"
    ).set_return_url("https://return-to.me/callback")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def provider(config, transport):
    return Provider(config, session_factory=transport.session_factory)
