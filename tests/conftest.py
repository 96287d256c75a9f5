"""
Shared fixtures: a fixed clock, env-independent settings and an
Authenticator factory backed by httpx.MockTransport.
"""

import httpx
import pytest

from trustpilot_auth.config.settings import (
    AppSettings,
    Settings
)
from trustpilot_auth.infra.client.authenticator import Authenticator

from constants import (
    API_KEY,
    API_SECRET,
    FIXED_NOW,
    REDIRECT
)


@pytest.fixture
def settings():
    """Default endpoints, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def app_settings():
    return AppSettings(
        _env_file=None,
        TP_API_KEY=API_KEY,
        TP_API_SECRET=API_SECRET,
        TP_REDIRECT_URI=REDIRECT,
        TP_SCOPES="scope1 scope2",
    )


@pytest.fixture
def requests_seen():
    """Every request the mock transport receives, in order."""
    return []


@pytest.fixture
def make_authenticator(settings, requests_seen):
    """
    Build an Authenticator whose transport answers with `handler`.

    `handler` is either an httpx.Response, returned for every request, or a
    callable taking the request and returning a response (or raising).
    """
    clients = []

    def factory(handler, clock=lambda: FIXED_NOW, settings=settings):
        def respond(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)

            if callable(handler):
                return handler(request)

            return handler

        client = httpx.Client(transport=httpx.MockTransport(respond))
        clients.append(client)

        return Authenticator(settings, client=client, clock=clock)

    yield factory

    for client in clients:
        client.close()
