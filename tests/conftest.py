"""Shared pytest fixtures for the SpotiHooks test suite."""

from __future__ import annotations

import json
from concurrent.futures import Future
from typing import Any, List, Optional

import pytest
import requests

from spotihooks.api.client import Command, SpotifyWebAPI
from spotihooks.app import create_app
from spotihooks.config_schema import SpotiHooksConfig


def make_response(status: int = 200, payload: Any = None) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class RecordingTransport:
    """Transport double: records every command and answers immediately.

    With ``pending=True`` the returned futures never resolve.
    """

    def __init__(
        self,
        response: Optional[requests.Response] = None,
        error: Optional[BaseException] = None,
        pending: bool = False,
    ):
        self.commands: List[Command] = []
        self.response = response if response is not None else make_response(204)
        self.error = error
        self.pending = pending

    def send(self, command: Command) -> "Future[requests.Response]":
        self.commands.append(command)
        future: "Future[requests.Response]" = Future()
        if self.pending:
            return future
        if self.error is not None:
            future.set_exception(self.error)
        else:
            future.set_result(self.response)
        return future

    @property
    def last(self) -> Command:
        assert self.commands, "no command was sent"
        return self.commands[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def api(transport: RecordingTransport) -> SpotifyWebAPI:
    return SpotifyWebAPI("test-token", transport=transport)


@pytest.fixture
def app(transport: RecordingTransport):
    flask_app = create_app(SpotiHooksConfig(), transport=transport, result_timeout=5)
    flask_app.config.update({"TESTING": True})
    return flask_app


@pytest.fixture
def client(app):
    """Provide a fresh Flask test client for each test."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def transport_factory():
    return RecordingTransport
