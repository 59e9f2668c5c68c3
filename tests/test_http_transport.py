"""
Unit tests for the HTTP session and transport

Tests cover:
- Adapter retry policy is disabled for every failure class
- Session pool sizing from configuration
- Command execution: URL, headers, params, body and timeouts
- Transport failures surfacing from the future and being logged
"""
from unittest.mock import MagicMock, Mock

import pytest
import requests
from urllib3.util import Retry

from spotihooks.api.client import Command, SpotifyWebAPI
from spotihooks.api.http import (RequestsTransport, _build_retry_configuration,
                                 _coerce_timeout, build_session)
from spotihooks.config_schema import SpotiHooksConfig


class TestRetryConfiguration:
    """The transport must never retry on its own"""

    def test_no_retries_of_any_kind(self):
        retry = _build_retry_configuration()

        assert retry.total is False
        assert retry.connect == 0
        assert retry.read == 0
        assert retry.status == 0
        assert not retry.status_forcelist
        assert retry.respect_retry_after_header is False

    def test_session_adapters_use_retry_policy(self):
        session = build_session(SpotiHooksConfig(http_pool_connections=3, http_pool_maxsize=7))

        adapter = session.get_adapter("https://api.spotify.com")
        assert isinstance(adapter.max_retries, Retry)
        assert adapter.max_retries.total is False
        assert adapter._pool_connections == 3
        assert adapter._pool_maxsize == 7
        assert session.trust_env is False
        assert session.headers["User-Agent"].startswith("SpotiHooks/")


class TestTimeouts:
    def test_scalar_timeout_becomes_tuple(self):
        assert _coerce_timeout(5) == (5.0, 5.0)

    def test_tuple_timeout_is_clamped(self):
        assert _coerce_timeout((0.1, 0.2)) == (0.5, 1.0)

    def test_unclamped_timeout_is_kept(self):
        assert _coerce_timeout((0.1, 0.2), clamp=False) == (0.1, 0.2)
        assert _coerce_timeout(0.2, clamp=False) == (0.2, 0.2)

    def test_bad_tuple_raises(self):
        with pytest.raises(ValueError):
            _coerce_timeout((1.0, 2.0, 3.0))


@pytest.fixture
def session():
    mock_session = Mock(spec=requests.Session)
    mock_session.request.return_value = Mock(status_code=204)
    return mock_session


@pytest.fixture
def sink():
    return MagicMock()


@pytest.fixture
def transport(session, sink):
    with RequestsTransport(session, timeout=(2.0, 10.0), sink=sink) as t:
        yield t


class TestRequestsTransport:
    """Tests for command execution"""

    def test_executes_command_once(self, transport, session):
        api = SpotifyWebAPI("tok", transport=transport)

        response = api.player.set_repeat("device123", "track").result(timeout=5)

        assert response.status_code == 204
        session.request.assert_called_once_with(
            method="PUT",
            url="https://api.spotify.com/v1/me/player/repeat",
            headers={"Content-Type": "application/json", "Authorization": "Bearer tok"},
            params={"state": "track", "device_id": "device123"},
            json=None,
            timeout=(2.0, 10.0),
        )

    def test_empty_params_are_not_sent(self, transport, session):
        api = SpotifyWebAPI("tok", transport=transport)
        api.player.transfer_playback("dev").result(timeout=5)

        kwargs = session.request.call_args.kwargs
        assert kwargs["params"] is None
        assert kwargs["json"] == {"device_ids": ["dev"], "play": False}

    def test_command_timeout_overrides_default(self, transport, session):
        transport.send(Command(method="GET", url="/me", timeout=3)).result(timeout=5)
        assert session.request.call_args.kwargs["timeout"] == (3.0, 3.0)

    def test_short_command_timeout_is_honoured(self, transport, session):
        transport.send(Command(method="GET", url="/me", timeout=0.2)).result(timeout=5)
        assert session.request.call_args.kwargs["timeout"] == (0.2, 0.2)

    def test_command_timeout_tuple_is_used_as_given(self, transport, session):
        transport.send(Command(method="GET", url="/me", timeout=(0.1, 0.3))).result(timeout=5)
        assert session.request.call_args.kwargs["timeout"] == (0.1, 0.3)

    def test_malformed_command_timeout_fails_the_future(self, transport, session):
        future = transport.send(Command(method="GET", url="/me", timeout=(1.0, 2.0, 3.0)))
        with pytest.raises(ValueError):
            future.result(timeout=5)
        session.request.assert_not_called()

    def test_status_codes_are_not_interpreted(self, transport, session):
        session.request.return_value = Mock(status_code=429)
        response = transport.send(Command(method="GET", url="/me")).result(timeout=5)
        assert response.status_code == 429
        assert session.request.call_count == 1

    def test_failure_propagates_and_is_logged(self, transport, session, sink):
        session.request.side_effect = requests.exceptions.Timeout("slow")

        future = transport.send(Command(method="GET", url="/me/player"))

        with pytest.raises(requests.exceptions.Timeout):
            future.result(timeout=5)
        sink.event.assert_called_once()
        args, kwargs = sink.event.call_args
        assert args[0] == "spotify.request.error"
        assert kwargs["url"] == "/me/player"
        assert kwargs["error"] == "Timeout"

    def test_timing_recorded_per_path(self, transport, sink):
        transport.send(Command(method="GET", url="/me/player/devices")).result(timeout=5)
        sink.time_block.assert_called_once_with("spotify.http.get.me.player.devices")

    def test_from_config_uses_configured_timeouts(self):
        config = SpotiHooksConfig(http_connect_timeout=1.5, http_read_timeout=9.0, http_max_workers=2)
        with RequestsTransport.from_config(config) as t:
            assert t._timeout == (1.5, 9.0)
            assert isinstance(t.session, requests.Session)


def test_shared_session_override(session):
    from spotihooks.api import http as http_module

    previous = http_module._SESSION
    http_module.set_http_session(session)
    try:
        with RequestsTransport() as t:
            assert t.session is session
            t.send(Command(method="GET", url="/me")).result(timeout=5)
        session.request.assert_called_once()
    finally:
        http_module.set_http_session(previous)
