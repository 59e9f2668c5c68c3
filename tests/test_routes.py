"""
Contract tests for the companion Flask routes

Every response must use the standard envelope; upstream status codes are
relayed unchanged and local failures map to fixed error codes.
"""
import pytest
import requests

from spotihooks.app import create_app
from spotihooks.config_schema import SpotiHooksConfig


def assert_api_envelope(resp, *, expect_success=None):
    data = resp.get_json()
    assert isinstance(data, dict), "Response must be JSON object"
    assert 'success' in data, "Missing success field"
    assert 'timestamp' in data, "Missing timestamp"
    assert 'request_id' in data, "Missing request_id"
    assert data['timestamp'].endswith('Z')
    assert resp.headers['X-Request-ID'] == data['request_id']
    if expect_success is not None:
        assert data['success'] is expect_success, f"Expected success={expect_success} got {data['success']}"
    if not data['success']:
        assert 'message' in data, "Error responses must contain message"
        assert 'error_code' in data, "Error responses must contain error_code"
    return data


# -------- Player --------

def test_repeat_route_issues_command(client, transport, auth_headers, response_factory):
    transport.response = response_factory(200, {"ok": True})

    resp = client.put('/api/player/device123/repeat', json={"state": "track"}, headers=auth_headers)

    data = assert_api_envelope(resp, expect_success=True)
    assert data['data'] == {"ok": True}
    assert transport.last.url == "/me/player/repeat"
    assert transport.last.params == {"state": "track", "device_id": "device123"}
    assert transport.last.headers["Authorization"] == "Bearer test-token"


def test_no_content_upstream_is_relayed(client, transport, auth_headers):
    resp = client.put('/api/player/dev/pause', headers=auth_headers)
    assert resp.status_code == 204
    assert transport.last.url == "/me/player/pause"


def test_invalid_argument_maps_to_400(client, transport, auth_headers):
    resp = client.put('/api/player/dev/repeat', json={"state": "loud"}, headers=auth_headers)

    assert resp.status_code == 400
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "invalid_argument"
    assert data['data'] == {"field": "state"}
    assert transport.commands == []


def test_volume_out_of_range_is_rejected(client, transport, auth_headers):
    resp = client.put('/api/player/dev/volume', json={"volume_percent": 150}, headers=auth_headers)
    assert resp.status_code == 400
    assert transport.commands == []


@pytest.mark.parametrize("path,body,expected_url", [
    ("/api/player/dev/transfer", {"play": True}, "/me/player"),
    ("/api/player/dev/play", {"context_uri": "spotify:album:1"}, "/me/player/play"),
    ("/api/player/dev/seek", {"position_ms": 1000}, "/me/player/seek"),
    ("/api/player/dev/shuffle", {"state": False}, "/me/player/shuffle"),
])
def test_put_commands(client, transport, auth_headers, path, body, expected_url):
    resp = client.put(path, json=body, headers=auth_headers)
    assert resp.status_code == 204
    assert transport.last.method == "PUT"
    assert transport.last.url == expected_url


@pytest.mark.parametrize("path,body,expected_url", [
    ("/api/player/dev/next", None, "/me/player/next"),
    ("/api/player/dev/previous", None, "/me/player/previous"),
    ("/api/player/dev/queue", {"uri": "spotify:track:1"}, "/me/player/queue"),
])
def test_post_commands(client, transport, auth_headers, path, body, expected_url):
    resp = client.post(path, json=body, headers=auth_headers)
    assert resp.status_code == 204
    assert transport.last.method == "POST"
    assert transport.last.url == expected_url


@pytest.mark.parametrize("path,expected_url", [
    ("/api/player/state", "/me/player"),
    ("/api/player/current", "/me/player/currently-playing"),
    ("/api/player/devices", "/me/player/devices"),
])
def test_player_reads(client, transport, auth_headers, response_factory, path, expected_url):
    transport.response = response_factory(200, {"items": []})
    resp = client.get(path, headers=auth_headers)
    assert_api_envelope(resp, expect_success=True)
    assert transport.last.url == expected_url


def test_recent_passes_query_options(client, transport, auth_headers, response_factory):
    transport.response = response_factory(200, {"items": []})
    resp = client.get('/api/player/recent?limit=5&before=1000', headers=auth_headers)
    assert resp.status_code == 200
    assert transport.last.params == {"limit": 5, "before": 1000}


def test_recent_rejects_both_cursors(client, transport, auth_headers):
    resp = client.get('/api/player/recent?after=1&before=2', headers=auth_headers)
    assert resp.status_code == 400
    assert transport.commands == []


# -------- Catalog --------

def test_search_route(client, transport, auth_headers, response_factory):
    transport.response = response_factory(200, {"albums": {"items": []}})

    resp = client.get('/api/search?q=daft%20punk&type=album,artist&limit=10', headers=auth_headers)

    assert_api_envelope(resp, expect_success=True)
    assert transport.last.params == {"q": "daft punk", "type": "album,artist", "limit": 10}


def test_search_requires_type(client, transport, auth_headers):
    resp = client.get('/api/search?q=x', headers=auth_headers)
    assert resp.status_code == 400
    assert transport.commands == []


def test_library_contains_route(client, transport, auth_headers, response_factory):
    transport.response = response_factory(200, [True, False])

    resp = client.get('/api/library/tracks/contains?ids=id1,id2', headers=auth_headers)

    data = assert_api_envelope(resp, expect_success=True)
    assert data['data'] == [True, False]
    assert transport.last.url == "/me/tracks/contains"
    assert transport.last.params == {"ids": "id1,id2"}


def test_library_save_and_list(client, transport, auth_headers):
    client.put('/api/library/albums', json={"ids": ["a1"]}, headers=auth_headers)
    client.get('/api/library/albums?limit=3', headers=auth_headers)

    save, listing = transport.commands
    assert (save.method, save.url, save.params) == ("PUT", "/me/albums", {"ids": "a1"})
    assert (listing.method, listing.params) == ("GET", {"limit": 3})


def test_unknown_library_type(client, transport, auth_headers):
    resp = client.get('/api/library/podcasts', headers=auth_headers)
    assert resp.status_code == 400


def test_user_routes(client, transport, auth_headers, response_factory):
    transport.response = response_factory(200, {"id": "u1"})
    assert client.get('/api/me', headers=auth_headers).status_code == 200
    assert client.get('/api/users/u1', headers=auth_headers).status_code == 200
    assert [c.url for c in transport.commands] == ["/me", "/users/u1"]


# -------- Error mapping --------

def test_missing_token_is_401(client, transport):
    resp = client.get('/api/me')

    assert resp.status_code == 401
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "auth_required"
    assert transport.commands == []


def test_upstream_error_is_relayed(client, transport, auth_headers, response_factory):
    transport.response = response_factory(404, {"error": {"status": 404, "message": "Device not found"}})

    resp = client.put('/api/player/dev/pause', headers=auth_headers)

    assert resp.status_code == 404
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "spotify_error"
    assert data['message'] == "Device not found"
    assert data['data']['error']['status'] == 404


def test_transport_failure_is_502(client, transport, auth_headers):
    transport.error = requests.exceptions.ConnectionError("unreachable")

    resp = client.get('/api/player/devices', headers=auth_headers)

    assert resp.status_code == 502
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "transport_failure"


def test_upstream_timeout_is_504(transport_factory, auth_headers):
    pending = transport_factory(pending=True)
    app = create_app(SpotiHooksConfig(), transport=pending, result_timeout=0.01)
    app.config.update({"TESTING": True})

    with app.test_client() as test_client:
        resp = test_client.get('/api/player/devices', headers=auth_headers)

    assert resp.status_code == 504
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "upstream_timeout"
    assert pending.last.url == "/me/player/devices"


def test_unknown_route_returns_json_404(client):
    resp = client.get('/api/does-not-exist')
    assert resp.status_code == 404
    data = assert_api_envelope(resp, expect_success=False)
    assert data['error_code'] == "not_found"


def test_cors_headers_present(client, auth_headers):
    resp = client.get('/api/me', headers=auth_headers)
    assert "Authorization" in resp.headers['Access-Control-Allow-Headers']
