"""
🛠️ Route Helpers
Shared utilities for all route blueprints: the response envelope, per-request
client construction and relaying of upstream responses.
"""

import datetime
import logging
import uuid
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeout
from functools import wraps
from typing import Any, Callable, Dict, Optional

import requests
from flask import Response, current_app, jsonify, request

from ..api.client import SpotifyWebAPI
from ..errors import InvalidArgument

logger = logging.getLogger(__name__)

EXTENSION_KEY = "spotihooks"


class AuthRequired(Exception):
    """The caller did not send a bearer token."""


def _iso_timestamp_now() -> str:
    """Return ISO 8601 timestamp in UTC with a trailing Z."""
    now_utc = datetime.datetime.now(tz=datetime.timezone.utc)
    return now_utc.isoformat(timespec="microseconds").replace("+00:00", "Z")


def api_response(
    success: bool,
    *,
    data: Optional[Any] = None,
    message: str = "",
    status: int = 200,
    error_code: Optional[str] = None
) -> Response:
    """Create a standardized API response with consistent envelope.

    Args:
        success: Whether the operation succeeded
        data: Optional response data
        message: Optional message string
        status: HTTP status code (default 200)
        error_code: Optional error code for failures

    Returns:
        Flask Response object with JSON payload
    """
    req_id = str(uuid.uuid4())
    timestamp = _iso_timestamp_now()
    payload: Dict[str, Any] = {
        "success": success,
        "timestamp": timestamp,
        "request_id": req_id
    }
    if message:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    if error_code:
        payload["error_code"] = error_code
    resp = jsonify(payload)
    resp.status_code = status
    # Correlation headers
    resp.headers['X-Request-ID'] = req_id
    resp.headers['X-Response-Timestamp'] = timestamp
    return resp


def api_error(
    message: str,
    *,
    status: int = 400,
    error_code: Optional[str] = None,
    data: Optional[Any] = None,
) -> Response:
    """Convenience wrapper for standardized error responses."""
    return api_response(
        False,
        data=data,
        message=message,
        status=status,
        error_code=error_code,
    )


def bearer_token() -> str:
    """Extract the caller's access token from the Authorization header."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthRequired()
    return token.strip()


def get_client() -> SpotifyWebAPI:
    """Build a Web API client for the current request's token.

    Endpoint namespaces only hold a weak proxy, so keep the client bound to a
    local while calling them.
    """
    state = current_app.extensions.get(EXTENSION_KEY, {})
    return SpotifyWebAPI(bearer_token(), transport=state.get("transport"))


def json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def relay(future: "Future[requests.Response]") -> Response:
    """Wait for an upstream response and wrap it in the standard envelope.

    The upstream status code is passed through unchanged.
    """
    state = current_app.extensions.get(EXTENSION_KEY, {})
    upstream = future.result(timeout=state.get("result_timeout"))

    data = None
    if upstream.content:
        try:
            data = upstream.json()
        except ValueError:
            data = {"raw": upstream.text}

    if upstream.ok:
        return api_response(True, data=data, status=upstream.status_code)

    message = ""
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = str(data["error"].get("message") or "")
    return api_response(
        False,
        data=data,
        message=message or f"Spotify responded with {upstream.status_code}",
        status=upstream.status_code,
        error_code="spotify_error",
    )


def api_error_handler(func: Callable) -> Callable:
    """Decorator for consistent API error handling.

    Maps argument errors, missing tokens, transport failures and upstream
    timeouts to their envelope responses; anything else becomes a 500.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except InvalidArgument as e:
            return api_error(str(e), status=400, error_code="invalid_argument", data={"field": e.field_name})
        except AuthRequired:
            return api_error("Authorization: Bearer <token> header required", status=401, error_code="auth_required")
        except requests.exceptions.RequestException as e:
            logger.warning("Transport failure in %s: %s", func.__name__, e.__class__.__name__)
            return api_error(
                "Could not reach the Spotify Web API",
                status=502,
                error_code="transport_failure",
                data={"error": e.__class__.__name__},
            )
        except FutureTimeout:
            logger.warning("Upstream response timed out in %s", func.__name__)
            return api_error(
                "The Spotify Web API did not respond in time",
                status=504,
                error_code="upstream_timeout",
            )
        except Exception:
            logger.exception(f"Error in {func.__name__}")
            return api_error("An internal error occurred", status=500, error_code="unhandled_exception")
    return wrapper
