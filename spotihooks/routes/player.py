"""
▶️ Player Routes Blueprint
Device-targeted playback commands and playback state reads.
"""

import logging

from flask import Blueprint, request

from .helpers import api_error_handler, get_client, json_body, relay

player_bp = Blueprint("player", __name__, url_prefix="/api/player")
logger = logging.getLogger(__name__)


# -----------------
# Reads
# -----------------

@player_bp.route("/state", methods=["GET"])
@api_error_handler
def playback_state():
    api = get_client()
    return relay(api.player.current_playback())


@player_bp.route("/current", methods=["GET"])
@api_error_handler
def currently_playing():
    api = get_client()
    return relay(api.player.currently_playing())


@player_bp.route("/recent", methods=["GET"])
@api_error_handler
def recently_played():
    """Recently played tracks; ``limit``/``after``/``before`` come from the query string."""
    api = get_client()
    return relay(api.player.recently_played(request.args.to_dict()))


@player_bp.route("/devices", methods=["GET"])
@api_error_handler
def devices():
    api = get_client()
    return relay(api.player.get_devices())


# -----------------
# Device commands
# -----------------

@player_bp.route("/<device_id>/transfer", methods=["PUT"])
@api_error_handler
def transfer(device_id: str):
    payload = json_body()
    api = get_client()
    return relay(api.player.transfer_playback(device_id, payload.get("play", False)))


@player_bp.route("/<device_id>/play", methods=["PUT"])
@api_error_handler
def play(device_id: str):
    """Start playback; without ``context_uri`` the current context resumes."""
    payload = json_body()
    api = get_client()
    return relay(api.player.start_playback(device_id, payload.get("context_uri")))


@player_bp.route("/<device_id>/pause", methods=["PUT"])
@api_error_handler
def pause(device_id: str):
    api = get_client()
    return relay(api.player.pause_playback(device_id))


@player_bp.route("/<device_id>/seek", methods=["PUT"])
@api_error_handler
def seek(device_id: str):
    api = get_client()
    return relay(api.player.seek_position(device_id, json_body().get("position_ms")))


@player_bp.route("/<device_id>/volume", methods=["PUT"])
@api_error_handler
def volume(device_id: str):
    api = get_client()
    return relay(api.player.set_volume(device_id, json_body().get("volume_percent")))


@player_bp.route("/<device_id>/repeat", methods=["PUT"])
@api_error_handler
def repeat(device_id: str):
    api = get_client()
    return relay(api.player.set_repeat(device_id, json_body().get("state")))


@player_bp.route("/<device_id>/shuffle", methods=["PUT"])
@api_error_handler
def shuffle(device_id: str):
    api = get_client()
    return relay(api.player.set_shuffle(device_id, json_body().get("state")))


@player_bp.route("/<device_id>/next", methods=["POST"])
@api_error_handler
def next_track(device_id: str):
    api = get_client()
    return relay(api.player.next_track(device_id))


@player_bp.route("/<device_id>/previous", methods=["POST"])
@api_error_handler
def previous_track(device_id: str):
    api = get_client()
    return relay(api.player.previous_track(device_id))


@player_bp.route("/<device_id>/queue", methods=["POST"])
@api_error_handler
def add_to_queue(device_id: str):
    api = get_client()
    return relay(api.player.add_to_queue(device_id, json_body().get("uri")))
