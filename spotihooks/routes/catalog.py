"""
🔎 Catalog Routes Blueprint
Search, saved library items and user profiles.
"""

import logging

from flask import Blueprint, request

from .helpers import api_error_handler, get_client, json_body, relay

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")
logger = logging.getLogger(__name__)


def _split_csv(raw):
    if raw is None:
        return []
    return [part.strip() for part in raw.split(",")]


@catalog_bp.route("/search", methods=["GET"])
@api_error_handler
def search():
    """Search the catalog.

    Query string: ``q``, ``type`` (comma-separated) plus the optional
    ``limit``, ``offset``, ``market`` and ``include_external``.
    """
    args = request.args.to_dict()
    keywords = args.pop("q", None)
    item_types = _split_csv(args.pop("type", None))
    api = get_client()
    return relay(api.search.query(keywords, item_types, args))


@catalog_bp.route("/library/<item_type>", methods=["GET"])
@api_error_handler
def saved_items(item_type: str):
    api = get_client()
    return relay(api.library.get_saved(item_type, request.args.to_dict()))


@catalog_bp.route("/library/<item_type>/contains", methods=["GET"])
@api_error_handler
def contains_items(item_type: str):
    api = get_client()
    return relay(api.library.contains(item_type, _split_csv(request.args.get("ids"))))


@catalog_bp.route("/library/<item_type>", methods=["PUT"])
@api_error_handler
def save_items(item_type: str):
    api = get_client()
    return relay(api.library.save(item_type, json_body().get("ids")))


@catalog_bp.route("/me", methods=["GET"])
@api_error_handler
def current_user():
    api = get_client()
    return relay(api.users.get_current_user_profile())


@catalog_bp.route("/users/<user_id>", methods=["GET"])
@api_error_handler
def user_profile(user_id: str):
    api = get_client()
    return relay(api.users.get_user_profile(user_id))
