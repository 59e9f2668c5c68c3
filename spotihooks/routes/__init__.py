"""
SpotiHooks Route Blueprints
Flask blueprints exposing the Web API facade over HTTP.
"""

from .catalog import catalog_bp
from .player import player_bp

__all__ = ["catalog_bp", "player_bp"]
