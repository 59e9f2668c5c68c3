"""
SpotiHooks - Spotify Web API facade & Web Playback session hooks
Main package initialization
"""

from .hooks import use_spotify_web_api, use_spotify_web_playback_sdk
from .version import VERSION, get_app_info, get_version

__version__ = VERSION
__all__ = [
    'VERSION',
    'get_app_info',
    'get_version',
    'use_spotify_web_api',
    'use_spotify_web_playback_sdk',
]
