"""Central constants for SpotiHooks.

Only put small, stable primitives here – the Web API contract, not runtime config.
"""

SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1"

# Playback widget name used when the configuration does not provide one
DEFAULT_PLAYER_NAME = "SpotiHooks Player"

REPEAT_STATES = ("track", "context", "off")
SEARCH_ITEM_TYPES = ("album", "artist", "playlist", "track", "show", "episode")
LIBRARY_ITEM_TYPES = ("albums", "shows", "tracks")

# Documented Web API limit for paged endpoints
MAX_PAGE_LIMIT = 50

# Events emitted by the Web Playback widget
PLAYER_EVENTS = (
    "initialization_error",
    "authentication_error",
    "account_error",
    "playback_error",
    "player_state_changed",
    "ready",
    "not_ready",
)
