"""Public façade for the timed_queue.spotify package.

This module exposes the Spotify Web API integration: authentication,
playlist/track retrieval and playback control. Callers should import these
symbols from this façade instead of the internal modules.
"""

from .auth import (
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    clear_spotify_token,
    exchange_code_for_token,
    get_current_user_id,
    load_spotify_token,
    refresh_spotify_token,
    spotify_headers,
)
from .errors import SpotifyAPIError
from .player import SpotifyNoActiveDevice, start_playback
from .playlists import (
    get_playlist,
    get_playlist_tracks,
    list_user_playlists,
    playlist_info_from_raw,
)

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "refresh_spotify_token",
    "load_spotify_token",
    "clear_spotify_token",
    "spotify_headers",
    "get_current_user_id",
    "SpotifyAuthError",
    "SpotifyTokenMissing",
    "SpotifyAPIError",
    "SpotifyNoActiveDevice",
    "list_user_playlists",
    "playlist_info_from_raw",
    "get_playlist",
    "get_playlist_tracks",
    "start_playback",
]
