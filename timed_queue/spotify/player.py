from typing import Dict, List, Optional

import requests

from timed_queue.config import SPOTIFY_API_BASE
from timed_queue.core import log_step, log_success

from .auth import spotify_headers
from .errors import SpotifyAPIError, raise_for_spotify_status


class SpotifyNoActiveDevice(SpotifyAPIError):
    """Playback was requested but the user has no active Spotify device."""


def start_playback(
    token_info: Dict, uris: List[str], device_id: Optional[str] = None
) -> None:
    """
    Replace the user's playback with `uris`, in order.

    Raises SpotifyNoActiveDevice when Spotify answers 404 (no device is
    open), SpotifyAPIError for any other failure.
    """
    if not uris:
        raise ValueError("start_playback() needs at least one URI.")

    log_step(f"Starting playback of {len(uris)} tracks...")
    params = {"device_id": device_id} if device_id else None
    try:
        r = requests.put(
            f"{SPOTIFY_API_BASE}/me/player/play",
            headers=spotify_headers(token_info),
            params=params,
            json={"uris": uris},
            timeout=15,
        )
    except requests.RequestException as e:
        raise SpotifyAPIError(f"Network error while starting playback: {e}") from e

    if r.status_code == 404:
        raise SpotifyNoActiveDevice(
            "No active Spotify device found.", status_code=404
        )
    raise_for_spotify_status(r, "starting playback")
    log_success("Playback started.")
