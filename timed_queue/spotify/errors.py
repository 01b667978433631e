from typing import Optional

import requests


class SpotifyAPIError(Exception):
    """A Web API call failed (network error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def raise_for_spotify_status(r: requests.Response, action: str) -> None:
    """Turn an HTTP error response into SpotifyAPIError."""
    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        raise SpotifyAPIError(
            f"Spotify API error while {action}: HTTP {r.status_code}",
            status_code=r.status_code,
        ) from e
