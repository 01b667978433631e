import random
from typing import Dict, NoReturn

from fastapi import HTTPException

from timed_queue.core import log_warning
from timed_queue.spotify import (
    SpotifyAPIError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    load_spotify_token,
)


def raise_unauth(e: SpotifyTokenMissing) -> NoReturn:
    raise HTTPException(
        status_code=401,
        detail={
            "status": "unauthenticated",
            "message": str(e) or "Spotify authorization required.",
            "auth_url": build_spotify_auth_url(),
        },
    )


def raise_upstream(e: SpotifyAPIError) -> NoReturn:
    log_warning(f"Spotify request failed: {e}")
    raise HTTPException(
        status_code=502,
        detail={
            "status": "spotify_error",
            "message": "Spotify could not be reached. Please try again in a moment.",
            "spotify_status": e.status_code,
        },
    )


def require_token() -> Dict:
    """FastAPI dependency: the stored Spotify token, or a 401."""
    try:
        return load_spotify_token()
    except SpotifyTokenMissing as e:
        raise_unauth(e)


def get_rng() -> random.Random:
    """
    FastAPI dependency: a fresh random source for each request.

    Tests override it through app.dependency_overrides.
    """
    return random.Random()
