import time
from typing import Dict
from urllib.parse import urlencode

import requests

from timed_queue.config import (
    SCOPES,
    SPOTIFY_API_BASE,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_TOKEN_FILE,
    SPOTIFY_TOKEN_URL,
)
from timed_queue.core import (
    log_step,
    log_success,
    log_warning,
    read_json,
    remove_file,
    write_json,
)

from .errors import SpotifyAPIError, raise_for_spotify_status

# Refresh slightly before the token really expires
EXPIRY_MARGIN_SECONDS = 60


class SpotifyAuthError(Exception):
    """Raised when Spotify refuses a token exchange or refresh."""


class SpotifyTokenMissing(SpotifyAuthError):
    """No usable token is stored: the user has to (re)authorize."""


def build_spotify_auth_url() -> str:
    """
    Build the Spotify authorize URL (authorization code flow).
    """
    auth_query_parameters = {
        "response_type": "code",
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "scope": " ".join(SCOPES),
        "client_id": SPOTIFY_CLIENT_ID,
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(auth_query_parameters)}"


def _request_token(token_data: Dict[str, str]) -> Dict:
    payload = dict(token_data)
    payload["client_id"] = SPOTIFY_CLIENT_ID
    payload["client_secret"] = SPOTIFY_CLIENT_SECRET

    try:
        r = requests.post(SPOTIFY_TOKEN_URL, data=payload, timeout=15)
        r.raise_for_status()
    except requests.RequestException as e:
        raise SpotifyAuthError(f"Spotify token request failed: {e}") from e

    token_info = r.json()
    now = int(time.time())
    token_info["timestamp"] = now
    token_info["expires_at"] = now + int(token_info.get("expires_in", 3600))
    return token_info


def exchange_code_for_token(code: str) -> Dict:
    """
    Exchange an authorization code (from the redirect) for tokens and
    persist them to SPOTIFY_TOKEN_FILE.
    """
    log_step("Exchanging Spotify authorization code for a token...")
    token_info = _request_token(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": SPOTIFY_REDIRECT_URI,
        }
    )
    write_json(SPOTIFY_TOKEN_FILE, token_info)
    log_success("Spotify token stored.")
    return token_info


def refresh_spotify_token(refresh_token: str) -> Dict:
    log_step("Refreshing Spotify access token...")
    token_info = _request_token(
        {"grant_type": "refresh_token", "refresh_token": refresh_token}
    )
    # Spotify only sends a new refresh token when it rotates it
    token_info.setdefault("refresh_token", refresh_token)
    write_json(SPOTIFY_TOKEN_FILE, token_info)
    return token_info


def load_spotify_token() -> Dict:
    """
    Load the stored Spotify token, refreshing it when close to expiry.

    Raises SpotifyTokenMissing when nothing usable is stored, including when
    the refresh itself is rejected.
    """

    def _on_error(e: Exception) -> None:
        log_warning("Spotify token file is corrupted; ignoring it.")

    token_info = read_json(SPOTIFY_TOKEN_FILE, default=None, on_error=_on_error)
    if not isinstance(token_info, dict) or "access_token" not in token_info:
        raise SpotifyTokenMissing("Spotify authorization required.")

    now = int(time.time())
    expires_in = token_info.get("expires_in", 3600)
    if now - token_info.get("timestamp", 0) > expires_in - EXPIRY_MARGIN_SECONDS:
        refresh_token = token_info.get("refresh_token")
        if not refresh_token:
            raise SpotifyTokenMissing("Spotify session expired; please log in again.")
        try:
            token_info = refresh_spotify_token(refresh_token)
        except SpotifyAuthError as e:
            raise SpotifyTokenMissing(
                "Spotify session expired; please log in again."
            ) from e
    return token_info


def clear_spotify_token() -> bool:
    """Forget the stored token (logout). Returns True if one existed."""
    return remove_file(SPOTIFY_TOKEN_FILE)


def spotify_headers(token_info: Dict) -> Dict:
    return {"Authorization": f"Bearer {token_info['access_token']}"}


def get_current_user_id(token_info: Dict) -> str:
    try:
        r = requests.get(
            f"{SPOTIFY_API_BASE}/me", headers=spotify_headers(token_info), timeout=15
        )
    except requests.RequestException as e:
        raise SpotifyAPIError(f"Network error while loading the profile: {e}") from e
    raise_for_spotify_status(r, "loading the profile")
    return r.json()["id"]
