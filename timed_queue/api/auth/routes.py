from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from timed_queue.api.deps import raise_unauth, raise_upstream
from timed_queue.core import log_info, log_warning
from timed_queue.spotify import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    clear_spotify_token,
    exchange_code_for_token,
    get_current_user_id,
    load_spotify_token,
)

from .schemas import AuthStatusResponse, AuthUrlResponse, LogoutResponse

router = APIRouter()


@router.get("/url", response_model=AuthUrlResponse)
def get_auth_url() -> AuthUrlResponse:
    """
    Return the Spotify authorize URL so a front-end can redirect the user.
    """
    return AuthUrlResponse(auth_url=build_spotify_auth_url())


@router.get("/login")
def login():
    """
    Send the browser to Spotify, or straight to the tools page when a token
    is already stored.
    """
    try:
        load_spotify_token()
    except SpotifyTokenMissing:
        return RedirectResponse(build_spotify_auth_url())
    return RedirectResponse("/spotify/playlists")


@router.get("/status", response_model=AuthStatusResponse)
def auth_status() -> AuthStatusResponse:
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing:
        return AuthStatusResponse(
            authenticated=False,
            reason="missing_or_invalid_token",
        )

    return AuthStatusResponse(
        authenticated=True,
        expires_at=token_info.get("expires_at"),
    )


@router.get("/profile")
def auth_profile() -> dict:
    """
    Snapshot of the authorized Spotify account (user id).
    """
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing as e:
        raise_unauth(e)

    try:
        user_id = get_current_user_id(token_info)
    except SpotifyAPIError as e:
        raise_upstream(e)

    return {
        "authenticated": True,
        "user": {"id": user_id},
    }


@router.get("/callback", response_class=HTMLResponse)
def auth_callback(
    code: str | None = Query(default=None),
    error: str | None = Query(default=None),
):
    """
    Spotify redirect target: exchange the code for a token and store it.

    Examples:
      - /auth/callback?code=...
      - /auth/callback?error=access_denied
    """
    if error:
        log_warning(f"Spotify authorization refused: {error}")
        raise HTTPException(
            status_code=400,
            detail=f"Spotify authorization failed: {error}",
        )

    if not code:
        raise HTTPException(status_code=400, detail="Missing 'code' parameter.")

    try:
        exchange_code_for_token(code)
    except SpotifyAuthError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Error getting access token: {e}. Please try logging in again.",
        )

    return """
    <html>
      <body>
        <h1>Spotify authorization complete ✅</h1>
        <p>You can close this window and return to the application.</p>
      </body>
    </html>
    """


@router.post("/logout", response_model=LogoutResponse)
def logout() -> LogoutResponse:
    removed = clear_spotify_token()
    log_info("Spotify token cleared." if removed else "No Spotify token to clear.")
    return LogoutResponse(logged_out=True, token_removed=removed)
