"""Playlist retrieval from the Spotify Web API.

Every listing endpoint is paginated; the helpers here follow the `next`
links until the listing is exhausted and return plain Python objects.
"""

from typing import Any, Dict, List, Optional

import requests

from timed_queue.config import (
    PLAYLIST_TRACKS_PAGE_SIZE,
    PLAYLISTS_PAGE_SIZE,
    SPOTIFY_API_BASE,
)
from timed_queue.core import PlaylistInfo, Track, log_info, log_progress, log_step

from .auth import spotify_headers
from .errors import SpotifyAPIError, raise_for_spotify_status


def _spotify_get(
    token_info: Dict,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    action: str = "calling Spotify",
) -> Dict[str, Any]:
    try:
        r = requests.get(
            url, headers=spotify_headers(token_info), params=params, timeout=15
        )
    except requests.RequestException as e:
        raise SpotifyAPIError(f"Network error while {action}: {e}") from e
    raise_for_spotify_status(r, action)
    return r.json()


def _track_from_item(item: Dict[str, Any]) -> Optional[Track]:
    """
    Convert a playlist item into a Track, or None when it cannot be played
    (removed track, local file, episode without a URI...).
    """
    t = item.get("track")
    if not t or t.get("is_local"):
        return None
    if not t.get("id") or not t.get("uri"):
        return None

    album = t.get("album") or {}
    return Track(
        id=t["id"],
        play_ref=t["uri"],
        duration_ms=int(t.get("duration_ms") or 0),
        name=t.get("name") or "",
        artist=", ".join(a.get("name", "") for a in t.get("artists") or []),
        album=album.get("name") or "",
    )


def list_user_playlists(token_info: Dict) -> List[Dict[str, Any]]:
    """
    Return the raw playlist objects of the current user (all pages).
    """
    playlists: List[Dict[str, Any]] = []
    url: Optional[str] = f"{SPOTIFY_API_BASE}/me/playlists"
    params: Optional[Dict[str, Any]] = {"limit": PLAYLISTS_PAGE_SIZE}

    while url:
        data = _spotify_get(token_info, url, params, action="listing playlists")
        playlists.extend(p for p in data.get("items", []) if p)
        url = data.get("next")
        params = None  # next URL already includes params

    return playlists


def playlist_info_from_raw(raw: Dict[str, Any]) -> PlaylistInfo:
    images = raw.get("images") or []
    owner = raw.get("owner") or {}
    tracks = raw.get("tracks") or {}
    return PlaylistInfo(
        id=raw["id"],
        name=raw.get("name") or "",
        image_url=images[0].get("url") if images else None,
        tracks_total=int(tracks.get("total") or 0),
        owner=owner.get("display_name") or owner.get("id") or "",
    )


def get_playlist(token_info: Dict, playlist_id: str) -> PlaylistInfo:
    data = _spotify_get(
        token_info,
        f"{SPOTIFY_API_BASE}/playlists/{playlist_id}",
        {"fields": "id,name,images,owner(id,display_name),tracks(total)"},
        action="loading playlist details",
    )
    return playlist_info_from_raw(data)


def get_playlist_tracks(token_info: Dict, playlist_id: str) -> List[Track]:
    """
    Fetch every playable track of a playlist, in playlist order.

    Local files and items without a track (removed from the catalog) are
    skipped. Duplicates are kept as they appear.
    """
    log_step(f"Fetching tracks of playlist {playlist_id}...")
    tracks: List[Track] = []
    skipped = 0
    url: Optional[str] = f"{SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks"
    params: Optional[Dict[str, Any]] = {"limit": PLAYLIST_TRACKS_PAGE_SIZE}

    page = 0
    total = None

    while url:
        page += 1
        data = _spotify_get(token_info, url, params, action="fetching playlist tracks")
        if total is None:
            total = data.get("total", 0)

        for item in data.get("items", []):
            track = _track_from_item(item or {})
            if track is None:
                skipped += 1
                continue
            tracks.append(track)

        url = data.get("next")
        params = None

        if total:
            estimated_pages = (
                total + PLAYLIST_TRACKS_PAGE_SIZE - 1
            ) // PLAYLIST_TRACKS_PAGE_SIZE
            log_progress(page, estimated_pages, prefix="  Fetching pages")

    log_info(f"{len(tracks)} playable tracks fetched ({skipped} skipped).")
    return tracks
