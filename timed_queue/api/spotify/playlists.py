from typing import Dict, List

from fastapi import APIRouter, Depends

from timed_queue.api.deps import raise_upstream, require_token
from timed_queue.core import Track, log_info, log_step
from timed_queue.spotify import (
    SpotifyAPIError,
    get_playlist_tracks,
    list_user_playlists,
    playlist_info_from_raw,
)

from .schemas import PlaylistSummary, TrackOut

router = APIRouter()


def track_out(track: Track) -> TrackOut:
    return TrackOut(
        id=track.id,
        uri=track.play_ref,
        name=track.name,
        artist=track.artist,
        album=track.album,
        duration_ms=track.duration_ms,
    )


@router.get("/playlists", response_model=List[PlaylistSummary])
def get_spotify_playlists(
    token_info: Dict = Depends(require_token),
) -> List[PlaylistSummary]:
    """
    List the current user's Spotify playlists (all pages).
    """
    log_step("Fetching Spotify playlists for current user...")
    try:
        raw_playlists = list_user_playlists(token_info)
    except SpotifyAPIError as e:
        raise_upstream(e)
    log_info(f"Spotify playlists: {len(raw_playlists)} playlists found.")

    summaries = []
    for p in raw_playlists:
        if "id" not in p:
            continue
        info = playlist_info_from_raw(p)
        summaries.append(
            PlaylistSummary(
                id=info.id,
                name=info.name,
                owner=info.owner,
                image_url=info.image_url,
                tracks_total=info.tracks_total,
            )
        )
    return summaries


@router.get("/playlists/{playlist_id}/tracks", response_model=List[TrackOut])
def get_spotify_playlist_tracks(
    playlist_id: str,
    token_info: Dict = Depends(require_token),
) -> List[TrackOut]:
    try:
        tracks = get_playlist_tracks(token_info, playlist_id)
    except SpotifyAPIError as e:
        raise_upstream(e)
    return [track_out(t) for t in tracks]
