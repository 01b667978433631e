import random
from typing import Dict, NoReturn

from fastapi import APIRouter, Depends, HTTPException

from timed_queue.api.deps import get_rng, raise_upstream, require_token
from timed_queue.api.spotify.playlists import track_out
from timed_queue.config import DEFAULT_TRIAL_COUNT
from timed_queue.core import SelectionError, log_warning
from timed_queue.queue import (
    NO_ACTIVE_DEVICE_MESSAGE,
    QueueError,
    QueueOutcome,
    queue_shuffled_playlist,
    queue_timed_playlist,
)
from timed_queue.spotify import SpotifyAPIError, SpotifyNoActiveDevice

from .schemas import QueueResponse, ShuffleRequest, TimedQueueRequest

router = APIRouter()


def _bad_request(message: str) -> NoReturn:
    raise HTTPException(
        status_code=400,
        detail={"status": "invalid_request", "message": message},
    )


def _no_device() -> NoReturn:
    log_warning("Playback refused: no active Spotify device.")
    raise HTTPException(
        status_code=409,
        detail={"status": "no_active_device", "message": NO_ACTIVE_DEVICE_MESSAGE},
    )


def _rng_for(seed, default_rng: random.Random) -> random.Random:
    return random.Random(seed) if seed is not None else default_rng


def _to_response(outcome: QueueOutcome) -> QueueResponse:
    result = outcome.result
    return QueueResponse(
        mode=result.mode.value,
        message=outcome.message,
        playlist_id=outcome.playlist.id,
        playlist_name=outcome.playlist.name,
        playlist_image=outcome.playlist.image_url,
        tracks=[track_out(t) for t in result.ordered_tracks],
        total_duration_ms=result.total_duration_ms,
        total_duration=result.formatted_duration,
        trials_run=result.trials_run,
        playback_started=outcome.playback_started,
    )


@router.post("/shuffle", response_model=QueueResponse)
def shuffle_queue(
    body: ShuffleRequest,
    token_info: Dict = Depends(require_token),
    rng: random.Random = Depends(get_rng),
) -> QueueResponse:
    """
    Shuffle every playable track of a playlist and start playing it.
    """
    try:
        outcome = queue_shuffled_playlist(
            token_info,
            body.playlist_id,
            rng=_rng_for(body.seed, rng),
            start=body.start_playback,
        )
    except QueueError as e:
        _bad_request(str(e))
    except SpotifyNoActiveDevice:
        _no_device()
    except SpotifyAPIError as e:
        raise_upstream(e)

    return _to_response(outcome)


@router.post("/timed", response_model=QueueResponse)
def timed_queue(
    body: TimedQueueRequest,
    token_info: Dict = Depends(require_token),
    rng: random.Random = Depends(get_rng),
) -> QueueResponse:
    """
    Pick tracks filling `duration_minutes` as closely as possible (never
    more) and start playing them.
    """
    trial_count = body.trial_count or DEFAULT_TRIAL_COUNT
    try:
        outcome = queue_timed_playlist(
            token_info,
            body.playlist_id,
            body.duration_minutes,
            trial_count=trial_count,
            rng=_rng_for(body.seed, rng),
            start=body.start_playback,
        )
    except (QueueError, SelectionError) as e:
        _bad_request(str(e))
    except SpotifyNoActiveDevice:
        _no_device()
    except SpotifyAPIError as e:
        raise_upstream(e)

    return _to_response(outcome)
