"""Queue orchestration: playlist -> selection -> playback.

The helpers here glue the Spotify track source, the selection engine and the
playback call together. They do not catch Spotify errors; the HTTP layer and
the CLI turn them into user-facing messages.
"""

import random
from dataclasses import dataclass
from typing import Dict, Optional

from timed_queue.config import DEFAULT_TRIAL_COUNT
from timed_queue.core import (
    PlaylistInfo,
    RandomSource,
    SelectionMode,
    SelectionRequest,
    SelectionResult,
    log_info,
    log_section,
    log_step,
    select_tracks,
)
from timed_queue.spotify import get_playlist, get_playlist_tracks, start_playback

NO_ACTIVE_DEVICE_MESSAGE = (
    "No active Spotify device found. "
    "Please open Spotify on one of your devices and try again."
)


class QueueError(Exception):
    """Base class for queue requests that cannot be served."""


class QueueRequestError(QueueError):
    pass


class EmptyPlaylistError(QueueError):
    pass


class NothingFitsError(QueueError):
    pass


@dataclass
class QueueOutcome:
    playlist: PlaylistInfo
    result: SelectionResult
    playback_started: bool

    @property
    def message(self) -> str:
        if not self.playback_started:
            return "Queue generated (playback not started)."
        if self.result.mode == SelectionMode.TIMED:
            return f"Timed queue of {self.result.formatted_duration} started!"
        return "Shuffling and playback started!"


def build_queue(
    token_info: Dict,
    playlist_id: str,
    mode: SelectionMode,
    duration_minutes: Optional[int] = None,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    rng: Optional[RandomSource] = None,
    start: bool = True,
) -> QueueOutcome:
    """
    Build a queue from a playlist and (optionally) start playing it.

    Raises:
      - QueueRequestError  : missing playlist id / duration
      - EmptyPlaylistError : the playlist has no playable track
      - NothingFitsError   : timed mode, every track is longer than the budget
      - SelectionError     : invalid trial count
      - Spotify errors from the track source and the player, unchanged
    """
    if not playlist_id:
        raise QueueRequestError("No playlist selected.")

    target_duration_ms: Optional[int] = None
    if mode == SelectionMode.TIMED:
        if not duration_minutes or duration_minutes <= 0:
            raise QueueRequestError("Please choose a queue duration in minutes.")
        target_duration_ms = duration_minutes * 60000

    log_section(f"{mode.value.capitalize()} queue for playlist {playlist_id}")
    tracks = get_playlist_tracks(token_info, playlist_id)
    if not tracks:
        raise EmptyPlaylistError("No tracks found in this playlist.")

    result = select_tracks(
        SelectionRequest(
            tracks=tracks,
            mode=mode,
            target_duration_ms=target_duration_ms,
            trial_count=trial_count,
        ),
        rng or random.Random(),
    )
    if not result.ordered_tracks:
        raise NothingFitsError(
            f"No track of this playlist fits in {duration_minutes} minutes."
        )

    if start:
        start_playback(token_info, result.play_refs)
    else:
        log_step("Playback not requested; returning the queue only.")

    playlist = get_playlist(token_info, playlist_id)
    log_info(
        f"Queue ready: {len(result.ordered_tracks)} tracks, "
        f"{result.formatted_duration} from '{playlist.name}'."
    )
    return QueueOutcome(playlist=playlist, result=result, playback_started=start)


def queue_shuffled_playlist(
    token_info: Dict,
    playlist_id: str,
    rng: Optional[RandomSource] = None,
    start: bool = True,
) -> QueueOutcome:
    return build_queue(
        token_info, playlist_id, SelectionMode.SHUFFLE, rng=rng, start=start
    )


def queue_timed_playlist(
    token_info: Dict,
    playlist_id: str,
    duration_minutes: int,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    rng: Optional[RandomSource] = None,
    start: bool = True,
) -> QueueOutcome:
    return build_queue(
        token_info,
        playlist_id,
        SelectionMode.TIMED,
        duration_minutes=duration_minutes,
        trial_count=trial_count,
        rng=rng,
        start=start,
    )
