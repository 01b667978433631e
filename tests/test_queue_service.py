import random
from typing import List

import pytest

from timed_queue.core import InvalidTrialCount, PlaylistInfo, SelectionMode, Track
from timed_queue.queue import (
    EmptyPlaylistError,
    NothingFitsError,
    QueueRequestError,
    build_queue,
    queue_shuffled_playlist,
    queue_timed_playlist,
)
from timed_queue.spotify import SpotifyNoActiveDevice

TOKEN = {"access_token": "abc"}


def make_tracks(durations: List[int]) -> List[Track]:
    return [
        Track(id=f"t{i}", play_ref=f"spotify:track:t{i}", duration_ms=d, name=f"Song {i}")
        for i, d in enumerate(durations, start=1)
    ]


@pytest.fixture
def spotify(monkeypatch):
    """Replace the Spotify calls used by the queue service."""
    state = {"tracks": make_tracks([180_000, 240_000, 200_000, 300_000]), "played": []}

    monkeypatch.setattr(
        "timed_queue.queue.service.get_playlist_tracks",
        lambda token_info, playlist_id: list(state["tracks"]),
    )
    monkeypatch.setattr(
        "timed_queue.queue.service.get_playlist",
        lambda token_info, playlist_id: PlaylistInfo(
            id=playlist_id, name="Morning", image_url="https://img/x.jpg"
        ),
    )
    monkeypatch.setattr(
        "timed_queue.queue.service.start_playback",
        lambda token_info, uris: state["played"].append(list(uris)),
    )
    return state


def test_shuffle_plays_every_track(spotify) -> None:
    outcome = queue_shuffled_playlist(TOKEN, "pl1", rng=random.Random(0))

    assert outcome.result.mode == SelectionMode.SHUFFLE
    assert sorted(outcome.result.play_refs) == sorted(
        t.play_ref for t in spotify["tracks"]
    )
    assert spotify["played"] == [outcome.result.play_refs]
    assert outcome.playlist.name == "Morning"
    assert outcome.message == "Shuffling and playback started!"


def test_timed_queue_stays_within_budget(spotify) -> None:
    outcome = queue_timed_playlist(TOKEN, "pl1", 10, trial_count=20, rng=random.Random(1))

    assert outcome.result.total_duration_ms <= 600_000
    assert outcome.result.trials_run == 20
    assert spotify["played"] == [outcome.result.play_refs]
    assert outcome.message.startswith("Timed queue of ")


def test_timed_queue_dry_run_does_not_play(spotify) -> None:
    outcome = queue_timed_playlist(TOKEN, "pl1", 10, rng=random.Random(1), start=False)

    assert spotify["played"] == []
    assert outcome.playback_started is False
    assert outcome.result.ordered_tracks


def test_missing_playlist_id_is_a_request_error(spotify) -> None:
    with pytest.raises(QueueRequestError):
        build_queue(TOKEN, "", SelectionMode.SHUFFLE)


@pytest.mark.parametrize("minutes", [None, 0, -5])
def test_timed_queue_requires_positive_minutes(spotify, minutes) -> None:
    with pytest.raises(QueueRequestError):
        build_queue(TOKEN, "pl1", SelectionMode.TIMED, duration_minutes=minutes)


def test_empty_playlist_is_reported(spotify) -> None:
    spotify["tracks"] = []

    with pytest.raises(EmptyPlaylistError):
        queue_shuffled_playlist(TOKEN, "pl1")
    assert spotify["played"] == []


def test_nothing_fits_is_reported(spotify) -> None:
    spotify["tracks"] = make_tracks([600_000, 900_000])

    with pytest.raises(NothingFitsError):
        queue_timed_playlist(TOKEN, "pl1", 5)
    assert spotify["played"] == []


def test_invalid_trial_count_propagates(spotify) -> None:
    with pytest.raises(InvalidTrialCount):
        queue_timed_playlist(TOKEN, "pl1", 10, trial_count=0)


def test_playback_errors_propagate(spotify, monkeypatch) -> None:
    def _no_device(token_info, uris):
        raise SpotifyNoActiveDevice("No active Spotify device found.", status_code=404)

    monkeypatch.setattr("timed_queue.queue.service.start_playback", _no_device)

    with pytest.raises(SpotifyNoActiveDevice):
        queue_shuffled_playlist(TOKEN, "pl1")
