from typing import Any, Dict

import pytest
import requests

from timed_queue.config import SPOTIFY_API_BASE
from timed_queue.spotify import (
    SpotifyAPIError,
    SpotifyNoActiveDevice,
    get_playlist,
    get_playlist_tracks,
    list_user_playlists,
    start_playback,
)

TOKEN = {"access_token": "abc"}


def _item(track_id, duration_ms=200_000, is_local=False, uri=True) -> Dict[str, Any]:
    return {
        "track": {
            "id": track_id,
            "uri": f"spotify:track:{track_id}" if uri else None,
            "name": f"Song {track_id}",
            "duration_ms": duration_ms,
            "is_local": is_local,
            "artists": [{"name": "A"}, {"name": "B"}],
            "album": {"name": "Album"},
        }
    }


def _fake_get(pages: Dict[str, Dict[str, Any]], seen: list):
    def _get(token_info, url, params=None, action=""):
        seen.append((url, params))
        return pages[url]

    return _get


def test_get_playlist_tracks_follows_pages_and_skips_unplayable(monkeypatch) -> None:
    first = f"{SPOTIFY_API_BASE}/playlists/pl1/tracks"
    second = f"{first}?offset=100&limit=100"
    pages = {
        first: {
            "total": 6,
            "items": [
                _item("t1", 180_000),
                {"track": None},
                _item("local", is_local=True),
            ],
            "next": second,
        },
        second: {
            "total": 6,
            "items": [_item("t2", 0), _item("t1", 180_000), _item("nouri", uri=False)],
            "next": None,
        },
    }
    seen = []
    monkeypatch.setattr(
        "timed_queue.spotify.playlists._spotify_get", _fake_get(pages, seen)
    )

    tracks = get_playlist_tracks(TOKEN, "pl1")

    assert [t.id for t in tracks] == ["t1", "t2", "t1"]
    assert tracks[0].play_ref == "spotify:track:t1"
    assert tracks[0].duration_ms == 180_000
    assert tracks[0].artist == "A, B"
    assert tracks[1].duration_ms == 0
    assert seen == [(first, {"limit": 100}), (second, None)]


def test_list_user_playlists_collects_every_page(monkeypatch) -> None:
    first = f"{SPOTIFY_API_BASE}/me/playlists"
    second = f"{first}?offset=50&limit=50"
    pages = {
        first: {"items": [{"id": "p1", "name": "One"}], "next": second},
        second: {"items": [{"id": "p2", "name": "Two"}, None], "next": None},
    }
    seen = []
    monkeypatch.setattr(
        "timed_queue.spotify.playlists._spotify_get", _fake_get(pages, seen)
    )

    playlists = list_user_playlists(TOKEN)

    assert [p["id"] for p in playlists] == ["p1", "p2"]
    assert seen[0] == (first, {"limit": 50})


def test_get_playlist_returns_metadata(monkeypatch) -> None:
    url = f"{SPOTIFY_API_BASE}/playlists/pl1"
    pages = {
        url: {
            "id": "pl1",
            "name": "Road trip",
            "images": [{"url": "https://img/1.jpg"}, {"url": "https://img/2.jpg"}],
            "owner": {"id": "u1", "display_name": "Sam"},
            "tracks": {"total": 42},
        }
    }
    monkeypatch.setattr(
        "timed_queue.spotify.playlists._spotify_get", _fake_get(pages, [])
    )

    info = get_playlist(TOKEN, "pl1")

    assert info.name == "Road trip"
    assert info.image_url == "https://img/1.jpg"
    assert info.owner == "Sam"
    assert info.tracks_total == 42


class FakeResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


def _fake_put(status_code: int, calls: list):
    def _put(url, headers=None, params=None, json=None, timeout=None):
        calls.append({"url": url, "params": params, "json": json})
        return FakeResponse(status_code)

    return _put


def test_start_playback_sends_uris_in_order(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr("timed_queue.spotify.player.requests.put", _fake_put(204, calls))

    start_playback(TOKEN, ["spotify:track:b", "spotify:track:a"])

    assert calls[0]["url"] == f"{SPOTIFY_API_BASE}/me/player/play"
    assert calls[0]["json"] == {"uris": ["spotify:track:b", "spotify:track:a"]}
    assert calls[0]["params"] is None


def test_start_playback_without_device_raises(monkeypatch) -> None:
    monkeypatch.setattr("timed_queue.spotify.player.requests.put", _fake_put(404, []))

    with pytest.raises(SpotifyNoActiveDevice):
        start_playback(TOKEN, ["spotify:track:a"])


def test_start_playback_other_errors_raise_api_error(monkeypatch) -> None:
    monkeypatch.setattr("timed_queue.spotify.player.requests.put", _fake_put(502, []))

    with pytest.raises(SpotifyAPIError) as excinfo:
        start_playback(TOKEN, ["spotify:track:a"])

    assert not isinstance(excinfo.value, SpotifyNoActiveDevice)
    assert excinfo.value.status_code == 502


def test_start_playback_rejects_empty_queue() -> None:
    with pytest.raises(ValueError):
        start_playback(TOKEN, [])
