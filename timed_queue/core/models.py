from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from timed_queue.config import DEFAULT_TRIAL_COUNT


@dataclass(frozen=True)
class Track:
    """
    One playable playlist item.

    - id          : stable Spotify track id (identity / dedup key)
    - play_ref    : opaque token handed to playback (the Spotify URI)
    - duration_ms : non-negative length, the only weight used for selection
    - name/artist/album : presentation only
    """

    id: str
    play_ref: str
    duration_ms: int
    name: str = ""
    artist: str = ""
    album: str = ""

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError(
                f"Track {self.id!r} has a negative duration ({self.duration_ms} ms)."
            )


class SelectionMode(str, Enum):
    SHUFFLE = "shuffle"
    TIMED = "timed"


@dataclass
class SelectionRequest:
    tracks: Sequence[Track]
    mode: SelectionMode
    target_duration_ms: Optional[int] = None
    trial_count: int = DEFAULT_TRIAL_COUNT


def split_duration(duration_ms: int) -> tuple[int, int]:
    """Return (whole minutes, residual whole seconds) for a duration in ms."""
    minutes = duration_ms // 60000
    seconds = (duration_ms % 60000) // 1000
    return minutes, seconds


def format_duration(duration_ms: int) -> str:
    minutes, seconds = split_duration(duration_ms)
    return f"{minutes}m {seconds}s"


@dataclass
class SelectionResult:
    """
    Ordered subset of tracks chosen by the selection engine.

    For timed selections total_duration_ms never exceeds the requested
    target. For shuffles ordered_tracks is a permutation of the whole input.
    """

    ordered_tracks: List[Track] = field(default_factory=list)
    total_duration_ms: int = 0
    trials_run: int = 0
    mode: SelectionMode = SelectionMode.TIMED

    @property
    def play_refs(self) -> List[str]:
        return [t.play_ref for t in self.ordered_tracks]

    @property
    def total_minutes(self) -> int:
        return split_duration(self.total_duration_ms)[0]

    @property
    def total_seconds(self) -> int:
        return split_duration(self.total_duration_ms)[1]

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.total_duration_ms)


@dataclass
class PlaylistInfo:
    """Playlist metadata shown next to a generated queue."""

    id: str
    name: str
    image_url: Optional[str] = None
    tracks_total: int = 0
    owner: str = ""
