from typing import List, Optional

from pydantic import BaseModel, Field

from timed_queue.api.spotify.schemas import TrackOut


class ShuffleRequest(BaseModel):
    playlist_id: str
    seed: Optional[int] = None
    start_playback: bool = True


class TimedQueueRequest(BaseModel):
    playlist_id: str
    duration_minutes: int = Field(gt=0)
    trial_count: Optional[int] = Field(default=None, ge=1)
    seed: Optional[int] = None
    start_playback: bool = True


class QueueResponse(BaseModel):
    mode: str
    message: str
    playlist_id: str
    playlist_name: Optional[str] = None
    playlist_image: Optional[str] = None
    tracks: List[TrackOut]
    total_duration_ms: int
    total_duration: str
    trials_run: int
    playback_started: bool
