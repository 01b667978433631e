from typing import Optional

from pydantic import BaseModel


class PlaylistSummary(BaseModel):
    id: str
    name: str
    owner: str
    image_url: Optional[str] = None
    tracks_total: int


class TrackOut(BaseModel):
    id: str
    uri: str
    name: str
    artist: str
    album: str
    duration_ms: int
