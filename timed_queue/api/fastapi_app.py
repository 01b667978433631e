from fastapi import FastAPI

from timed_queue.api.auth.routes import router as auth_router
from timed_queue.api.health import router as health_router
from timed_queue.api.queue.routes import router as queue_router
from timed_queue.api.spotify.playlists import router as spotify_playlists_router
from timed_queue.core import configure_logging

configure_logging()

app = FastAPI(
    title="Spotify Timed Queue API",
    version="0.1.0",
    description="Shuffle a Spotify playlist or fill a time budget with its tracks.",
)

app.include_router(health_router, tags=["health"])

# Auth routes
app.include_router(auth_router, prefix="/auth", tags=["auth"])

# Spotify data routes
app.include_router(spotify_playlists_router, prefix="/spotify", tags=["spotify"])

# Queue routes
app.include_router(queue_router, prefix="/queue", tags=["queue"])
