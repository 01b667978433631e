"""Public façade for the timed_queue.queue package."""

from .service import (
    NO_ACTIVE_DEVICE_MESSAGE,
    EmptyPlaylistError,
    NothingFitsError,
    QueueError,
    QueueOutcome,
    QueueRequestError,
    build_queue,
    queue_shuffled_playlist,
    queue_timed_playlist,
)

__all__ = [
    "NO_ACTIVE_DEVICE_MESSAGE",
    "QueueError",
    "QueueRequestError",
    "EmptyPlaylistError",
    "NothingFitsError",
    "QueueOutcome",
    "build_queue",
    "queue_shuffled_playlist",
    "queue_timed_playlist",
]
