"""Public façade for the timed_queue.core package.

This module exposes the selection engine, the base models, logging helpers
and filesystem utilities. Other packages should import these from this
façade instead of the internal submodules.
"""

from .fs_utils import ensure_dir, ensure_parent_dir, read_json, remove_file, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    PlaylistInfo,
    SelectionMode,
    SelectionRequest,
    SelectionResult,
    Track,
    format_duration,
    split_duration,
)
from .selection import (
    InvalidTrialCount,
    MissingTargetDuration,
    RandomSource,
    SelectionError,
    fisher_yates_shuffle,
    fit_tracks_to_duration,
    select_tracks,
    shuffle_tracks,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_progress",
    "ensure_parent_dir",
    "ensure_dir",
    "write_json",
    "read_json",
    "remove_file",
    "Track",
    "PlaylistInfo",
    "SelectionMode",
    "SelectionRequest",
    "SelectionResult",
    "format_duration",
    "split_duration",
    "RandomSource",
    "SelectionError",
    "InvalidTrialCount",
    "MissingTargetDuration",
    "fisher_yates_shuffle",
    "shuffle_tracks",
    "fit_tracks_to_duration",
    "select_tracks",
]
