"""Queue selection engine: pure logic, no I/O.

Two ways of turning a playlist into a play queue:

  - shuffle_tracks(): an unbiased Fisher–Yates permutation of every track.
  - fit_tracks_to_duration(): fill a time budget as completely as possible
    without ever going over it.

The timed fit is a heuristic. Each trial shuffles the tracks and walks them
once, first-fit style, taking every track that still fits and skipping the
others (no backtracking). The best trial wins. This approximates the
subset-sum flavour of the knapsack problem and is NOT guaranteed to find the
optimal subset; exact solving is exponential in the number of tracks.

Randomness always comes from an explicitly passed source (a random.Random
or anything exposing randint(a, b)). A fixed seed therefore reproduces the
same sequence of permutations and the same result, and concurrent callers
never share generator state as long as each passes its own instance.
"""

import random
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from timed_queue.config import DEFAULT_TRIAL_COUNT
from timed_queue.core.logging_utils import log_info
from timed_queue.core.models import (
    SelectionMode,
    SelectionRequest,
    SelectionResult,
    Track,
    format_duration,
)

T = TypeVar("T")


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class SelectionError(ValueError):
    """Base class for invalid selection requests."""


class InvalidTrialCount(SelectionError):
    pass


class MissingTargetDuration(SelectionError):
    pass


def fisher_yates_shuffle(items: List[T], rng: RandomSource) -> List[T]:
    """In-place unbiased Fisher–Yates (Knuth) shuffle.

    Walks from the last index down to 1 and swaps each position with a
    uniformly drawn index in [0, i]. Lists of length 0 or 1 are left as is.
    Returns the same list for convenience.
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffle_tracks(
    tracks: Sequence[Track], rng: Optional[RandomSource] = None
) -> List[Track]:
    """Return a shuffled copy of `tracks`; the input is not modified."""
    rng = rng or random.Random()
    return fisher_yates_shuffle(list(tracks), rng)


def _first_fit(
    tracks: Sequence[Track], target_duration_ms: int
) -> Tuple[List[Track], int]:
    chosen: List[Track] = []
    total = 0
    for track in tracks:
        # Keep scanning after a miss: a later, shorter track may still fit.
        if total + track.duration_ms <= target_duration_ms:
            chosen.append(track)
            total += track.duration_ms
    return chosen, total


def fit_tracks_to_duration(
    tracks: Sequence[Track],
    target_duration_ms: int,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    rng: Optional[RandomSource] = None,
) -> SelectionResult:
    """
    Pick an ordered subset of `tracks` whose total duration is as large as
    possible without exceeding `target_duration_ms`.

    Runs `trial_count` independent shuffled first-fit passes and keeps the
    subset with the largest total. On ties the earliest trial wins.

    - trial_count < 1 raises InvalidTrialCount
    - target_duration_ms <= 0 or empty input -> empty result, total 0
    - tracks longer than the target can never be chosen
    - zero-length tracks always fit and are kept
    """
    if trial_count < 1:
        raise InvalidTrialCount(f"trial_count must be >= 1, got {trial_count}.")

    if target_duration_ms <= 0:
        return SelectionResult(mode=SelectionMode.TIMED)

    rng = rng or random.Random()

    best_tracks: Optional[List[Track]] = None
    best_total = 0

    for _ in range(trial_count):
        candidate, total = _first_fit(
            shuffle_tracks(tracks, rng), target_duration_ms
        )
        if best_tracks is None or total > best_total:
            best_tracks = candidate
            best_total = total

    result = SelectionResult(
        ordered_tracks=best_tracks or [],
        total_duration_ms=best_total,
        trials_run=trial_count,
        mode=SelectionMode.TIMED,
    )
    log_info(
        f"Timed fit: {len(result.ordered_tracks)}/{len(tracks)} tracks, "
        f"total duration {format_duration(best_total)} "
        f"(target {format_duration(target_duration_ms)}, {trial_count} trials)."
    )
    return result


def select_tracks(
    request: SelectionRequest, rng: Optional[RandomSource] = None
) -> SelectionResult:
    """Dispatch a SelectionRequest to the shuffle or the timed fit."""
    rng = rng or random.Random()

    if request.mode == SelectionMode.SHUFFLE:
        shuffled = shuffle_tracks(request.tracks, rng)
        return SelectionResult(
            ordered_tracks=shuffled,
            total_duration_ms=sum(t.duration_ms for t in shuffled),
            trials_run=1,
            mode=SelectionMode.SHUFFLE,
        )

    if request.mode == SelectionMode.TIMED:
        if request.target_duration_ms is None:
            raise MissingTargetDuration("Timed selection requires a target duration.")
        return fit_tracks_to_duration(
            request.tracks,
            request.target_duration_ms,
            trial_count=request.trial_count,
            rng=rng,
        )

    raise SelectionError(f"Unsupported selection mode: {request.mode!r}")
