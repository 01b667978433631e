"""
Command line front-end for the timed queue.

Uses the token stored by the web login (/auth/login). Examples:

  python main.py playlists
  python main.py tracks 37i9dQZF1DXcBWIGoYBM5M
  python main.py shuffle 37i9dQZF1DXcBWIGoYBM5M
  python main.py timed 37i9dQZF1DXcBWIGoYBM5M 45 --trials 50 --dry-run
"""

import argparse
import random
import sys
from typing import List, Optional

from timed_queue.config import DEFAULT_TRIAL_COUNT
from timed_queue.core import (
    SelectionError,
    configure_logging,
    format_duration,
    log_error,
    log_info,
    log_success,
    log_warning,
)
from timed_queue.queue import (
    NO_ACTIVE_DEVICE_MESSAGE,
    QueueError,
    QueueOutcome,
    queue_shuffled_playlist,
    queue_timed_playlist,
)
from timed_queue.spotify import (
    SpotifyAPIError,
    SpotifyNoActiveDevice,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    get_playlist_tracks,
    list_user_playlists,
    load_spotify_token,
)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Shuffle a Spotify playlist or fill a time budget with it.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("playlists", help="List your playlists")

    tracks = sub.add_parser("tracks", help="List the playable tracks of a playlist")
    tracks.add_argument("playlist_id")

    shuffle = sub.add_parser("shuffle", help="Play the whole playlist shuffled")
    shuffle.add_argument("playlist_id")

    timed = sub.add_parser("timed", help="Play tracks filling MINUTES")
    timed.add_argument("playlist_id")
    timed.add_argument("minutes", type=int)
    timed.add_argument(
        "--trials",
        type=int,
        default=DEFAULT_TRIAL_COUNT,
        help=f"number of randomized attempts (default: {DEFAULT_TRIAL_COUNT})",
    )

    for p in (shuffle, timed):
        p.add_argument("--seed", type=int, default=None, help="reproducible order")
        p.add_argument(
            "--dry-run",
            action="store_true",
            help="only print the queue, do not start playback",
        )

    return parser.parse_args(argv)


def print_outcome(outcome: QueueOutcome) -> None:
    print(f"{outcome.message}  [{outcome.playlist.name}]")
    for i, t in enumerate(outcome.result.ordered_tracks, start=1):
        print(f"{i:3d}. {t.artist} - {t.name} ({format_duration(t.duration_ms)})")
    print(f"Total: {outcome.result.formatted_duration}")


def run(args: argparse.Namespace) -> int:
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing as e:
        log_warning(str(e))
        print(f"Authorize the application first:\n{build_spotify_auth_url()}")
        return 1

    try:
        if args.command == "playlists":
            for p in list_user_playlists(token_info):
                if "id" not in p:
                    continue
                print(f"{p['id']}  {p.get('name', '')}")
            return 0

        if args.command == "tracks":
            for t in get_playlist_tracks(token_info, args.playlist_id):
                print(f"{t.play_ref}  {t.artist} - {t.name}")
            return 0

        rng = random.Random(args.seed)
        if args.command == "shuffle":
            outcome = queue_shuffled_playlist(
                token_info, args.playlist_id, rng=rng, start=not args.dry_run
            )
        else:
            outcome = queue_timed_playlist(
                token_info,
                args.playlist_id,
                args.minutes,
                trial_count=args.trials,
                rng=rng,
                start=not args.dry_run,
            )
    except (QueueError, SelectionError) as e:
        log_error(str(e))
        return 1
    except SpotifyNoActiveDevice:
        log_error(NO_ACTIVE_DEVICE_MESSAGE)
        return 1
    except SpotifyAPIError as e:
        log_error(f"{e}. Please try again in a moment.")
        return 1

    print_outcome(outcome)
    log_success("Done.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = parse_arguments(argv)
    log_info(f"Command: {args.command}")
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
