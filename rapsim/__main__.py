"""
Headless career runner.

Plays a simple autopilot career for N weeks (a free song every other week,
random events answered with their first option, controversies with an
apology) and prints the weekly ledger.

    python -m rapsim --weeks 52 --seed 7 --artist "Lil Test"
"""

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from .actions import create_song, release_song, resolve_random_event, respond_to_controversy
from .analytics import career_summary, top_songs, weekly_stats_frame
from .catalog import new_game
from .config import settings
from .engine import advance_week
from .exceptions import InvalidActionError
from .models import GameState
from .persistence import save_game
from .rng import RandomSource

logger = logging.getLogger("rapsim")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rapsim", description="Run a headless rap career simulation.")
    parser.add_argument("--weeks", type=int, default=26, help="Weeks to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    parser.add_argument("--artist", default="MC Autopilot", help="Artist name")
    parser.add_argument("--save", action="store_true", help="Write the final state to a save slot")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return parser.parse_args(argv)


def autopilot_week(state: GameState, rng: RandomSource) -> GameState:
    """The player's moves for one week."""
    if state.current_week % 2 == 1:
        try:
            state, song = create_song(state, "", 0, rng=rng)
            platforms = [p.name for p in state.platforms if p.is_unlocked]
            state, _ = release_song(state, song.id, platforms=platforms, rng=rng)
        except InvalidActionError as e:
            logger.info("Autopilot skipped a release: %s", e)

    for event in list(state.random_events):
        state, _ = resolve_random_event(state, event.id, 0)
    for controversy in list(state.active_controversies):
        state, _ = respond_to_controversy(state, controversy.id, 0)
    return state


def run(weeks: int, artist: str, seed: Optional[int] = None) -> GameState:
    rng = RandomSource(seed)
    state = new_game(artist, max_energy=settings.engine.max_energy)
    for _ in range(weeks):
        state = autopilot_week(state, rng)
        state, notes = advance_week(state, rng)
        for note in notes:
            logger.info("Week %s: %s", note.week, note.message)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if args.weeks < 1:
        print("--weeks must be at least 1", file=sys.stderr)
        return 2

    state = run(args.weeks, args.artist, args.seed)

    with pd.option_context("display.max_columns", None, "display.width", 160):
        print(career_summary(state).to_string())
        print()
        print(weekly_stats_frame(state).to_string())
        print()
        print(top_songs(state, limit=5).to_string(index=False))

    if args.save:
        save_id = save_game(state)
        print(f"\nSaved as {save_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
