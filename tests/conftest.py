"""Shared fixtures for the simulation tests."""

import pytest

from rapsim.catalog import new_game
from rapsim.models import PerformanceType, PlayerStats, Song
from rapsim.rng import RandomSource

DEFAULT_RELEASE_PLATFORMS = ["Spotify", "YouTube Music", "iTunes", "SoundCloud"]


@pytest.fixture
def game():
    """A fresh career at week 1."""
    return new_game("Test Artist", artist_id="artist-1")


@pytest.fixture
def rich_game(game):
    """A fresh career with enough money and reputation for anything."""
    state = game.clone()
    state.stats.wealth = 10_000_000
    state.stats.reputation = 80
    return state


@pytest.fixture
def stats():
    return PlayerStats(reputation=20, creativity=20, marketing=10)


@pytest.fixture
def rng():
    return RandomSource(seed=42)


@pytest.fixture
def make_song():
    """Factory for released, active songs."""
    counter = {"n": 0}

    def _make(tier=3, streams=0, release_date=1, performance=PerformanceType.NORMAL, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("release_platforms", list(DEFAULT_RELEASE_PLATFORMS))
        return Song(
            id=kwargs.pop("id", f"song-{counter['n']}"),
            title=kwargs.pop("title", f"Test Song {counter['n']}"),
            tier=tier,
            released=kwargs.pop("released", True),
            release_date=release_date,
            streams=streams,
            is_active=kwargs.pop("is_active", True),
            performance_type=performance,
            performance_status_week=kwargs.pop("performance_status_week", release_date),
            **kwargs,
        )

    return _make
