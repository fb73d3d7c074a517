"""Tests for the song performance model."""

from rapsim.catalog import tier_info
from rapsim.engine.performance import (
    advance_song,
    classify_performance,
    growth_for,
    popularity_window,
)
from rapsim.models import PerformanceType, PlayerStats, Song
from rapsim.rng import RandomSource, ScriptedRandom


def test_tier3_song_after_two_weeks(make_song, stats):
    song = make_song(tier=3, release_date=1)
    rng = ScriptedRandom([0.5])

    for week in (2, 3):
        song = advance_song(song, week, stats, rng)

    assert song.performance_type in {PerformanceType.NORMAL, PerformanceType.VIRAL, PerformanceType.FLOP}
    assert isinstance(song.streams, int)
    assert 0 < song.streams <= 1_000_000


def test_streams_never_decrease_and_respect_caps(make_song, stats):
    rng = RandomSource(seed=7)
    for tier in range(1, 6):
        info = tier_info(tier)
        song = make_song(tier=tier, release_date=1)
        for week in range(2, 80):
            before = song.streams
            song = advance_song(song, week, stats, rng)
            assert song.streams >= before
            assert song.streams - before <= info.weekly_cap
            assert song.streams <= info.max_streams


def test_unreleased_song_does_not_grow(stats):
    song = Song(id="draft", title="Draft", tier=3)
    rng = ScriptedRandom([0.5])

    assert growth_for(song, 5, stats, rng) == 0
    assert advance_song(song, 5, stats, rng) is song


def test_song_past_popularity_window_goes_inactive(make_song, stats):
    song = make_song(tier=1, release_date=1, streams=4_000)
    rng = ScriptedRandom([0.99])

    updated = advance_song(song, 20, stats, rng)

    assert updated.streams == 4_000
    assert updated.last_week_growth == 0
    assert updated.is_active is False


def test_banger_never_runs_out_of_window(make_song, stats):
    song = make_song(tier=5, release_date=1)

    assert popularity_window(song) is None
    assert growth_for(song, 300, stats, ScriptedRandom([0.5])) > 0


def test_classification_is_repeatable_with_same_seed(make_song, stats):
    song = make_song(tier=2, release_date=1)

    first = classify_performance(song, 2, stats, RandomSource(seed=123))
    second = classify_performance(song, 2, stats, RandomSource(seed=123))

    assert first is second


def test_viral_status_expires_after_two_weeks(make_song, stats):
    song = make_song(tier=3, release_date=1, performance=PerformanceType.VIRAL, performance_status_week=2)
    rng = ScriptedRandom([0.5])

    assert classify_performance(song, 4, stats, rng) is PerformanceType.VIRAL
    assert classify_performance(song, 5, stats, rng) is PerformanceType.NORMAL


def test_flop_can_turn_into_comeback(make_song, stats):
    song = make_song(tier=3, release_date=1, performance=PerformanceType.FLOP)

    assert classify_performance(song, 6, stats, ScriptedRandom([0.01])) is PerformanceType.COMEBACK
    assert classify_performance(song, 6, stats, ScriptedRandom([0.5])) is PerformanceType.FLOP


def test_flop_roll_uses_reputation_and_creativity(make_song):
    song = make_song(tier=3, release_date=1)
    # 0.05 - (5 + 5) / 500 = 0.03
    weak = PlayerStats(reputation=5, creativity=5, marketing=0)

    assert classify_performance(song, 2, weak, ScriptedRandom([0.02])) is PerformanceType.FLOP
    assert classify_performance(song, 2, weak, ScriptedRandom([0.04, 0.99])) is PerformanceType.NORMAL


def test_hype_reopens_inactive_song(make_song, stats):
    song = make_song(tier=2, release_date=1, is_active=False, hype=5)

    updated = advance_song(song, 20, stats, ScriptedRandom([0.99]))

    assert updated.is_active is True
    assert updated.last_week_growth > 0


def test_inactive_song_without_hype_stays_inactive(make_song, stats):
    song = make_song(tier=2, release_date=1, is_active=False)

    updated = advance_song(song, 20, stats, ScriptedRandom([0.99]))

    assert updated.is_active is False
    assert updated.streams == song.streams
