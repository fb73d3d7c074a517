"""Tests for the weekly orchestrator."""

import math

from rapsim.actions import create_song, create_tour, release_song, schedule_concert, start_beef
from rapsim.config import EngineSettings
from rapsim.engine import advance_week
from rapsim.models import Album, ConcertStatus, TourStatus
from rapsim.rng import RandomSource

QUIET = EngineSettings(
    market_trend_chance=0.0,
    random_event_chance=0.0,
    controversy_max_percent=0.0,
    feature_request_cap=0.0,
)


def _released(state, tier=1, rng=None):
    rng = rng or RandomSource(seed=1)
    state, song = create_song(state, "Opener", tier, rng=rng)
    state, _ = release_song(state, song.id, platforms=["Spotify", "SoundCloud"], rng=rng)
    return state, song.id


def test_input_state_is_never_modified(game):
    state, _ = _released(game)
    snapshot = state.to_dict()

    advance_week(state, RandomSource(seed=4))

    assert state.to_dict() == snapshot


def test_week_counter_and_ledger_row(game):
    new_state, _ = advance_week(game, RandomSource(seed=4), QUIET)

    assert new_state.current_week == 2
    assert len(new_state.weekly_stats) == 1
    assert new_state.weekly_stats[0].week == 1


def test_songs_released_this_week_land_in_ledger_row(game):
    state, song_id = _released(game)

    new_state, _ = advance_week(state, RandomSource(seed=4), QUIET)

    row = new_state.weekly_stats[-1]
    assert row.song_ids == [song_id]
    assert row.songs_released == 1


def test_energy_resets_every_week(game):
    state = game.clone()
    state.energy = 20

    new_state, _ = advance_week(state, RandomSource(seed=4), QUIET)

    assert new_state.energy == state.max_energy


def test_trend_can_spawn(game):
    engine = EngineSettings(market_trend_chance=1.0, random_event_chance=0.0)

    new_state, notes = advance_week(game, RandomSource(seed=4), engine)

    assert len(new_state.market_trends) == 1
    assert any(n.kind == "trend_started" for n in notes)


def test_random_events_do_not_repeat(game):
    engine = EngineSettings(market_trend_chance=0.0, random_event_chance=1.0, controversy_max_percent=0.0)
    state = game
    rng = RandomSource(seed=8)
    for _ in range(15):
        state, _ = advance_week(state, rng, engine)

    ids = [e.id for e in state.random_events]
    assert len(ids) == len(set(ids))
    assert ids


def test_career_level_up(game):
    state = game.clone()
    state.platforms[0].total_streams = 150_000

    new_state, notes = advance_week(state, RandomSource(seed=4), QUIET)

    assert new_state.stats.career_level == 2
    assert any(n.kind == "career_level_up" for n in notes)


def test_concert_is_performed_in_its_week(game):
    state, song_id = _released(game)
    state.stats.reputation = 20
    state.stats.wealth = 5_000
    state, concert_id = schedule_concert(state, "venue_1", 1, 20, [song_id])
    wealth_before = state.stats.wealth

    new_state, notes = advance_week(state, RandomSource(seed=4), QUIET)

    concert = next(c for c in new_state.concerts if c.id == concert_id)
    assert concert.status is ConcertStatus.PERFORMED
    assert 0 <= concert.attendance <= 200
    assert concert.revenue == concert.attendance * 20
    assert new_state.stats.wealth >= wealth_before + concert.revenue
    assert new_state.stats.stage_power is not None
    assert any(n.kind == "concert_completed" for n in notes)


def test_tour_runs_through_its_venues(game):
    state, _ = _released(game)
    state.stats.reputation = 30
    state.stats.wealth = 10_000
    state, tour_id = create_tour(state, "First Run", ["venue_1", "venue_2"], 1)
    rng = RandomSource(seed=4)

    state, _ = advance_week(state, rng, QUIET)
    tour = next(t for t in state.tours if t.id == tour_id)
    assert tour.status is TourStatus.ACTIVE

    state, _ = advance_week(state, rng, QUIET)
    state, notes = advance_week(state, rng, QUIET)

    tour = next(t for t in state.tours if t.id == tour_id)
    assert tour.status is TourStatus.COMPLETED
    assert any(n.kind == "tour_completed" for n in notes)
    performed = [c for c in state.concerts if c.tour_id == tour_id]
    assert all(c.status is ConcertStatus.PERFORMED for c in performed)


def test_streams_never_drop_and_listeners_keep_their_floor(rich_game):
    state = rich_game
    rng = RandomSource(seed=21)
    for week in range(30):
        if week % 4 == 0:
            state, _ = _released(state, tier=3, rng=rng)
        before = state
        state, _ = advance_week(state, rng)

        assert state.total_streams >= before.total_streams
        for old, new in zip(before.platforms, state.platforms):
            assert new.listeners >= math.floor(old.listeners * 0.85)
        for song in state.songs:
            previous = before.find_song(song.id)
            if previous is not None:
                assert song.streams >= previous.streams


def test_failed_album_update_is_reported_and_skipped(game):
    state = game.clone()
    state.albums.append(Album(id="bad", title="Broken", song_ids=["x"], released=True,
                              release_date=1, streams=float("nan")))

    new_state, notes = advance_week(state, RandomSource(seed=4), QUIET)

    assert any(n.kind == "album_update_failed" and n.data["album_id"] == "bad" for n in notes)
    assert new_state.current_week == 2


def test_repeated_beefs_do_not_change_rapper_popularity(rich_game):
    rng = RandomSource(seed=8)
    state = rich_game
    start = state.find_rapper("rapper_8").popularity

    for _ in range(12):
        state, _ = start_beef(state, "rapper_8", rng)
        state, _ = advance_week(state, rng, QUIET)

    assert state.find_rapper("rapper_8").popularity == start
    assert len(state.beefs) == 12
    assert all(b.rapper_reputation_gain is not None for b in state.beefs)
