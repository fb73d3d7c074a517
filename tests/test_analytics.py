"""Tests for the pandas analytics views."""

import pandas as pd
import pytest

from rapsim.analytics import career_summary, platform_breakdown, top_songs, weekly_stats_frame
from rapsim.models import WeeklyStats


def _ledger(state):
    state = state.clone()
    state.weekly_stats = [
        WeeklyStats(week=1, total_streams=1_000, total_followers=100, total_listeners=300,
                    wealth=1_000, reputation=5, songs_released=1, revenue=12),
        WeeklyStats(week=2, total_streams=3_500, total_followers=110, total_listeners=250,
                    wealth=1_030, reputation=5, songs_released=1, revenue=30),
    ]
    return state


def test_weekly_frame_adds_changes(game):
    df = weekly_stats_frame(_ledger(game))

    assert list(df.index) == [1, 2]
    assert list(df["weekly_streams"]) == [1_000, 2_500]
    assert list(df["follower_change"]) == [0, 10]
    assert list(df["listener_change"]) == [0, -50]


def test_weekly_frame_for_new_career_is_empty(game):
    df = weekly_stats_frame(game)

    assert df.empty
    assert "weekly_streams" in df.columns
    assert df.index.name == "week"


def test_platform_breakdown(game):
    state = game.clone()
    spotify = state.find_platform("Spotify")
    spotify.total_streams = 3_000
    spotify.listeners = 1_000
    spotify.revenue = 36.0
    state.find_platform("iTunes").total_streams = 1_000

    df = platform_breakdown(state)

    assert df.loc[0, "platform"] == "Spotify"
    assert df["stream_share"].sum() == pytest.approx(1.0)
    assert df.loc[0, "stream_share"] == pytest.approx(0.75)
    assert df.loc[0, "revenue_per_listener"] == pytest.approx(0.036)
    assert df.loc[df["platform"] == "iTunes", "revenue_per_listener"].iloc[0] == 0.0


def test_top_songs_ranks_released_songs(game, make_song):
    state = game.clone()
    state.songs = [
        make_song(streams=10, id="a"),
        make_song(streams=500, id="b"),
        make_song(streams=50, id="c", released=False),
    ]

    df = top_songs(state, limit=5)

    assert list(df["song_id"]) == ["b", "a"]


def test_career_summary(game):
    summary = career_summary(_ledger(game))

    assert isinstance(summary, pd.Series)
    assert summary["artist"] == "Test Artist"
    assert summary["title"] == "Unknown"
    assert summary["songs_released"] == 0
