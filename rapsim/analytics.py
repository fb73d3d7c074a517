"""
Career analytics as pandas frames.

These read a ``GameState`` and never modify it.
"""

import pandas as pd
import numpy as np

from .catalog import career_title, payout_rate
from .models import GameState

LEDGER_COLUMNS = [
    "week",
    "total_streams",
    "total_followers",
    "total_listeners",
    "wealth",
    "reputation",
    "songs_released",
    "revenue",
]


def weekly_stats_frame(state: GameState) -> pd.DataFrame:
    """
    The WeeklyStats ledger with week-over-week changes.

    Returns:
        DataFrame indexed by week with the ledger columns plus
        'weekly_streams', 'follower_change' and 'listener_change'
    """
    rows = [
        {column: getattr(row, column) for column in LEDGER_COLUMNS}
        for row in state.weekly_stats
    ]
    df = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    if df.empty:
        for column in ("weekly_streams", "follower_change", "listener_change"):
            df[column] = pd.Series(dtype="int64")
        return df.set_index("week")

    df = df.sort_values("week").set_index("week")
    df["weekly_streams"] = df["total_streams"].diff().fillna(df["total_streams"]).astype("int64")
    df["follower_change"] = df["total_followers"].diff().fillna(0).astype("int64")
    df["listener_change"] = df["total_listeners"].diff().fillna(0).astype("int64")
    return df


def platform_breakdown(state: GameState) -> pd.DataFrame:
    """Per-platform totals with share of streams and revenue per listener."""
    df = pd.DataFrame(
        [
            {
                "platform": p.name,
                "total_streams": p.total_streams,
                "listeners": p.listeners,
                "revenue": p.revenue,
                "last_week_streams": p.last_week_streams,
                "payout_rate": payout_rate(p.name),
            }
            for p in state.platforms
        ],
        columns=["platform", "total_streams", "listeners", "revenue", "last_week_streams", "payout_rate"],
    )
    total = df["total_streams"].sum()
    df["stream_share"] = df["total_streams"] / total if total else 0.0
    df["revenue_per_listener"] = (df["revenue"] / df["listeners"].replace(0, np.nan)).fillna(0.0)
    return df.sort_values("total_streams", ascending=False).reset_index(drop=True)


def top_songs(state: GameState, limit: int = 10) -> pd.DataFrame:
    """The player's released songs ranked by lifetime streams."""
    df = pd.DataFrame(
        [
            {
                "song_id": s.id,
                "title": s.title,
                "tier": s.tier,
                "streams": s.streams,
                "last_week_growth": s.last_week_growth,
                "performance": s.performance_type.value,
                "is_active": s.is_active,
                "release_week": s.release_date,
            }
            for s in state.player_songs
            if s.released
        ],
        columns=["song_id", "title", "tier", "streams", "last_week_growth", "performance",
                 "is_active", "release_week"],
    )
    return df.sort_values("streams", ascending=False).head(limit).reset_index(drop=True)


def career_summary(state: GameState) -> pd.Series:
    stats = state.stats
    return pd.Series({
        "artist": state.artist_name,
        "week": state.current_week,
        "career_level": stats.career_level,
        "title": career_title(stats.career_level),
        "total_streams": state.total_streams,
        "total_listeners": state.total_listeners,
        "total_followers": state.total_followers,
        "wealth": stats.wealth,
        "reputation": stats.reputation,
        "songs_released": sum(1 for s in state.player_songs if s.released),
    })
