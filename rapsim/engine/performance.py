"""
Song performance model.

Each week a released, active song is first classified (normal, viral, flop,
comeback) and then grown through one of three phases:

1. DISCOVERY (release age 0-2): base + slope*age + a share of current streams.
2. VIRAL POTENTIAL (below 70% of the tier ceiling and within 60% of the
   tier's popularity weeks): proportional to current streams, +/-20% jitter.
3. SATURATION: proportional to streams but slowed by how close the song is
   to its ceiling, never below the tier floor.

The phase value is scaled by stat, age, featuring and performance multipliers,
then capped by the tier's weekly cap and lifetime ceiling.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

from ..catalog import FLOP_LOW_TIER_EXTENSION, tier_info
from ..models import PerformanceType, PlayerStats, Song
from ..rng import RandomSource

logger = logging.getLogger(__name__)

VIRAL_DURATION_WEEKS = 2
FLOP_CHANCE_BASE = 0.05
COMEBACK_CHANCE_BASE = 0.01
VIRAL_CHANCE_BASE = 0.02
VIRAL_WINDOW_WEEKS = 4

# Active-window multipliers on tier*8 weeks
_ACTIVE_WINDOW_MULTIPLIERS = {
    PerformanceType.VIRAL: 3.0,
    PerformanceType.COMEBACK: 2.5,
    PerformanceType.FLOP: 0.5,
    PerformanceType.NORMAL: 1.0,
}


def popularity_window(song: Song) -> Optional[float]:
    """Weeks after release during which the song can still grow; None = forever."""
    info = tier_info(song.tier)
    if info.popularity_weeks is None:
        return None
    extension = info.window_extension
    if song.tier <= 2 and song.performance_type is PerformanceType.FLOP:
        extension = min(extension, FLOP_LOW_TIER_EXTENSION)
    return info.popularity_weeks * extension


def classify_performance(
    song: Song,
    week: int,
    stats: PlayerStats,
    rng: RandomSource,
    viral_duration: int = VIRAL_DURATION_WEEKS,
) -> PerformanceType:
    """Decide this week's performance type for a song."""
    if not song.released or song.release_date <= 0:
        return PerformanceType.NORMAL

    age = song.release_age(week)
    current = song.performance_type

    if current in (PerformanceType.VIRAL, PerformanceType.COMEBACK):
        if week - song.performance_status_week > viral_duration:
            return PerformanceType.NORMAL
        return current

    if age == 1 or current is PerformanceType.NORMAL:
        flop_chance = max(0.01, FLOP_CHANCE_BASE - (stats.reputation + stats.creativity) / 500)
        if rng.random() < flop_chance:
            return PerformanceType.FLOP

    if current is PerformanceType.FLOP:
        comeback_chance = COMEBACK_CHANCE_BASE + stats.marketing / 400
        if rng.random() < comeback_chance:
            return PerformanceType.COMEBACK
        return PerformanceType.FLOP

    if age <= VIRAL_WINDOW_WEEKS:
        viral_chance = (
            VIRAL_CHANCE_BASE
            + (song.tier - 1) * 0.01
            + stats.reputation / 500
            + stats.marketing / 400
            + len(song.featuring) * 0.02
        )
        if rng.random() < viral_chance:
            return PerformanceType.VIRAL

    return current or PerformanceType.NORMAL


def _phase_growth(song: Song, age: int, rng: RandomSource) -> float:
    info = tier_info(song.tier)
    streams = song.streams

    if age <= 2:
        base, slope, stream_rate = info.discovery
        return base + age * slope + streams * stream_rate

    in_viral_window = info.popularity_weeks is None or age <= info.popularity_weeks * 0.6
    if streams < info.max_streams * 0.7 and in_viral_window:
        return max(info.viral_floor, streams * info.viral_rate) * rng.uniform(0.8, 1.2)

    slowdown = max(0.1, 1 - min(1.0, streams / info.max_streams))
    return max(info.saturation_floor, streams * info.saturation_rate * slowdown)


def _performance_multiplier(song: Song, rng: RandomSource) -> float:
    if song.performance_type is PerformanceType.VIRAL:
        return rng.uniform(3.0, 8.0)
    if song.performance_type is PerformanceType.FLOP:
        return 0.1 if song.tier <= 2 else 0.2
    if song.performance_type is PerformanceType.COMEBACK:
        return rng.uniform(2.0, 4.0)
    return 1.0


def growth_for(song: Song, week: int, stats: PlayerStats, rng: RandomSource) -> int:
    """
    Streams a song gains this week.

    Args:
        song: Song as classified for this week
        week: The week being simulated
        stats: Player stats driving the multipliers
        rng: Random source for phase jitter and performance multipliers

    Returns:
        Non-negative integer growth, within the tier's weekly cap and ceiling
    """
    if not song.released or song.release_date <= 0 or not song.is_active:
        return 0

    age = song.release_age(week)
    window = popularity_window(song)
    if window is not None and age > window:
        return 0

    info = tier_info(song.tier)
    raw = _phase_growth(song, age, rng)

    marketing = 0.7 + stats.marketing / 100 * 1.5
    loyalty = 0.8 + stats.fan_loyalty / 100 * 0.9
    if info.popularity_weeks is None:
        age_decay = 1.0
    else:
        decay_rate = 0.4 if song.performance_type is PerformanceType.COMEBACK else 0.8
        age_decay = max(0.15, 1 - age / info.popularity_weeks * decay_rate)
    featuring = 1 + 0.15 * len(song.featuring)

    growth = math.floor(
        raw * marketing * loyalty * age_decay * featuring * _performance_multiplier(song, rng)
    )
    growth = min(growth, info.weekly_cap)

    headroom = info.max_streams - song.streams
    if headroom <= growth:
        return max(0, headroom)
    return max(0, growth)


def active_window(song: Song) -> int:
    """Guaranteed active weeks after release, stretched by status and hype."""
    multiplier = _ACTIVE_WINDOW_MULTIPLIERS.get(song.performance_type, 1.0)
    return math.ceil(song.tier * 8 * multiplier) + int(song.hype * 2)


def still_active(song: Song, week: int, growth: int) -> bool:
    """A song stays active while it grows or its guaranteed window is open."""
    if not song.released:
        return False
    window = popularity_window(song)
    if window is not None and song.release_age(week) > window:
        return False
    return growth > 0 or song.release_age(week) < active_window(song)


def advance_song(
    song: Song,
    week: int,
    stats: PlayerStats,
    rng: RandomSource,
    viral_duration: int = VIRAL_DURATION_WEEKS,
) -> Song:
    """Classify, grow and re-evaluate activity for one song."""
    if not song.released:
        return song

    if not song.is_active:
        # Hype can reopen a song whose guaranteed window has not closed yet
        if song.hype > 0 and song.release_age(week) < active_window(song):
            song = replace(song, is_active=True)
        else:
            return replace(song, last_week_growth=0)

    performance = classify_performance(song, week, stats, rng, viral_duration)
    status_week = song.performance_status_week
    if performance is not song.performance_type:
        status_week = week
    song = replace(song, performance_type=performance, performance_status_week=status_week)

    growth = growth_for(song, week, stats, rng)
    logger.debug("Song %s week %s: %s growth=%s", song.id, week, performance.value, growth)
    return replace(
        song,
        streams=song.streams + growth,
        last_week_growth=growth,
        is_active=still_active(song, week, growth),
    )
