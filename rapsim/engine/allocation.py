"""
Platform stream allocation and platform settlement.

Weekly growth of a song is split across its release platforms by weight:

    weight = market share x artist/platform bias x weekly jitter
             x market-trend effect x position factor x performance factor

The split is exact: per-platform integers always add up to the song's growth.
Settlement then folds the week's per-platform streams into each platform's
totals, listeners and revenue.
"""

import logging
import math
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..catalog import market_share, payout_rate
from ..models import MarketTrend, PerformanceType, Song, StreamingPlatform
from ..rng import RandomSource, platform_bias, stable_hash
from .trends import effect_for

logger = logging.getLogger(__name__)

VIRAL_LUCKY_FACTOR = 2.5
VIRAL_OTHER_FACTOR = 1.2
FLOP_SUPPORT_FACTOR = 0.5
FLOP_OTHER_FACTOR = 0.2


def split_by_weight(total: int, weights: Mapping[str, float]) -> Dict[str, int]:
    """Split an integer total by weight using largest remainders."""
    if not weights:
        return {}
    total = max(0, int(total))
    weight_sum = sum(max(0.0, w) for w in weights.values())
    if weight_sum <= 0:
        weights = {name: 1.0 for name in weights}
        weight_sum = float(len(weights))

    raw = {name: total * max(0.0, w) / weight_sum for name, w in weights.items()}
    allocation = {name: math.floor(value) for name, value in raw.items()}
    remainder = total - sum(allocation.values())
    by_fraction = sorted(raw, key=lambda name: raw[name] - allocation[name], reverse=True)
    for name in by_fraction[:remainder]:
        allocation[name] += 1
    return allocation


def _ranked_platforms(song_id: str, platforms: List[str]) -> List[str]:
    return sorted(platforms, key=lambda name: stable_hash(song_id, name))


def lucky_platforms(song: Song, platforms: List[str]) -> Set[str]:
    """One or two platforms that carry a viral song, fixed per song."""
    count = 1 + stable_hash(song.id) % 2
    return set(_ranked_platforms(song.id, platforms)[:count])


def _performance_factor(song: Song, platform: str, platforms: List[str]) -> float:
    if song.performance_type is PerformanceType.VIRAL:
        if platform in lucky_platforms(song, platforms):
            return VIRAL_LUCKY_FACTOR
        return VIRAL_OTHER_FACTOR
    if song.performance_type is PerformanceType.FLOP:
        if platform == _ranked_platforms(song.id, platforms)[0]:
            return FLOP_SUPPORT_FACTOR
        return FLOP_OTHER_FACTOR
    return 1.0


def allocate_song_growth(
    song: Song,
    growth: int,
    artist_id: str,
    trends: Iterable[MarketTrend],
    rng: RandomSource,
    platforms: Optional[List[str]] = None,
) -> Dict[str, int]:
    """
    Split one song's weekly growth across its release platforms.

    Args:
        song: The song whose growth is being allocated
        growth: Total weekly growth to split
        artist_id: Seed for the fixed per-platform bias
        trends: Active market trends
        rng: Source of the weekly jitter
        platforms: Override for the song's release platforms

    Returns:
        Dict of platform name to streams; values sum to ``growth``
    """
    names = list(dict.fromkeys(platforms if platforms is not None else song.release_platforms))
    if growth <= 0 or not names:
        return {}

    trends = list(trends)
    weights = {}
    for idx, name in enumerate(names):
        weights[name] = (
            market_share(name)
            * platform_bias(artist_id, name)
            * rng.uniform(0.7, 1.3)
            * effect_for(name, trends)
            * (1 + idx * 0.02)
            * _performance_factor(song, name, names)
        )
    return split_by_weight(growth, weights)


def allocate_by_market(
    total: int,
    platforms: List[str],
    rng: RandomSource,
    jitter: float = 0.4,
) -> Dict[str, int]:
    """Split streams by market share with +/- ``jitter`` noise."""
    names = list(dict.fromkeys(platforms))
    if total <= 0 or not names:
        return {}
    weights = {name: market_share(name) * rng.uniform(1 - jitter, 1 + jitter) for name in names}
    return split_by_weight(total, weights)


def make_distinct(allocations: Mapping[str, int], rng: RandomSource) -> Dict[str, int]:
    """
    Nudge positive allocations until no two platforms share a value.

    Zero allocations are left alone. Each collision adds 1-5 streams to the
    later platform, so totals may rise by a handful of streams.
    """
    result = dict(allocations)
    seen: Set[int] = set()
    for name, value in result.items():
        if value <= 0:
            continue
        while value in seen:
            value += rng.randint(1, 5)
        seen.add(value)
        result[name] = value
    return result


def listener_decay_rate(listeners: int, active_songs: int, total_songs: int) -> float:
    """Fraction of listeners lost this week before the streams-based floor applies."""
    if listeners < 1_000:
        base = 0.03
    elif listeners < 10_000:
        base = 0.04
    elif listeners < 100_000:
        base = 0.05
    elif listeners < 1_000_000:
        base = 0.06
    elif listeners < 10_000_000:
        base = 0.07
    else:
        base = 0.08

    if active_songs <= 0:
        return min(0.2, 0.1 + listeners / 20_000_000 * 0.1)

    active_ratio = active_songs / max(1, total_songs)
    activity_bonus = min(0.9, active_ratio * 0.9 + 0.1)
    return max(0.01, base * (1 - activity_bonus))


def listener_floor_ratio(total_streams: int) -> float:
    """Share of last week's listeners a platform keeps at minimum."""
    if total_streams < 100_000:
        return 0.85
    if total_streams < 10_000_000:
        return 0.90
    return 0.95


def streams_to_listeners(total_streams: int, previous_listeners: int) -> int:
    if total_streams < 100_000:
        return math.ceil(total_streams / 3)
    if total_streams < 10_000_000:
        return math.ceil(total_streams / 5)
    divisor = max(8.0, 15 - previous_listeners / 1_000_000 * 0.5)
    return math.ceil(total_streams / divisor)


def streaming_revenue(streams: int, platform: str) -> int:
    """Whole dollars earned for ``streams`` plays on a platform."""
    return math.floor(max(0, streams) * payout_rate(platform))


def settle_platform(
    platform: StreamingPlatform,
    weekly_streams: int,
    active_songs: int,
    total_songs: int,
) -> StreamingPlatform:
    """Fold one week of streams into a platform's totals, listeners and revenue."""
    weekly_streams = max(0, int(weekly_streams))
    total = platform.total_streams + weekly_streams
    previous = platform.listeners

    decay = math.floor(previous * listener_decay_rate(previous, active_songs, total_songs))
    listeners = max(
        streams_to_listeners(total, previous),
        math.floor(previous * listener_floor_ratio(total)),
        previous - decay,
    )
    return replace(
        platform,
        total_streams=total,
        listeners=listeners,
        revenue=platform.revenue + streaming_revenue(weekly_streams, platform.name),
        last_week_streams=weekly_streams,
    )


def merge_allocations(*allocations: Mapping[str, int]) -> Dict[str, int]:
    merged: Dict[str, int] = {}
    for allocation in allocations:
        for name, value in allocation.items():
            merged[name] = merged.get(name, 0) + value
    return merged
