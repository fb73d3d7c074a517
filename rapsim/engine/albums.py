"""
Album stream growth.

Albums grow on their own, slower curve:

    rate = 0.005 + recency x 0.01 x quality x song_count   (floored at 1% early, 0.2% later)
    cap  = 5,000,000 x quality x song_count

Growth is throttled as the album approaches its cap and drops to a trickle of
at most 500 streams once it reaches 95% of it.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from ..catalog import market_share
from ..models import Album, as_number
from ..rng import RandomSource
from .allocation import streaming_revenue

logger = logging.getLogger(__name__)

BASE_STREAM_CAP = 5_000_000
TRICKLE_GROWTH = 500


@dataclass
class AlbumUpdate:
    """Outcome of one album's weekly update; ``error`` is set when it failed."""
    album: Album
    platform_growth: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def quality_factor(album: Album) -> float:
    critical = as_number(album.critical_rating, 5)
    fan = as_number(album.fan_rating, 5)
    return (critical + fan) / 20


def song_count_factor(album: Album) -> float:
    return min(1.5, len(album.song_ids) / 7)


def stream_cap(album: Album) -> float:
    return BASE_STREAM_CAP * quality_factor(album) * song_count_factor(album)


def album_growth(album: Album, week: int, rng: RandomSource) -> int:
    """Streams an album gains this week."""
    base = as_number(album.streams, None)
    if base is None or base < 0:
        raise ValueError(f"album {album.id} has malformed stream data: {album.streams!r}")

    weeks = max(0, week - album.release_date)
    recency = max(0.2, 1 - weeks * 0.03)
    quality = quality_factor(album)
    songs = song_count_factor(album)

    rate = 0.005 + recency * 0.01 * quality * songs
    rate = max(rate, 0.01 if weeks <= 8 else 0.002)

    cap = stream_cap(album)
    if base >= cap * 0.95:
        return min(TRICKLE_GROWTH, math.floor(base * 0.0005))

    ratio = base / cap
    cap_factor = max(0.05, 1 - ratio) if ratio >= 0.8 else max(0.2, 1 - ratio)
    min_growth = max(500 if weeks <= 4 else 100, math.floor(base * 0.002))
    calculated = math.floor(base * rate * cap_factor * rng.uniform(0.8, 1.2))
    return max(min_growth, calculated)


def distribute_album_growth(growth: int, platforms: List[str], rng: RandomSource) -> Dict[str, int]:
    """Per-platform album streams by normalised market share with +/-10% noise."""
    if growth <= 0 or not platforms:
        return {}
    total_share = sum(market_share(p) for p in platforms)
    distribution = {}
    for name in platforms:
        share = market_share(name) / total_share
        distribution[name] = max(
            math.floor(growth * share * 0.5),
            math.floor(growth * share * rng.uniform(0.9, 1.1)),
        )
    return distribution


def update_album(
    album: Album,
    week: int,
    platforms: List[str],
    rng: RandomSource,
    known_platforms: Optional[List[str]] = None,
) -> AlbumUpdate:
    """
    Grow one released album; failures leave the album untouched.

    Args:
        album: Album to update
        week: The week being simulated
        platforms: Names of the player's unlocked streaming platforms
        rng: Random source
        known_platforms: Every platform name; each gets a platform_streams entry.
            Defaults to ``platforms``

    Returns:
        AlbumUpdate with the new album and its per-platform streams
    """
    if not album.released:
        return AlbumUpdate(album)
    try:
        growth = album_growth(album, week, rng)
        distribution = distribute_album_growth(growth, platforms, rng)

        platform_streams = {name: 0 for name in (known_platforms or platforms)}
        for name, value in album.platform_streams.items():
            platform_streams[name] = int(as_number(value, 0))
        for name, value in distribution.items():
            platform_streams[name] += value

        revenue = sum(streaming_revenue(v, name) for name, v in distribution.items())
        updated = replace(
            album,
            streams=int(album.streams) + growth,
            sales=album.sales + math.floor(growth * 0.01),
            revenue=album.revenue + revenue,
            platform_streams=platform_streams,
        )
        return AlbumUpdate(updated, distribution)
    except (TypeError, ValueError, ZeroDivisionError, AttributeError) as e:
        logger.error("Failed to update album %s: %s", getattr(album, "id", "?"), e)
        return AlbumUpdate(album, error=str(e))
