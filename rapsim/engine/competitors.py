"""
AI competitor simulation.

AI rappers gain from two kinds of songs each week:

- player songs that feature them: a share of the song's weekly growth;
- their own songs that feature the player: a self-contained growth formula,
  part of which spills back onto the player's streaming platforms.

Monthly listeners are smoothed and may move at most 15% per week.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple

from ..catalog import tier_info
from ..models import AIRapper, FeatureRequest, PerformanceType, Relationship, RequestStatus, Song
from ..rng import RandomSource
from .allocation import allocate_by_market, merge_allocations

logger = logging.getLogger(__name__)

LISTENER_SWING = 0.15
LISTENER_DECAY = 0.02
STREAMS_PER_LISTENER = 25

RELATIONSHIP_REQUEST_MULTIPLIER = {
    Relationship.FRIEND: 3.0,
    Relationship.RIVAL: 0.2,
    Relationship.ENEMY: 0.0,
    Relationship.NEUTRAL: 1.0,
}


@dataclass
class CompetitorWeek:
    """Result of one weekly competitor pass."""
    rappers: List[AIRapper]
    songs: List[Song]
    player_spillover: Dict[str, int] = field(default_factory=dict)


def collab_share(tier: int) -> float:
    """Share of a collaboration's growth credited to the other artist."""
    return 0.2 + tier / 20


def owned_song_growth(song: Song, rapper: AIRapper, week: int) -> int:
    weeks = max(0, song.release_age(week))
    decay = max(0.1, 1 - weeks * 0.05)
    growth = song.streams * 0.15 * decay * (rapper.popularity / 50) * (song.tier / 3)
    if song.performance_type is PerformanceType.VIRAL:
        growth *= 2.5
    elif song.performance_type is PerformanceType.FLOP:
        growth *= 0.4
    return min(math.floor(growth), tier_info(song.tier).weekly_cap)


def owned_song_active(song: Song, growth: int, week: int) -> bool:
    weeks = song.release_age(week)
    if song.tier <= 2 and song.performance_type is PerformanceType.FLOP:
        return weeks < 2
    return growth > 10 or weeks < 40


def smooth_listeners(rapper: AIRapper, listener_benefit: int, stream_benefit: int) -> int:
    previous = rapper.monthly_listeners
    target = max(
        previous + listener_benefit - math.floor(previous * LISTENER_DECAY),
        math.ceil((rapper.total_streams + stream_benefit) / STREAMS_PER_LISTENER),
    )
    if previous <= 0:
        return max(0, target)
    low = math.floor(previous * (1 - LISTENER_SWING))
    high = math.ceil(previous * (1 + LISTENER_SWING))
    return min(high, max(low, target))


def update_ai_rappers(
    rappers: List[AIRapper],
    songs: List[Song],
    week: int,
    rng: RandomSource,
) -> CompetitorWeek:
    """
    Run one week for every AI rapper.

    Args:
        rappers: Current AI rappers
        songs: All songs after this week's song growth
        week: The week being simulated
        rng: Source for the spillover jitter

    Returns:
        CompetitorWeek with updated rappers, songs and the player's spillover streams
    """
    songs_by_id = {s.id: s for s in songs}
    spillover: Dict[str, int] = {}
    updated_rappers = []

    for rapper in rappers:
        stream_benefit = 0
        listener_benefit = 0

        for song in songs:
            if song.is_ai_owned or rapper.id not in song.featuring:
                continue
            if not song.is_active or song.last_week_growth <= 0:
                continue
            share = math.floor(song.last_week_growth * collab_share(song.tier))
            stream_benefit += share
            listener_benefit += math.floor(share / 10)

        for song in songs:
            if song.ai_rapper_owner != rapper.id or not song.released or not song.is_active:
                continue
            growth = owned_song_growth(song, rapper, week)
            stream_benefit += growth
            listener_benefit += math.floor(growth / 8)
            songs_by_id[song.id] = replace(song, is_active=owned_song_active(song, growth, week))

            if song.ai_rapper_features_player and growth > 0:
                player_share = math.floor(growth * collab_share(song.tier))
                spillover = merge_allocations(
                    spillover,
                    allocate_by_market(player_share, song.release_platforms, rng),
                )

        listeners = smooth_listeners(rapper, listener_benefit, stream_benefit)
        if stream_benefit:
            logger.debug("AI rapper %s gained %s streams", rapper.id, stream_benefit)
        updated_rappers.append(
            replace(
                rapper,
                total_streams=rapper.total_streams + stream_benefit,
                monthly_listeners=listeners,
            )
        )

    return CompetitorWeek(
        rappers=updated_rappers,
        songs=[songs_by_id[s.id] for s in songs],
        player_spillover=spillover,
    )


def feature_request_chance(
    rapper: AIRapper,
    reputation: float,
    player_listeners: int,
    career_level: int,
    cap: float = 0.2,
) -> float:
    """Weekly probability that ``rapper`` asks the player for a feature."""
    popularity = rapper.popularity
    if popularity >= 95:
        base = 0.001
    elif popularity >= 90:
        base = 0.002
    elif popularity >= 80:
        base = 0.005
    elif popularity >= 70:
        base = 0.01
    elif popularity >= 60:
        base = 0.02
    else:
        base = 0.03

    chance = (
        base
        * (reputation / 25)
        * RELATIONSHIP_REQUEST_MULTIPLIER.get(rapper.relationship, 1.0)
        * max(0.2, min(5.0, player_listeners / max(1, rapper.monthly_listeners)))
        * min(5.0, career_level * 0.5)
    )
    return min(cap, chance)


def request_tier(rapper: AIRapper, reputation: float, player_listeners: int, rng: RandomSource) -> int:
    """Tier the AI rapper wants for the collaboration."""
    if rapper.popularity >= 90:
        if reputation >= 80 and player_listeners > 5_000_000 and rng.random() < 0.1:
            return 5
        return 4
    if rapper.popularity >= 70:
        if reputation >= 60 and player_listeners > 1_000_000 and rng.random() < 0.3:
            return 4
        return 3
    return 3


def roll_feature_requests(
    rappers: List[AIRapper],
    requests: List[FeatureRequest],
    reputation: float,
    player_listeners: int,
    career_level: int,
    week: int,
    rng: RandomSource,
    cap: float = 0.2,
    expiry_weeks: int = 4,
) -> List[FeatureRequest]:
    """New requests this week; rappers with a pending request are skipped."""
    pending = {r.rapper_id for r in requests if r.status is RequestStatus.PENDING}
    new_requests = []
    for rapper in rappers:
        if rapper.id in pending:
            continue
        chance = feature_request_chance(rapper, reputation, player_listeners, career_level, cap)
        if chance <= 0 or rng.random() >= chance:
            continue
        new_requests.append(
            FeatureRequest(
                id=str(uuid.uuid4()),
                rapper_id=rapper.id,
                tier=request_tier(rapper, reputation, player_listeners, rng),
                week_requested=week,
                expires_week=week + expiry_weeks,
            )
        )
        logger.info("AI rapper %s sent a feature request in week %s", rapper.id, week)
    return new_requests


def expire_requests(requests: List[FeatureRequest], week: int) -> Tuple[List[FeatureRequest], int]:
    """Mark pending requests past their expiry week; returns (requests, expired count)."""
    expired = 0
    result = []
    for request in requests:
        if request.status is RequestStatus.PENDING and week > request.expires_week:
            request = replace(request, status=RequestStatus.EXPIRED)
            expired += 1
        result.append(request)
    return result, expired
