"""Beefs: diss-track exchanges between the player and an AI rapper."""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional

from ..models import AIRapper, Beef, BeefStatus, PlayerStats, Relationship
from ..rng import RandomSource

logger = logging.getLogger(__name__)

_WORSEN = {
    Relationship.FRIEND: Relationship.NEUTRAL,
    Relationship.NEUTRAL: Relationship.RIVAL,
    Relationship.RIVAL: Relationship.ENEMY,
    Relationship.ENEMY: Relationship.ENEMY,
}


@dataclass
class BeefResult:
    beef: Beef
    reputation_delta: int
    follower_delta: int


def worsen(relationship: Relationship) -> Relationship:
    return _WORSEN.get(relationship, Relationship.RIVAL)


def diss_quality(stats: PlayerStats, rng: RandomSource) -> int:
    return math.floor(
        stats.creativity * 0.6 + stats.marketing * 0.2 + stats.networking * 0.2 + rng.random() * 20
    )


def rapper_diss_quality(rapper: AIRapper, rng: RandomSource) -> int:
    return math.floor(rapper.popularity * 0.8 + rng.random() * 20)


def score_beef(beef: Beef, rapper_quality: int, week: int) -> BeefResult:
    """Settle a beef from the quality gap between the two diss tracks."""
    difference = beef.player_quality - rapper_quality
    if difference > 10:
        status = BeefStatus.WON
        reputation = math.floor(10 + difference / 5)
        followers = math.floor(1000 + difference * 100)
        rapper_gain = math.floor(-5 - difference / 10)
    elif difference < -10:
        status = BeefStatus.LOST
        reputation = math.floor(-5 + difference / 10)
        followers = -500
        rapper_gain = math.floor(10 - difference / 5)
    else:
        status = BeefStatus.DRAW
        reputation = 5
        followers = 300
        rapper_gain = 5

    settled = replace(
        beef, rapper_quality=rapper_quality, status=status, resolved_week=week, rapper_reputation_gain=rapper_gain,
    )
    return BeefResult(settled, reputation, followers)


def process_beefs(
    beefs: List[Beef],
    rappers: List[AIRapper],
    week: int,
    rng: RandomSource,
) -> List[BeefResult]:
    """AI rappers answer beefs started in an earlier week; each answer settles the beef."""
    by_id = {r.id: r for r in rappers}
    results = []
    for beef in beefs:
        if beef.status is not BeefStatus.ACTIVE or week <= beef.started_week:
            continue
        rapper: Optional[AIRapper] = by_id.get(beef.rapper_id)
        if rapper is None:
            logger.warning("Beef %s references unknown rapper %s", beef.id, beef.rapper_id)
            continue
        result = score_beef(beef, rapper_diss_quality(rapper, rng), week)
        logger.info("Beef with %s ended: %s", rapper.name, result.beef.status.value)
        results.append(result)
    return results
