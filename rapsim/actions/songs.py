"""Song lifecycle: writing, releasing and promoting tracks."""

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..catalog import FREE_TIER_WEIGHTS, generate_song_title, tier_info
from ..exceptions import InvalidActionError
from ..models import GameState, PerformanceType, Song
from ..notifications import Notification
from ..rng import RandomSource
from .access import player_has_access

logger = logging.getLogger(__name__)

FEATURE_LISTENER_BOOST = {0: 0.0, 1: 0.15, 2: 0.25}
MAX_FEATURE_LISTENER_BOOST = 0.40

PROMOTION_TYPES = ("social", "radio", "tour", "influencer", "all")

_PROMOTION_MULTIPLIERS = {"social": 1.2, "radio": 1.4, "tour": 1.6, "influencer": 1.5, "all": 2.0}
_PROMOTION_FOLLOWERS = {"social": 500, "radio": 1000, "tour": 2000, "influencer": 3000, "all": 8000}
_PROMOTION_LISTENERS = {"social": 2000, "radio": 5000, "tour": 8000, "influencer": 10000, "all": 30000}
_PROMOTION_FOLLOWER_SHARE = {"social": 1.0, "influencer": 0.8}

# How well each promotion type reaches each platform
_PLATFORM_REACH = {
    "social": {"Spotify": 0.4, "SoundCloud": 0.6, "iTunes": 0.3, "YouTube Music": 0.5,
               "YouTube": 0.7, "YouTube Vevo": 0.5},
    "radio": {"Spotify": 0.5, "SoundCloud": 0.2, "iTunes": 0.7, "YouTube Music": 0.4,
              "YouTube": 0.3, "YouTube Vevo": 0.4},
    "tour": {"Spotify": 0.6, "SoundCloud": 0.5, "iTunes": 0.5, "YouTube Music": 0.5,
             "YouTube": 0.6, "YouTube Vevo": 0.7},
    "influencer": {"Spotify": 0.5, "SoundCloud": 0.8, "iTunes": 0.4, "YouTube Music": 0.6,
                   "YouTube": 0.9, "YouTube Vevo": 0.8},
    "all": {"Spotify": 0.7, "SoundCloud": 0.7, "iTunes": 0.7, "YouTube Music": 0.7,
            "YouTube": 0.7, "YouTube Vevo": 0.7},
}
_DEFAULT_REACH = 0.3


@dataclass
class PromotionImpact:
    stream_multiplier: float
    follower_gain: int
    listeners: int
    platform_reach: Dict[str, float]


def _roll_free_tier(rng: RandomSource) -> int:
    roll = rng.random()
    cumulative = 0.0
    for tier, weight in enumerate(FREE_TIER_WEIGHTS, start=1):
        cumulative += weight
        if roll < cumulative:
            return tier
    return len(FREE_TIER_WEIGHTS)


def create_song(
    state: GameState,
    title: str,
    tier: int,
    featuring: Sequence[str] = (),
    rng: Optional[RandomSource] = None,
) -> Tuple[GameState, Song]:
    """
    Write a new unreleased song.

    Args:
        state: Current game state
        title: Song title; a title is generated when blank
        tier: 1-5 for a paid song, 0 for a free song with a random tier
        featuring: AI rapper ids credited on the song
        rng: Random source for free tiers and generated titles

    Returns:
        (new state, created song)

    Raises:
        InvalidActionError: locked tier or insufficient funds
    """
    rng = rng or RandomSource()
    free = tier == 0
    if not free and tier not in range(1, 6):
        raise InvalidActionError(f"Tier must be between 1 and 5, got {tier}")

    if free:
        tier = _roll_free_tier(rng)
        if tier > 3 and not player_has_access(state, "tier4_songs"):
            tier = 3
        cost = 0
    else:
        if tier == 5 and not player_has_access(state, "tier5_songs"):
            raise InvalidActionError("Tier 5 songs require a Premium or Platinum subscription.")
        if tier == 4 and not player_has_access(state, "tier4_songs"):
            raise InvalidActionError("Tier 4 songs require a subscription.")
        cost = tier_info(tier).cost
        if state.stats.wealth < cost:
            raise InvalidActionError(f"You need ${cost:,} to create a tier {tier} song.")

    new_state = state.clone()
    song = Song(
        id=str(uuid.uuid4()),
        title=title.strip() or generate_song_title(rng),
        tier=tier,
        featuring=[r for r in featuring if new_state.find_rapper(r) is not None],
    )
    new_state.songs.append(song)
    stats = new_state.stats
    stats.wealth -= cost
    stats.creativity = min(100.0, stats.creativity + (1 if free else 2))
    logger.info("Created tier %s song '%s'", tier, song.title)
    return new_state, song


def release_song(
    state: GameState,
    song_id: str,
    title: Optional[str] = None,
    icon: str = "",
    platforms: Sequence[str] = (),
    rng: Optional[RandomSource] = None,
) -> Tuple[GameState, List[Notification]]:
    """Release a written song on the chosen platforms."""
    rng = rng or RandomSource()
    song = state.find_song(song_id)
    if song is None or song.released:
        logger.warning("Cannot release song %s", song_id)
        return state, []

    known = {p.name for p in state.platforms if p.is_unlocked}
    chosen = [name for name in dict.fromkeys(platforms) if name in known]
    if not chosen:
        raise InvalidActionError("Choose at least one streaming platform to release on.")

    week = state.current_week
    roll = rng.random()
    if roll < 0.02 + song.tier / 100:
        performance = PerformanceType.VIRAL
    elif roll > 1 - (0.05 - song.tier / 100):
        performance = PerformanceType.FLOP
    else:
        performance = PerformanceType.NORMAL

    new_state = state.clone()
    song = new_state.find_song(song_id)
    song.title = (title or "").strip() or song.title
    song.icon = icon or song.icon
    song.released = True
    song.release_date = week
    song.streams = 0
    song.is_active = True
    song.release_platforms = chosen
    song.performance_type = performance
    song.performance_status_week = week

    feature_boost = FEATURE_LISTENER_BOOST.get(len(song.featuring), MAX_FEATURE_LISTENER_BOOST)
    boost = 1 + song.tier / 5 * 0.5 + feature_boost
    for platform in new_state.platforms:
        if platform.name in chosen:
            platform.listeners = math.floor(platform.listeners * boost)

    new_state.stats.reputation = min(100.0, new_state.stats.reputation + song.tier / 2)

    notes = [Notification("song_released", f'"{song.title}" is out now!', week, {"song_id": song.id})]
    if performance is PerformanceType.VIRAL:
        notes.append(Notification("song_viral", f'"{song.title}" went viral on release!', week,
                                  {"song_id": song.id}))
    elif performance is PerformanceType.FLOP:
        notes.append(Notification("song_flop", f'"{song.title}" flopped on release.', week,
                                  {"song_id": song.id}))
    return new_state, notes


def promotion_cost(promotion_type: str, intensity: float, tier: int) -> int:
    base = {"social": 500, "radio": 1500, "tour": 3000, "influencer": 2000, "all": 8000}
    return round(base[promotion_type] * (intensity / 50) * (tier / 2))


def promotion_impact(promotion_type: str, intensity: float, tier: int, marketing: float) -> PromotionImpact:
    intensity_factor = intensity / 50
    marketing_factor = 1 + marketing / 100
    tier_factor = tier / 3 * 1.2
    reach_table = _PLATFORM_REACH[promotion_type]
    return PromotionImpact(
        stream_multiplier=_PROMOTION_MULTIPLIERS[promotion_type] * intensity_factor * marketing_factor,
        follower_gain=round(_PROMOTION_FOLLOWERS[promotion_type] * intensity_factor * marketing_factor * tier_factor),
        listeners=round(_PROMOTION_LISTENERS[promotion_type] * intensity_factor * marketing_factor * tier_factor),
        platform_reach={name: r * intensity_factor * marketing_factor for name, r in reach_table.items()},
    )


def promote_song(
    state: GameState,
    song_id: str,
    budget: float,
    promotion_type: str = "social",
) -> Tuple[GameState, List[Notification]]:
    """Spend ``budget`` promoting a released, active song."""
    if promotion_type not in PROMOTION_TYPES:
        raise InvalidActionError(f"Unknown promotion type: {promotion_type}")
    song = state.find_song(song_id)
    if song is None:
        logger.warning("Cannot promote unknown song %s", song_id)
        return state, []
    if not song.released or not song.is_active:
        raise InvalidActionError("You can only promote released, active songs.")
    if budget <= 0:
        raise InvalidActionError("Promotion budget must be positive.")
    if state.stats.wealth < budget:
        raise InvalidActionError("You don't have enough money for this promotion.")

    impact = promotion_impact(promotion_type, budget / 1000, song.tier, state.stats.marketing)

    new_state = state.clone()
    song = new_state.find_song(song_id)
    song.hype += math.ceil(impact.stream_multiplier * 2)
    for platform in new_state.platforms:
        reach = impact.platform_reach.get(platform.name, _DEFAULT_REACH)
        platform.listeners += math.floor(impact.listeners * reach / 5)
    follower_share = _PROMOTION_FOLLOWER_SHARE.get(promotion_type, 0.3)
    for social in new_state.social_platforms:
        social.followers += math.floor(impact.follower_gain * follower_share)

    stats = new_state.stats
    stats.wealth -= budget
    stats.reputation = min(100.0, stats.reputation + budget / 5000)
    stats.marketing = min(100.0, stats.marketing + budget / 10000)

    week = new_state.current_week
    return new_state, [
        Notification("song_promoted", f'Promotion campaign started for "{song.title}".', week,
                     {"song_id": song.id, "hype": song.hype})
    ]
