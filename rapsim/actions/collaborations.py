"""Features, collaboration requests and beefs with AI rappers."""

import logging
import math
import uuid
from typing import List, Optional, Tuple

from ..catalog import FEATURE_REQUEST_CHANCES, generate_song_title
from ..config import EngineSettings, settings
from ..engine.beefs import diss_quality, worsen
from ..exceptions import InvalidActionError
from ..models import (
    AIRapper,
    Beef,
    BeefStatus,
    GameState,
    PerformanceType,
    Relationship,
    RequestStatus,
    Song,
)
from ..notifications import Notification
from ..rng import RandomSource

logger = logging.getLogger(__name__)

ACCEPTANCE_RELATIONSHIP_MODIFIER = {
    Relationship.FRIEND: 1.5,
    Relationship.NEUTRAL: 1.0,
    Relationship.RIVAL: 0.5,
    Relationship.ENEMY: 0.1,
}

FEATURED_SONG_PLATFORMS = ["Spotify", "SoundCloud", "iTunes", "YouTube Music"]
FEATURED_SONG_VIRAL_CHANCE = 0.1

_FEATURE_TITLE_PREFIXES = ["Hustle", "Money", "Streets", "Dreams", "Flow", "Vibe", "Life", "Boss", "Grind", "Fame"]
_FEATURE_TITLE_SUFFIXES = ["Season", "Chronicles", "Anthem", "Life", "Time", "Movement", "Gang", "Ways", "Talk",
                           "Energy"]


def fame_level(reputation: float) -> str:
    if reputation < 30:
        return "low"
    if reputation < 70:
        return "medium"
    return "high"


def feature_acceptance_chance(
    rapper: AIRapper,
    reputation: float,
    player_listeners: int,
    tier: int,
) -> float:
    """Chance that ``rapper`` agrees to appear on a player song of ``tier``."""
    base = FEATURE_REQUEST_CHANCES.get(tier, {}).get(fame_level(reputation), 0.0)
    relationship = ACCEPTANCE_RELATIONSHIP_MODIFIER.get(rapper.relationship, 1.0)
    ratio = min(1.0, player_listeners / max(1, rapper.monthly_listeners))
    return min(1.0, base * relationship * (0.5 + ratio * 0.5))


def improve(relationship: Relationship) -> Relationship:
    """A collaboration makes friends, except with enemies who only calm down."""
    if relationship is Relationship.ENEMY:
        return Relationship.NEUTRAL
    return Relationship.FRIEND


def request_feature(
    state: GameState,
    rapper_id: str,
    tier: int,
    rng: Optional[RandomSource] = None,
    engine: Optional[EngineSettings] = None,
) -> Tuple[GameState, List[Notification]]:
    """
    Ask an AI rapper to feature on a new song.

    An accepted request charges the rapper's feature cost and adds an
    unreleased "(feat. ...)" song; any answer builds networking.
    """
    rng = rng or RandomSource()
    engine = engine or settings.engine
    rapper = state.find_rapper(rapper_id)
    if rapper is None:
        logger.warning("Feature requested from unknown rapper %s", rapper_id)
        return state, []
    if state.stats.wealth < rapper.feature_cost:
        raise InvalidActionError(f"{rapper.name} charges ${rapper.feature_cost:,} for a feature.")

    listeners = min(engine.monthly_listener_cap, state.total_listeners)
    chance = feature_acceptance_chance(rapper, state.stats.reputation, listeners, tier)
    accepted = rng.random() < chance
    week = state.current_week

    new_state = state.clone()
    stats = new_state.stats
    if not accepted:
        stats.networking = min(100.0, stats.networking + 1)
        logger.info("%s declined a tier %s feature (chance %.3f)", rapper.name, tier, chance)
        return new_state, [
            Notification("feature_declined", f"{rapper.name} declined your feature request.", week,
                         {"rapper_id": rapper.id})
        ]

    song = Song(
        id=str(uuid.uuid4()),
        title=f"{generate_song_title(rng)} (feat. {rapper.name})",
        tier=tier,
        featuring=[rapper.id],
    )
    new_state.songs.append(song)
    target = new_state.find_rapper(rapper_id)
    target.relationship = improve(target.relationship)
    target.collab_count += 1
    target.last_collab_week = week
    stats.wealth -= rapper.feature_cost
    stats.networking = min(100.0, stats.networking + 5)
    return new_state, [
        Notification("feature_accepted", f"{rapper.name} accepted your feature request!", week,
                      {"rapper_id": rapper.id, "song_id": song.id})
    ]


def respond_to_feature_request(
    state: GameState,
    rapper_id: str,
    accept: bool,
    rng: Optional[RandomSource] = None,
) -> Tuple[GameState, List[Notification]]:
    """Accept or decline the pending request from ``rapper_id``."""
    rng = rng or RandomSource()
    request = next(
        (r for r in state.feature_requests
         if r.rapper_id == rapper_id and r.status is RequestStatus.PENDING),
        None,
    )
    rapper = state.find_rapper(rapper_id)
    if request is None or rapper is None:
        logger.warning("No pending feature request from %s", rapper_id)
        return state, []

    week = state.current_week
    new_state = state.clone()
    for pending in new_state.feature_requests:
        if pending.id == request.id:
            pending.status = RequestStatus.ACCEPTED if accept else RequestStatus.REJECTED
    target = new_state.find_rapper(rapper_id)

    if not accept:
        if target.relationship is Relationship.FRIEND:
            target.relationship = Relationship.NEUTRAL
        return new_state, [
            Notification("feature_request_declined", f"You declined the feature request from {rapper.name}.",
                         week, {"rapper_id": rapper.id})
        ]

    payment = math.floor(request.tier * 1000 * rapper.popularity / 50)
    title = (f"{rng.choice(_FEATURE_TITLE_PREFIXES)} {rng.choice(_FEATURE_TITLE_SUFFIXES)} "
             f"(feat. {state.artist_name or 'You'})")
    performance = PerformanceType.VIRAL if rng.random() < FEATURED_SONG_VIRAL_CHANCE else PerformanceType.NORMAL
    song = Song(
        id=f"ai-{rapper_id}-ft-player-{uuid.uuid4().hex[:8]}",
        title=title,
        tier=request.tier,
        released=True,
        release_date=week,
        is_active=True,
        release_platforms=list(FEATURED_SONG_PLATFORMS),
        performance_type=performance,
        performance_status_week=week,
        icon="microphone",
        ai_rapper_owner=rapper_id,
        ai_rapper_features_player=True,
    )
    new_state.songs.append(song)

    boost = request.tier / 10 * rapper.popularity / 100
    for platform in new_state.platforms:
        platform.listeners = math.floor(platform.listeners * (1 + boost))

    target.relationship = improve(target.relationship)
    target.collab_count += 1
    target.last_collab_week = week
    stats = new_state.stats
    stats.wealth += payment
    stats.reputation = min(100.0, stats.reputation + 3)
    stats.networking = min(100.0, stats.networking + 5)

    logger.info("Accepted feature from %s for $%s", rapper.name, payment)
    return new_state, [
        Notification("feature_request_accepted",
                     f'You earned ${payment:,} featuring on "{title}". It starts streaming next week.',
                     week, {"rapper_id": rapper.id, "song_id": song.id, "payment": payment})
    ]


def start_beef(
    state: GameState,
    rapper_id: str,
    rng: Optional[RandomSource] = None,
) -> Tuple[GameState, Optional[str]]:
    """Drop a diss track on an AI rapper; they answer next week."""
    rng = rng or RandomSource()
    rapper = state.find_rapper(rapper_id)
    if rapper is None:
        logger.warning("Beef started with unknown rapper %s", rapper_id)
        return state, None
    if any(b.rapper_id == rapper_id and b.status is BeefStatus.ACTIVE for b in state.beefs):
        raise InvalidActionError(f"You're already beefing with {rapper.name}.")

    beef = Beef(
        id=str(uuid.uuid4()),
        rapper_id=rapper_id,
        started_week=state.current_week,
        player_quality=diss_quality(state.stats, rng),
    )
    new_state = state.clone()
    new_state.beefs.append(beef)
    target = new_state.find_rapper(rapper_id)
    target.relationship = worsen(target.relationship)
    logger.info("Beef started with %s (diss quality %s)", rapper.name, beef.player_quality)
    return new_state, beef.id
