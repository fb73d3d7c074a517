"""Random career events: a fixed pool of choices with stat consequences."""

import logging
import math
from dataclasses import replace
from typing import List, Optional, Set

from ..models import (
    EventOption,
    PlayerStats,
    RandomEvent,
    SocialMediaPlatform,
    StreamingPlatform,
)
from ..rng import RandomSource

logger = logging.getLogger(__name__)

RANDOM_EVENT_CHANCE = 0.05


def event_pool() -> List[RandomEvent]:
    return [
        RandomEvent(
            id="event_1",
            title="Viral Social Media Moment",
            description="One of your social media posts has gone viral unexpectedly!",
            options=[
                EventOption("Capitalize on the moment with new content", marketing=5, follower_multiplier=1.2),
                EventOption("Ignore it and focus on your music", creativity=3),
            ],
        ),
        RandomEvent(
            id="event_2",
            title="Record Label Offer",
            description="A record label has approached you with a contract offer!",
            options=[
                EventOption("Sign the deal for immediate cash and exposure",
                            wealth=50_000, reputation=15, listener_multiplier=1.5),
                EventOption("Stay independent to maintain creative control", fan_loyalty=10, creativity=5),
            ],
        ),
        RandomEvent(
            id="event_3",
            title="Studio Equipment Failure",
            description="Your recording equipment has malfunctioned right before an important session!",
            options=[
                EventOption("Invest in new high-quality equipment", wealth=-5_000, creativity=8),
                EventOption("Use a friend's studio temporarily", networking=5, creativity=-2),
            ],
        ),
        RandomEvent(
            id="event_5",
            title="Feature Opportunity",
            description="A major artist wants to feature you on their upcoming track!",
            required_reputation=30,
            options=[
                EventOption("Accept the feature opportunity",
                            reputation=10, networking=8, wealth=15_000, listener_multiplier=1.2),
                EventOption("Decline to focus on your own music", creativity=5),
            ],
        ),
        RandomEvent(
            id="event_6",
            title="Controversial Interview",
            description="Comments from your latest interview are making headlines.",
            options=[
                EventOption("Apologize and clarify your statement", reputation=-2),
                EventOption("Double down and embrace the controversy", reputation=-5, follower_multiplier=1.15),
            ],
        ),
        RandomEvent(
            id="event_7",
            title="Producer Collaboration Offer",
            description="A famous producer wants to work with you.",
            options=[
                EventOption("Pay for their premium services", wealth=-10_000, creativity=15),
                EventOption("Negotiate a royalty deal instead", creativity=8, networking=3),
            ],
        ),
        RandomEvent(
            id="event_8",
            title="Marketing Campaign Opportunity",
            description="A marketing agency is offering to run a campaign for your music.",
            options=[
                EventOption("Invest in the full campaign", wealth=-7_500, marketing=12, listener_multiplier=1.1),
                EventOption("Run a smaller DIY campaign", wealth=-1_500, marketing=5),
            ],
        ),
        RandomEvent(
            id="event_9",
            title="Fashion Brand Partnership",
            description="A popular fashion brand wants you as their ambassador.",
            required_reputation=50,
            options=[
                EventOption("Accept the endorsement deal",
                            wealth=35_000, reputation=8, marketing=6, follower_multiplier=1.12),
                EventOption("Launch your own fashion line instead", wealth=-20_000, marketing=10),
            ],
        ),
        RandomEvent(
            id="event_10",
            title="Sampling Clearance Issue",
            description="A sample in one of your songs hasn't been cleared.",
            options=[
                EventOption("Pay for proper clearance", wealth=-12_000, reputation=3),
                EventOption("Re-record without the sample", creativity=5, listener_multiplier=0.95),
            ],
        ),
        RandomEvent(
            id="event_11",
            title="Music Festival Invitation",
            description="You've been invited to perform at a major music festival!",
            required_reputation=40,
            options=[
                EventOption("Accept and prepare an amazing show",
                            wealth=-5_000, reputation=15, networking=10,
                            listener_multiplier=1.3, follower_multiplier=1.2),
                EventOption("Decline to focus on studio work", creativity=8, reputation=-3),
            ],
        ),
        RandomEvent(
            id="event_12",
            title="Streaming Platform Exclusive Deal",
            description="A streaming platform wants exclusive rights to your next release.",
            required_reputation=55,
            options=[
                EventOption("Accept the exclusive deal", wealth=25_000, listener_multiplier=1.1),
                EventOption("Release on all platforms simultaneously", fan_loyalty=8, listener_multiplier=1.05),
            ],
        ),
    ]


def roll_random_event(
    week: int,
    reputation: float,
    excluded_ids: Set[str],
    rng: RandomSource,
    chance: float = RANDOM_EVENT_CHANCE,
) -> Optional[RandomEvent]:
    """Weekly roll for a fresh event the player has not seen yet."""
    if rng.random() >= chance:
        return None
    candidates = [
        event for event in event_pool()
        if event.id not in excluded_ids and reputation >= event.required_reputation
    ]
    if not candidates:
        return None
    event = replace(rng.choice(candidates), week=week)
    logger.info("Random event '%s' in week %s", event.title, week)
    return event


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def apply_option_to_stats(stats: PlayerStats, option: EventOption) -> PlayerStats:
    return replace(
        stats,
        reputation=_clamp(stats.reputation + option.reputation),
        creativity=_clamp(stats.creativity + option.creativity),
        marketing=_clamp(stats.marketing + option.marketing),
        networking=_clamp(stats.networking + option.networking),
        fan_loyalty=_clamp(stats.fan_loyalty + option.fan_loyalty),
        wealth=max(0.0, stats.wealth + option.wealth),
    )


def apply_option_to_platforms(platforms: List[StreamingPlatform], option: EventOption) -> List[StreamingPlatform]:
    if option.listener_multiplier == 1.0:
        return list(platforms)
    return [replace(p, listeners=math.floor(p.listeners * option.listener_multiplier)) for p in platforms]


def apply_option_to_social(platforms: List[SocialMediaPlatform], option: EventOption) -> List[SocialMediaPlatform]:
    if option.follower_multiplier == 1.0:
        return list(platforms)
    return [replace(p, followers=math.floor(p.followers * option.follower_multiplier)) for p in platforms]
