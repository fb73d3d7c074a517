"""Market trends: weekly shifts that favour or punish individual platforms."""

import logging
import uuid
from dataclasses import replace
from typing import Iterable, List, Tuple

from ..models import MarketTrend, TrendType
from ..rng import RandomSource

logger = logging.getLogger(__name__)

TREND_CHANCE = 0.15

TREND_POOL = {
    TrendType.RISING: [
        ("Viral Challenges", "Short-form video challenges featuring music clips are trending, driving discovery."),
        ("Short-form Content Surge", "Platform algorithm changes are favoring indie artists with authentic content."),
        ("Algorithm Shift", "Cross-platform music sharing features have increased engagement."),
        ("Platform Integration", "User-created playlists are gaining prominence over editorial content."),
        ("Collaborative Playlists", "New demographics are adopting streaming platforms, expanding audience reach."),
    ],
    TrendType.FALLING: [
        ("Streaming Royalty Dispute", "Artists are boycotting platforms due to royalty payment disputes."),
        ("Platform Policy Change", "New policy changes have reduced song visibility in recommendation engines."),
        ("Market Saturation", "Market saturation in certain genres is decreasing individual stream shares."),
        ("Subscription Price Increase", "Price increases are driving users to free tiers with fewer streams."),
        ("Content Moderation Wave", "Content moderation algorithms are reducing discovery for explicit content."),
    ],
    TrendType.HOT: [
        ("Cross-Platform Promotion", "Cross-platform promotion deals are creating viral momentum across services."),
        ("Podcast Integration", "Integration between podcasts and music is creating new promotional opportunities."),
        ("Social Media Verification", "Verified artist profiles are increasing trust and engagement."),
        ("AI-Generated Content", "AI tools are creating personalized listening experiences that boost streams."),
        ("Interactive Music Experiences", "Interactive music experiences are increasing time spent on platforms."),
    ],
    TrendType.STABLE: [
        ("Seasonal Listening Habits", "Seasonal listening patterns remain predictable, with consistent engagement."),
        ("Platform Redesign", "Platform redesigns have kept engagement steady while improving UX."),
        ("Industry Standardization", "Industry standardization efforts are creating more consistent experiences."),
        ("Premium Content Features", "Premium content features are attracting a steady flow of new subscribers."),
        ("Offline Listening Tools", "Offline listening tools continue to be popular for mobile users."),
    ],
}


def generate_trend(week: int, platforms: List[str], rng: RandomSource) -> MarketTrend:
    """Create a random trend starting this week."""
    trend_type = rng.choice(list(TrendType))
    name, description = rng.choice(TREND_POOL[trend_type])
    affected = rng.sample(platforms, rng.randint(1, 3))
    return MarketTrend(
        id=str(uuid.uuid4()),
        name=name,
        description=description,
        trend_type=trend_type,
        platforms=affected,
        impact=rng.randint(1, 10),
        duration=rng.randint(2, 8),
        start_week=week,
    )


def trend_multiplier(trend: MarketTrend) -> float:
    if trend.trend_type is TrendType.RISING:
        return 1 + trend.impact * 0.03
    if trend.trend_type is TrendType.FALLING:
        return max(0.7, 1 - trend.impact * 0.03)
    if trend.trend_type is TrendType.HOT:
        return 1 + trend.impact * 0.05
    return 1 + trend.impact * 0.01


def effect_for(platform: str, trends: Iterable[MarketTrend]) -> float:
    """Combined multiplier of every active trend touching a platform."""
    effect = 1.0
    for trend in trends:
        if platform in trend.platforms:
            effect *= trend_multiplier(trend)
    return effect


def process_trends(
    active: List[MarketTrend],
    week: int,
) -> Tuple[List[MarketTrend], List[MarketTrend]]:
    """
    Split trends into those still running and those that ended by ``week``.

    Returns:
        (still active, newly expired with end_week set)
    """
    still_active = []
    expired = []
    for trend in active:
        if trend.remaining_weeks(week) <= 0:
            expired.append(replace(trend, end_week=week))
            logger.info("Market trend '%s' ended in week %s", trend.name, week)
        else:
            still_active.append(trend)
    return still_active, expired


def maybe_spawn_trend(
    week: int,
    platforms: List[str],
    rng: RandomSource,
    chance: float = TREND_CHANCE,
):
    """Roll the weekly trend chance; returns a new trend or None."""
    if not platforms or rng.random() >= chance:
        return None
    trend = generate_trend(week, platforms, rng)
    logger.info("Market trend '%s' (%s) started in week %s", trend.name, trend.trend_type.value, week)
    return trend
