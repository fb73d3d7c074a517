"""
Concerts and tours.

Concerts booked for the week being closed are performed: quality comes from
stage power, reputation and the setlist, attendance from the venue capacity
blended by fan loyalty and reputation. Tours step through their venues one
week at a time and pay a completion bonus.
"""

import logging
import math
from dataclasses import replace
from typing import Dict, List

from ..models import Concert, ConcertStatus, PlayerStats, Song, Tour, TourStatus, Venue, VenueSize
from ..rng import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_STAGE_POWER = 35.0
STAGE_POWER_GAIN = 0.5
TOUR_BONUS_PER_VENUE = 1000
TOUR_REPUTATION_BONUS = 5
TOUR_LOYALTY_BONUS = 3

SIZE_BONUS = {
    VenueSize.SMALL: 1,
    VenueSize.MEDIUM: 2,
    VenueSize.LARGE: 3,
    VenueSize.ARENA: 4,
    VenueSize.STADIUM: 4,
}


def stage_power(stats: PlayerStats) -> float:
    if stats.stage_power is not None:
        return stats.stage_power
    return stats.creativity * 0.3 + stats.marketing * 0.3 + stats.networking * 0.4


def satisfaction_label(quality: int) -> str:
    if quality >= 85:
        return "excellent"
    if quality >= 70:
        return "good"
    if quality >= 50:
        return "average"
    return "poor"


def perform_concert(
    concert: Concert,
    venue: Venue,
    stats: PlayerStats,
    songs: Dict[str, Song],
    rng: RandomSource,
) -> Concert:
    tiers = [songs[sid].tier for sid in concert.setlist if sid in songs]
    average_tier = sum(tiers) / len(tiers) if tiers else 0

    quality = min(100, math.floor(
        stage_power(stats) * 0.5 + stats.reputation * 0.3 + average_tier * 5 + rng.random() * 10
    ))

    capacity = venue.capacity
    base = min(capacity, math.floor(
        capacity * stats.fan_loyalty / 100 * 0.5 + capacity * stats.reputation / 100 * 0.5
    ))
    attendance = min(capacity, math.floor(base * rng.uniform(0.85, 1.15)))
    revenue = attendance * concert.ticket_price

    return replace(
        concert,
        status=ConcertStatus.PERFORMED,
        attendance=attendance,
        revenue=revenue,
        profit=revenue - venue.cost,
        performance_quality=quality,
        satisfaction=satisfaction_label(quality),
        reputation_gain=math.floor(quality / 20 * SIZE_BONUS.get(venue.size, 4)),
    )


def process_concerts(
    concerts: List[Concert],
    venues: List[Venue],
    songs: List[Song],
    stats: PlayerStats,
    week: int,
    rng: RandomSource,
):
    """Perform every concert scheduled for ``week``; returns (concerts, stats, performed)."""
    venues_by_id = {v.id: v for v in venues}
    songs_by_id = {s.id: s for s in songs}
    updated = []
    performed = []
    for concert in concerts:
        if concert.status is not ConcertStatus.SCHEDULED or concert.week != week:
            updated.append(concert)
            continue
        venue = venues_by_id.get(concert.venue_id)
        if venue is None:
            logger.warning("Concert %s references unknown venue %s", concert.id, concert.venue_id)
            updated.append(concert)
            continue
        done = perform_concert(concert, venue, stats, songs_by_id, rng)
        performed.append(done)
        updated.append(done)

    if not performed:
        return updated, stats, performed

    average_gain = sum(c.reputation_gain for c in performed) / len(performed)
    stats = replace(
        stats,
        wealth=stats.wealth + sum(c.revenue for c in performed),
        reputation=min(100.0, stats.reputation + average_gain),
        fan_loyalty=min(100.0, stats.fan_loyalty + average_gain / 2),
        stage_power=min(100.0, (stats.stage_power or DEFAULT_STAGE_POWER) + STAGE_POWER_GAIN),
    )
    return updated, stats, performed


def process_tours(tours: List[Tour], stats: PlayerStats, week: int):
    """Start, advance and complete tours; returns (tours, stats, completed)."""
    updated = []
    completed = []
    for tour in tours:
        if tour.status is TourStatus.PLANNING and tour.start_week == week:
            tour = replace(tour, status=TourStatus.ACTIVE, current_venue_index=0)
        elif tour.status is TourStatus.ACTIVE and week > tour.start_week:
            index = tour.current_venue_index + 1
            if index >= len(tour.venue_ids):
                tour = replace(tour, status=TourStatus.COMPLETED, current_venue_index=index)
                completed.append(tour)
            else:
                tour = replace(tour, current_venue_index=index)
        updated.append(tour)

    for tour in completed:
        stats = replace(
            stats,
            wealth=stats.wealth + len(tour.venue_ids) * TOUR_BONUS_PER_VENUE,
            reputation=min(100.0, stats.reputation + TOUR_REPUTATION_BONUS),
            fan_loyalty=min(100.0, stats.fan_loyalty + TOUR_LOYALTY_BONUS),
        )
        logger.info("Tour '%s' completed in week %s", tour.name, week)
    return updated, stats, completed
