"""Hype events around upcoming releases and tours."""

import logging
import uuid
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from ..models import HypeEvent, ReleaseType

logger = logging.getLogger(__name__)

MAX_HYPE = {
    ReleaseType.SINGLE: 60,
    ReleaseType.EP: 80,
    ReleaseType.ALBUM: 100,
    ReleaseType.DELUXE: 90,
    ReleaseType.TOUR: 85,
}
DEFAULT_MAX_HYPE = 70
DEFAULT_DECAY_RATE = 5
ANNOUNCEMENT_HYPE = 15
OVERDUE_PENALTY = 10


@dataclass
class ReleaseBoost:
    """What a finished hype campaign is worth at release time."""
    event_id: str
    final_hype: float
    stream_multiplier: Optional[float] = None
    ticket_sales_multiplier: Optional[float] = None


def create_hype_event(event_type: ReleaseType, name: str, target_week: int) -> HypeEvent:
    return HypeEvent(
        id=str(uuid.uuid4()),
        event_type=event_type,
        name=name,
        target_week=target_week,
        hype_level=0,
        max_hype=MAX_HYPE.get(event_type, DEFAULT_MAX_HYPE),
        decay_rate=DEFAULT_DECAY_RATE,
    )


def update_hype_level(event: HypeEvent, amount: float) -> HypeEvent:
    """Add (or remove) hype, clamped to [0, max_hype]."""
    level = min(event.max_hype, max(0.0, event.hype_level + amount))
    return replace(event, hype_level=level)


def announce(event: HypeEvent) -> HypeEvent:
    return replace(update_hype_level(event, ANNOUNCEMENT_HYPE), announced=True)


def decay_hype_events(events: List[HypeEvent], week: int) -> List[HypeEvent]:
    """Weekly decay; events past their target week without a release lose extra hype."""
    decayed = []
    for event in events:
        level = max(0.0, event.hype_level - event.decay_rate)
        if week > event.target_week and not event.released:
            level = max(0.0, level - OVERDUE_PENALTY)
        decayed.append(replace(event, hype_level=level))
    return decayed


def complete_release(event: HypeEvent, week: int) -> Tuple[HypeEvent, ReleaseBoost]:
    """Mark an event released and report the multiplier it earned."""
    done = replace(event, released=True, release_week=week)
    if event.event_type is ReleaseType.TOUR:
        boost = ReleaseBoost(event.id, event.hype_level, ticket_sales_multiplier=1 + event.hype_level / 100)
    else:
        boost = ReleaseBoost(event.id, event.hype_level, stream_multiplier=event.hype_level / 10)
    logger.info("Hype event '%s' released with hype %.0f", event.name, event.hype_level)
    return done, boost
