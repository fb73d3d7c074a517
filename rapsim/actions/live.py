"""Booking concerts and tours."""

import logging
import math
import uuid
from typing import List, Optional, Sequence, Tuple

from ..exceptions import InvalidActionError
from ..models import Concert, ConcertStatus, GameState, Tour, TourStatus
from ..notifications import Notification

logger = logging.getLogger(__name__)

CONCERT_REFUND_RATE = 0.25
TOUR_REFUND_RATE = 0.5
DEFAULT_SETLIST_SIZE = 5


def default_setlist(state: GameState) -> List[str]:
    """The first released, active songs of the player."""
    return [s.id for s in state.player_songs if s.released and s.is_active][:DEFAULT_SETLIST_SIZE]


def schedule_concert(
    state: GameState,
    venue_id: str,
    week: int,
    ticket_price: float,
    setlist: Sequence[str],
) -> Tuple[GameState, Optional[str]]:
    """Book a venue for ``week`` and pay its cost up front; returns (state, concert id)."""
    venue = state.find_venue(venue_id)
    if venue is None:
        logger.warning("Concert requested at unknown venue %s", venue_id)
        return state, None
    if week < state.current_week:
        raise InvalidActionError("You can't schedule a concert in the past!")
    if state.stats.wealth < venue.cost:
        raise InvalidActionError("You don't have enough money to book this venue!")
    if state.stats.reputation < venue.reputation_required:
        raise InvalidActionError("Your reputation isn't high enough to book this venue!")
    if not setlist:
        raise InvalidActionError("You need at least one song in your setlist!")

    concert = Concert(
        id=str(uuid.uuid4()),
        venue_id=venue.id,
        week=week,
        ticket_price=ticket_price,
        setlist=list(setlist),
        profit=-venue.cost,
    )
    new_state = state.clone()
    new_state.concerts.append(concert)
    new_state.stats.wealth -= venue.cost
    logger.info("Booked %s for week %s", venue.name, week)
    return new_state, concert.id


def cancel_concert(state: GameState, concert_id: str) -> Tuple[GameState, List[Notification]]:
    """Cancel a scheduled concert for a quarter of the venue cost back."""
    concert = next((c for c in state.concerts if c.id == concert_id), None)
    if concert is None or concert.status is not ConcertStatus.SCHEDULED:
        logger.warning("Cannot cancel concert %s", concert_id)
        return state, []
    venue = state.find_venue(concert.venue_id)
    if venue is None:
        return state, []

    refund = math.floor(venue.cost * CONCERT_REFUND_RATE)
    new_state = state.clone()
    for c in new_state.concerts:
        if c.id == concert_id:
            c.status = ConcertStatus.CANCELLED
    new_state.stats.wealth += refund
    return new_state, [
        Notification("concert_cancelled", f"Concert canceled! You received a ${refund:,} refund.",
                     state.current_week, {"concert_id": concert_id, "refund": refund})
    ]


def _venue_cost(state: GameState, venue_ids: Sequence[str]) -> int:
    return sum(v.cost for v in (state.find_venue(vid) for vid in venue_ids) if v is not None)


def create_tour(
    state: GameState,
    name: str,
    venue_ids: Sequence[str],
    start_week: int,
    ticket_price: Optional[float] = None,
    setlist: Optional[Sequence[str]] = None,
) -> Tuple[GameState, Optional[str]]:
    """
    Plan a tour: one concert per venue on consecutive weeks from ``start_week``.

    The venues are paid for when the tour is planned. The tour stays in
    planning until it is confirmed or its start week arrives.

    Returns:
        (new state, tour id)
    """
    venues = [state.find_venue(vid) for vid in venue_ids]
    if not venues or any(v is None for v in venues):
        raise InvalidActionError("Pick at least one known venue for the tour.")
    if start_week < state.current_week:
        raise InvalidActionError("You can't schedule a tour in the past!")
    cost = _venue_cost(state, venue_ids)
    if state.stats.wealth < cost:
        raise InvalidActionError("You don't have enough money to book these venues for the tour!")
    setlist = list(setlist) if setlist is not None else default_setlist(state)
    if not setlist:
        raise InvalidActionError("You need at least one released song to go on tour!")

    tour = Tour(
        id=str(uuid.uuid4()),
        name=name,
        venue_ids=list(venue_ids),
        start_week=start_week,
        end_week=start_week + len(venues),
        ticket_price=ticket_price if ticket_price is not None else 0.0,
        booked_cost=cost,
    )
    new_state = state.clone()
    for offset, venue in enumerate(venues):
        price = ticket_price
        if price is None:
            # break even at 70% capacity
            price = math.ceil(venue.cost / (venue.capacity * 0.7))
        new_state.concerts.append(
            Concert(
                id=str(uuid.uuid4()),
                venue_id=venue.id,
                week=start_week + offset,
                ticket_price=price,
                setlist=list(setlist),
                profit=-venue.cost,
                tour_id=tour.id,
            )
        )
    new_state.tours.append(tour)
    new_state.stats.wealth -= cost
    logger.info("Planned tour '%s' with %s dates from week %s", name, len(venues), start_week)
    return new_state, tour.id


def confirm_tour(state: GameState, tour_id: str) -> Tuple[GameState, List[Notification]]:
    """Lock in a planned tour once the player's reputation covers every venue."""
    tour = next((t for t in state.tours if t.id == tour_id), None)
    if tour is None:
        logger.warning("Unknown tour %s", tour_id)
        return state, []
    if tour.status is not TourStatus.PLANNING:
        raise InvalidActionError("This tour is already confirmed or in progress!")

    required = max(
        (v.reputation_required for v in (state.find_venue(vid) for vid in tour.venue_ids) if v is not None),
        default=0,
    )
    if required > state.stats.reputation:
        raise InvalidActionError(f"You need at least {required} reputation to confirm this tour.")

    new_state = state.clone()
    for t in new_state.tours:
        if t.id == tour_id:
            t.status = TourStatus.ACTIVE
            t.current_venue_index = 0
    return new_state, [
        Notification("tour_confirmed", f'Tour "{tour.name}" is confirmed and begins in week {tour.start_week}.',
                     state.current_week, {"tour_id": tour_id})
    ]


def cancel_tour(state: GameState, tour_id: str) -> Tuple[GameState, List[Notification]]:
    """Cancel a tour that has not got past its second venue; half the venue cost comes back."""
    tour = next((t for t in state.tours if t.id == tour_id), None)
    if tour is None or tour.status in (TourStatus.COMPLETED, TourStatus.CANCELLED):
        logger.warning("Cannot cancel tour %s", tour_id)
        return state, []
    if tour.status is not TourStatus.PLANNING and tour.current_venue_index > 1:
        raise InvalidActionError("This tour is already in progress and can't be canceled!")

    refund = math.floor(_venue_cost(state, tour.venue_ids) * TOUR_REFUND_RATE)
    new_state = state.clone()
    for t in new_state.tours:
        if t.id == tour_id:
            t.status = TourStatus.CANCELLED
    for c in new_state.concerts:
        if c.tour_id == tour_id and c.status is ConcertStatus.SCHEDULED:
            c.status = ConcertStatus.CANCELLED
    new_state.stats.wealth += refund
    return new_state, [
        Notification("tour_cancelled", f"Tour canceled! You received a ${refund:,} refund.",
                     state.current_week, {"tour_id": tour_id, "refund": refund})
    ]
