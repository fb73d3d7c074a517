"""Hype campaigns for upcoming releases and tours."""

import logging
from typing import List, Optional, Tuple

from ..engine import hype
from ..engine.hype import ReleaseBoost
from ..exceptions import InvalidActionError
from ..models import GameState, HypeEvent, ReleaseType
from ..notifications import Notification

logger = logging.getLogger(__name__)


def _find_event(state: GameState, event_id: str) -> Optional[HypeEvent]:
    return next((e for e in state.hype_events if e.id == event_id), None)


def _replace_event(state: GameState, event: HypeEvent) -> GameState:
    new_state = state.clone()
    new_state.hype_events = [event if e.id == event.id else e for e in new_state.hype_events]
    return new_state


def start_hype_campaign(
    state: GameState,
    event_type: ReleaseType,
    name: str,
    target_week: int,
) -> Tuple[GameState, str]:
    """Open a hype campaign building towards ``target_week``; returns (state, event id)."""
    if target_week < state.current_week:
        raise InvalidActionError("The release week can't be in the past.")
    event = hype.create_hype_event(event_type, name, target_week)
    new_state = state.clone()
    new_state.hype_events.append(event)
    logger.info("Hype campaign '%s' started for week %s", name, target_week)
    return new_state, event.id


def boost_hype(state: GameState, event_id: str, amount: float) -> GameState:
    event = _find_event(state, event_id)
    if event is None:
        logger.warning("Unknown hype event %s", event_id)
        return state
    return _replace_event(state, hype.update_hype_level(event, amount))


def announce_release(state: GameState, event_id: str) -> GameState:
    event = _find_event(state, event_id)
    if event is None:
        logger.warning("Unknown hype event %s", event_id)
        return state
    return _replace_event(state, hype.announce(event))


def complete_release(
    state: GameState,
    event_id: str,
) -> Tuple[GameState, Optional[ReleaseBoost], List[Notification]]:
    """Close a campaign and archive it; returns the boost the final hype earned."""
    event = _find_event(state, event_id)
    if event is None:
        logger.warning("Unknown hype event %s", event_id)
        return state, None, []

    done, boost = hype.complete_release(event, state.current_week)
    new_state = state.clone()
    new_state.hype_events = [e for e in new_state.hype_events if e.id != event_id]
    new_state.past_hype_events.append(done)

    if boost.ticket_sales_multiplier is not None:
        message = (f'Your tour "{done.name}" launched with {done.hype_level:.0f}% hype, '
                   f"a {boost.ticket_sales_multiplier:.2f}x boost to ticket sales!")
    else:
        message = (f'Your release "{done.name}" launched with {done.hype_level:.0f}% hype, '
                   f"a {boost.stream_multiplier:.1f}x boost to initial streams!")
    note = Notification("hype_release", message, state.current_week, {"event_id": done.id})
    return new_state, boost, [note]
