"""Player decisions on random events and controversies."""

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from ..engine.controversy import ControversyOutcome, spread_followers, spread_streams
from ..engine.random_events import apply_option_to_platforms, apply_option_to_social, apply_option_to_stats
from ..exceptions import InvalidActionError
from ..models import GameState
from ..notifications import Notification

logger = logging.getLogger(__name__)


def resolve_random_event(
    state: GameState,
    event_id: str,
    option_index: int,
) -> Tuple[GameState, List[Notification]]:
    """Apply the chosen option of an active random event once and archive the event."""
    event = next((e for e in state.random_events if e.id == event_id), None)
    if event is None:
        logger.warning("Unknown random event %s", event_id)
        return state, []
    if not 0 <= option_index < len(event.options):
        raise InvalidActionError(f"Event '{event.title}' has no option {option_index}.")

    option = event.options[option_index]
    new_state = replace(
        state,
        stats=apply_option_to_stats(state.stats, option),
        platforms=apply_option_to_platforms(state.platforms, option),
        social_platforms=apply_option_to_social(state.social_platforms, option),
        random_events=[e for e in state.random_events if e.id != event_id],
        resolved_random_events=list(state.resolved_random_events) + [
            replace(event, chosen_option=option_index)
        ],
    )
    logger.info("Resolved event '%s' with option %s", event.title, option_index)
    return new_state, [
        Notification("random_event_resolved", option.text, state.current_week,
                     {"event_id": event.id, "option": option_index})
    ]


def respond_to_controversy(
    state: GameState,
    controversy_id: str,
    response_index: int,
) -> Tuple[GameState, Optional[ControversyOutcome]]:
    """
    Answer an active controversy.

    Only the chosen response's modifiers are applied: reputation floored at
    zero, the stream change split across streaming platforms and the follower
    change split across social platforms, each floored at zero.

    Returns:
        (new state, applied outcome); the outcome is None for an unknown id
    """
    controversy = next((c for c in state.active_controversies if c.id == controversy_id), None)
    if controversy is None:
        logger.warning("Unknown controversy %s", controversy_id)
        return state, None
    if not 0 <= response_index < len(controversy.responses):
        raise InvalidActionError(f"There is no response {response_index} to '{controversy.title}'.")

    response = controversy.responses[response_index]
    stats = replace(
        state.stats,
        reputation=min(100.0, max(0.0, state.stats.reputation + response.reputation_modifier)),
    )
    resolved = replace(
        controversy,
        resolved=True,
        chosen_response=response_index,
        resolved_week=state.current_week,
    )
    new_state = replace(
        state,
        stats=stats,
        platforms=spread_streams(state.platforms, response.stream_modifier),
        social_platforms=spread_followers(state.social_platforms, response.follower_modifier),
        active_controversies=[c for c in state.active_controversies if c.id != controversy_id],
        past_controversies=list(state.past_controversies) + [resolved],
    )
    outcome = ControversyOutcome(
        reputation=response.reputation_modifier,
        streams=response.stream_modifier,
        followers=response.follower_modifier,
    )
    logger.info("Answered '%s' with '%s'", controversy.title, response.label)
    return new_state, outcome
