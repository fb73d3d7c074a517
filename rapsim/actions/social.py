"""Posting on social media."""

import logging

from ..exceptions import InvalidActionError
from ..models import GameState

logger = logging.getLogger(__name__)

POST_ENERGY_COST = 10


def post_on_social(state: GameState, platform_name: str) -> GameState:
    """Post on a social platform; recent posts speed up the next follower growth."""
    if not any(p.name == platform_name for p in state.social_platforms):
        logger.warning("Unknown social platform %s", platform_name)
        return state
    if state.energy < POST_ENERGY_COST:
        raise InvalidActionError("You're out of energy this week.")

    new_state = state.clone()
    for platform in new_state.social_platforms:
        if platform.name == platform_name:
            platform.posts += 1
            platform.last_post_week = new_state.current_week
    new_state.energy -= POST_ENERGY_COST
    return new_state
