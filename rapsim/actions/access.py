"""Subscription feature gates."""

from typing import Union

from ..catalog import FEATURE_ACCESS
from ..models import GameState, SubscriptionType


def check_feature_access(feature: str, subscription_type: Union[SubscriptionType, str, None]) -> bool:
    """True when ``subscription_type`` unlocks ``feature``; unknown features are locked."""
    if subscription_type is None:
        return False
    if isinstance(subscription_type, SubscriptionType):
        subscription_type = subscription_type.value
    return subscription_type in FEATURE_ACCESS.get(feature, [])


def player_has_access(state: GameState, feature: str) -> bool:
    """Feature check against the player's subscription, which must be active."""
    if not state.subscription.is_active:
        return False
    return check_feature_access(feature, state.subscription.subscription_type)
