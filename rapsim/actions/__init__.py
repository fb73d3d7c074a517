"""
Actions module: the player's entry points.

Every action takes the current ``GameState`` and returns a new one; the
input state is never modified. Rejected actions raise
``InvalidActionError``; unknown ids leave the state unchanged.
"""

from .access import check_feature_access, player_has_access
from .songs import PROMOTION_TYPES, create_song, release_song, promote_song, promotion_impact
from .albums import create_album, create_deluxe_album, create_remix_album, release_album
from .hype import start_hype_campaign, boost_hype, announce_release, complete_release
from .collaborations import (
    feature_acceptance_chance,
    request_feature,
    respond_to_feature_request,
    start_beef,
)
from .choices import resolve_random_event, respond_to_controversy
from .live import schedule_concert, cancel_concert, create_tour, confirm_tour, cancel_tour
from .merch import create_merchandise, restock_merchandise, set_merchandise_active
from .social import post_on_social

__version__ = "1.0.0"

__all__ = [
    # access.py
    "check_feature_access",
    "player_has_access",
    # songs.py
    "PROMOTION_TYPES",
    "create_song",
    "release_song",
    "promote_song",
    "promotion_impact",
    # albums.py
    "create_album",
    "create_deluxe_album",
    "create_remix_album",
    "release_album",
    # hype.py
    "start_hype_campaign",
    "boost_hype",
    "announce_release",
    "complete_release",
    # collaborations.py
    "feature_acceptance_chance",
    "request_feature",
    "respond_to_feature_request",
    "start_beef",
    # choices.py
    "resolve_random_event",
    "respond_to_controversy",
    # live.py
    "schedule_concert",
    "cancel_concert",
    "create_tour",
    "confirm_tour",
    "cancel_tour",
    # merch.py
    "create_merchandise",
    "restock_merchandise",
    "set_merchandise_active",
    # social.py
    "post_on_social",
]
