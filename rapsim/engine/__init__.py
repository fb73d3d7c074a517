"""
Engine module for the weekly career simulation.

Provides song performance, platform allocation, market trends, hype,
controversies, AI competitors, albums and live shows, sequenced by
``advance_week``.
"""

from .performance import (
    popularity_window,
    classify_performance,
    growth_for,
    active_window,
    still_active,
    advance_song,
)
from .allocation import (
    split_by_weight,
    allocate_song_growth,
    allocate_by_market,
    make_distinct,
    listener_decay_rate,
    listener_floor_ratio,
    streams_to_listeners,
    streaming_revenue,
    settle_platform,
    merge_allocations,
)
from .trends import (
    generate_trend,
    trend_multiplier,
    effect_for,
    process_trends,
    maybe_spawn_trend,
)
from .hype import (
    ReleaseBoost,
    create_hype_event,
    update_hype_level,
    decay_hype_events,
)
from .controversy import (
    ControversyOutcome,
    controversy_chance,
    generate_controversy,
    roll_controversy,
    split_evenly,
)
from .competitors import (
    CompetitorWeek,
    update_ai_rappers,
    feature_request_chance,
    roll_feature_requests,
    expire_requests,
)
from .beefs import BeefResult, process_beefs
from .albums import AlbumUpdate, album_growth, stream_cap, update_album
from .social import follower_growth, grow_followers
from .merch import MerchWeek, process_merchandise
from .live import perform_concert, process_concerts, process_tours
from .random_events import event_pool, roll_random_event
from .weekly import advance_week

__version__ = "1.0.0"

__all__ = [
    # performance.py
    "popularity_window",
    "classify_performance",
    "growth_for",
    "active_window",
    "still_active",
    "advance_song",
    # allocation.py
    "split_by_weight",
    "allocate_song_growth",
    "allocate_by_market",
    "make_distinct",
    "listener_decay_rate",
    "listener_floor_ratio",
    "streams_to_listeners",
    "streaming_revenue",
    "settle_platform",
    "merge_allocations",
    # trends.py
    "generate_trend",
    "trend_multiplier",
    "effect_for",
    "process_trends",
    "maybe_spawn_trend",
    # hype.py
    "ReleaseBoost",
    "create_hype_event",
    "update_hype_level",
    "decay_hype_events",
    # controversy.py
    "ControversyOutcome",
    "controversy_chance",
    "generate_controversy",
    "roll_controversy",
    "split_evenly",
    # competitors.py
    "CompetitorWeek",
    "update_ai_rappers",
    "feature_request_chance",
    "roll_feature_requests",
    "expire_requests",
    # beefs.py
    "BeefResult",
    "process_beefs",
    # albums.py
    "AlbumUpdate",
    "album_growth",
    "stream_cap",
    "update_album",
    # social.py
    "follower_growth",
    "grow_followers",
    # merch.py
    "MerchWeek",
    "process_merchandise",
    # live.py
    "perform_concert",
    "process_concerts",
    "process_tours",
    # random_events.py
    "event_pool",
    "roll_random_event",
    # weekly.py
    "advance_week",
]
