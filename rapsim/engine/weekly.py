"""
Weekly orchestrator.

``advance_week`` is the only way time moves. It reads one snapshot of the
state, runs every component in a fixed order and returns a brand-new state
plus the notifications the week produced:

 1. week counter
 2. market trends (expire, maybe spawn)
 3. song classification and growth
 4. per-platform allocation of song growth
 5. AI rappers (their growth, spillover onto player platforms)
 6. albums
 7. platform settlement and career stats, then the random-event roll
 8. social followers
 9. collaboration requests and beefs
10. WeeklyStats ledger row
11. hype decay
12. merchandise
13. controversy roll
14. concerts, then tours
15. energy reset

Concerts and tour starts are matched against the week that is closing.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..catalog import career_level_for, career_title
from ..config import EngineSettings, settings
from ..models import GameState, PerformanceType, WeeklyStats
from ..notifications import Notification
from ..rng import RandomSource
from .albums import update_album
from .allocation import allocate_song_growth, make_distinct, merge_allocations, settle_platform
from .beefs import process_beefs
from .competitors import expire_requests, roll_feature_requests, update_ai_rappers
from .controversy import roll_controversy, spread_followers
from .hype import decay_hype_events
from .live import process_concerts, process_tours
from .merch import process_merchandise
from .performance import advance_song
from .random_events import roll_random_event
from .social import grow_followers
from .trends import maybe_spawn_trend, process_trends

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    PerformanceType.VIRAL: ("song_viral", 'Your song "{}" is going viral!'),
    PerformanceType.FLOP: ("song_flop", 'Your song "{}" is underperforming.'),
    PerformanceType.COMEBACK: ("song_comeback", 'Your song "{}" is making a comeback!'),
}


def advance_week(
    state: GameState,
    rng: Optional[RandomSource] = None,
    engine: Optional[EngineSettings] = None,
) -> Tuple[GameState, List[Notification]]:
    """
    Run one week of the career.

    Args:
        state: Current game state; never modified
        rng: Random source; a fresh unseeded one when omitted
        engine: Engine tuning; the global settings when omitted

    Returns:
        (new state, notifications)
    """
    rng = rng or RandomSource()
    engine = engine or settings.engine
    closing_week = state.current_week
    week = closing_week + 1
    notes: List[Notification] = []

    def notify(kind: str, message: str, **data) -> None:
        notes.append(Notification(kind, message, week, data))

    # Market trends
    trends, expired = process_trends(state.market_trends, week)
    for trend in expired:
        notify("trend_ended", f"The '{trend.name}' trend has ended.", trend_id=trend.id)
    new_trend = maybe_spawn_trend(week, [p.name for p in state.platforms], rng, engine.market_trend_chance)
    if new_trend is not None:
        trends.append(new_trend)
        notify("trend_started", f"New market trend: {new_trend.name}", trend_id=new_trend.id)

    # Songs
    songs = []
    for song in state.songs:
        updated = advance_song(song, week, state.stats, rng, engine.viral_duration_weeks)
        changed = updated.performance_type is not song.performance_type
        if changed and not updated.is_ai_owned and updated.performance_type in _STATUS_MESSAGES:
            kind, template = _STATUS_MESSAGES[updated.performance_type]
            notify(kind, template.format(updated.title), song_id=updated.id)
        songs.append(updated)

    # Allocation of player song growth
    weekly_streams: Dict[str, int] = {}
    for idx, song in enumerate(songs):
        if song.is_ai_owned or song.last_week_growth <= 0:
            continue
        allocation = allocate_song_growth(song, song.last_week_growth, state.artist_id, trends, rng)
        songs[idx] = replace(
            song,
            platform_stream_distribution=merge_allocations(song.platform_stream_distribution, allocation),
        )
        weekly_streams = merge_allocations(weekly_streams, allocation)

    # AI rappers
    competitors = update_ai_rappers(state.ai_rappers, songs, week, rng)
    songs = competitors.songs
    rappers = competitors.rappers
    weekly_streams = merge_allocations(weekly_streams, competitors.player_spillover)

    # Albums
    unlocked = [p.name for p in state.platforms if p.is_unlocked]
    every_platform = [p.name for p in state.platforms]
    albums = []
    for album in state.albums:
        result = update_album(album, week, unlocked, rng, every_platform)
        if not result.ok:
            notify("album_update_failed", f'Album "{album.title}" could not be updated this week.',
                   album_id=album.id, error=result.error)
        albums.append(result.album)
        weekly_streams = merge_allocations(weekly_streams, result.platform_growth)

    # Platform settlement
    weekly_streams = make_distinct(weekly_streams, rng)
    known = {p.name for p in state.platforms}
    for name in weekly_streams:
        if name not in known:
            logger.debug("Dropping streams for unknown platform %s", name)
    released = [s for s in songs if s.released and not s.is_ai_owned]
    active = sum(1 for s in released if s.is_active)
    platforms = [
        settle_platform(p, weekly_streams.get(p.name, 0), active, len(released))
        for p in state.platforms
    ]
    weekly_revenue = sum(new.revenue - old.revenue for new, old in zip(platforms, state.platforms))

    # Career stats
    total_streams = sum(p.total_streams for p in platforms)
    stats = replace(
        state.stats,
        career_level=career_level_for(total_streams),
        wealth=state.stats.wealth + weekly_revenue,
        creativity=min(100.0, state.stats.creativity + 0.2),
    )
    if stats.career_level > state.stats.career_level:
        notify("career_level_up", f"You are now a {career_title(stats.career_level)}!",
               level=stats.career_level)

    random_events = list(state.random_events)
    seen = {e.id for e in state.random_events} | {e.id for e in state.resolved_random_events}
    event = roll_random_event(week, stats.reputation, seen, rng, engine.random_event_chance)
    if event is not None:
        random_events.append(event)
        notify("random_event", event.title, event_id=event.id)

    # Social media
    social = grow_followers(state.social_platforms, closing_week)

    # Collaboration requests
    requests, expired_count = expire_requests(state.feature_requests, week)
    if expired_count:
        logger.info("%s feature requests expired in week %s", expired_count, week)
    player_listeners = min(engine.monthly_listener_cap, sum(p.listeners for p in platforms))
    for request in roll_feature_requests(
        rappers, requests, stats.reputation, player_listeners, stats.career_level, week, rng,
        engine.feature_request_cap, engine.request_expiry_weeks,
    ):
        requests.append(request)
        rapper_name = next((r.name for r in rappers if r.id == request.rapper_id), request.rapper_id)
        notify("feature_request", f"{rapper_name} wants you on a tier {request.tier} track.",
               request_id=request.id, rapper_id=request.rapper_id)

    # Beefs
    beefs = list(state.beefs)
    for result in process_beefs(beefs, rappers, week, rng):
        beefs = [result.beef if b.id == result.beef.id else b for b in beefs]
        stats = replace(stats, reputation=max(0.0, min(100.0, stats.reputation + result.reputation_delta)))
        social = spread_followers(social, result.follower_delta)
        notify("beef_resolved", f"Your beef ended in a {result.beef.status.value}.",
               beef_id=result.beef.id, status=result.beef.status.value)

    # Ledger
    player_released = [s for s in songs if s.released and not s.is_ai_owned]
    ledger_row = WeeklyStats(
        week=closing_week,
        total_streams=total_streams,
        total_followers=sum(p.followers for p in social),
        total_listeners=sum(p.listeners for p in platforms),
        wealth=stats.wealth,
        reputation=stats.reputation,
        songs_released=len(player_released),
        song_ids=[s.id for s in player_released if s.release_date == closing_week],
        revenue=weekly_revenue,
    )

    hype_events = decay_hype_events(state.hype_events, week)

    # Merchandise
    merch = process_merchandise(
        state.merchandise, sum(p.followers for p in social), stats, closing_week, rng,
    )
    merchandise_sales = list(state.merchandise_sales)
    if merch.sales is not None:
        merchandise_sales.append(merch.sales)
        stats = replace(stats, wealth=stats.wealth + merch.sales.profit)

    # Controversy
    controversies = list(state.active_controversies)
    controversy = roll_controversy(
        controversies, stats.career_level, stats.reputation, week, rng, engine.controversy_max_percent,
    )
    if controversy is not None:
        controversies.append(controversy)
        notify("controversy", f"CONTROVERSY: {controversy.title}", controversy_id=controversy.id)

    # Live shows
    concerts, stats, performed = process_concerts(
        state.concerts, state.venues, songs, stats, closing_week, rng,
    )
    for concert in performed:
        notify("concert_completed",
               f"Concert drew {concert.attendance} fans ({concert.satisfaction}).",
               concert_id=concert.id, revenue=concert.revenue)
    tours, stats, completed = process_tours(state.tours, stats, closing_week)
    for tour in completed:
        notify("tour_completed", f"Tour '{tour.name}' is complete!", tour_id=tour.id)

    new_state = replace(
        state,
        current_week=week,
        stats=stats,
        songs=songs,
        albums=albums,
        platforms=platforms,
        social_platforms=social,
        ai_rappers=rappers,
        market_trends=trends,
        past_market_trends=list(state.past_market_trends) + expired,
        hype_events=hype_events,
        active_controversies=controversies,
        feature_requests=requests,
        beefs=beefs,
        random_events=random_events,
        concerts=concerts,
        tours=tours,
        merchandise=list(merch.items),
        merchandise_sales=merchandise_sales,
        weekly_stats=list(state.weekly_stats) + [ledger_row],
        energy=state.max_energy,
    )
    logger.debug("Advanced to week %s with %s notifications", week, len(notes))
    return new_state, notes
