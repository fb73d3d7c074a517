"""Album creation and release."""

import logging
import math
import uuid
from typing import List, Optional, Sequence, Tuple

from ..exceptions import InvalidActionError
from ..models import Album, AlbumType, GameState, as_number
from ..notifications import Notification

logger = logging.getLogger(__name__)

RELEASE_BASE_STREAMS = 10_000
RELEASE_LISTENER_BOOST = 1_000
RELEASE_REVENUE_PER_STREAM = 0.004


def _new_album(state: GameState, title: str, album_type: AlbumType, song_ids: Sequence[str],
               cover_art: str = "", **extra) -> Album:
    return Album(
        id=str(uuid.uuid4()),
        title=title,
        album_type=album_type,
        song_ids=list(song_ids),
        cover_art=cover_art,
        platform_streams={p.name: 0 for p in state.platforms},
        **extra,
    )


def create_album(
    state: GameState,
    title: str,
    album_type: AlbumType = AlbumType.STANDARD,
    song_ids: Sequence[str] = (),
    cover_art: str = "",
) -> Tuple[GameState, str]:
    """Add an unreleased album; returns (state, album id)."""
    if not title.strip():
        raise InvalidActionError("Give your album a title.")
    new_state = state.clone()
    known = {s.id for s in new_state.player_songs}
    album = _new_album(new_state, title.strip(), album_type, [sid for sid in song_ids if sid in known], cover_art)
    new_state.albums.append(album)
    logger.info("Created %s album '%s' with %s songs", album_type.value, album.title, len(album.song_ids))
    return new_state, album.id


def create_deluxe_album(
    state: GameState,
    parent_album_id: str,
    title: str,
    additional_song_ids: Sequence[str] = (),
    cover_art: str = "",
) -> Tuple[GameState, Optional[str]]:
    """Deluxe edition: the parent's tracklist plus exclusive tracks."""
    parent = state.find_album(parent_album_id)
    if parent is None:
        logger.warning("Deluxe edition requested for unknown album %s", parent_album_id)
        return state, None
    new_state = state.clone()
    known = {s.id for s in new_state.player_songs}
    exclusive = [sid for sid in additional_song_ids if sid in known and sid not in parent.song_ids]
    album = _new_album(
        new_state, title, AlbumType.DELUXE, parent.song_ids + exclusive, cover_art,
        parent_album_id=parent.id, exclusive_tracks=exclusive,
    )
    new_state.albums.append(album)
    return new_state, album.id


def create_remix_album(
    state: GameState,
    parent_album_id: str,
    title: str,
    remix_artists: Sequence[str] = (),
    cover_art: str = "",
) -> Tuple[GameState, Optional[str]]:
    """Remix edition: the parent's tracklist reworked by other artists."""
    parent = state.find_album(parent_album_id)
    if parent is None:
        logger.warning("Remix album requested for unknown album %s", parent_album_id)
        return state, None
    new_state = state.clone()
    album = _new_album(
        new_state, title, AlbumType.REMIX, parent.song_ids, cover_art,
        parent_album_id=parent.id, remix_artists=list(remix_artists),
    )
    new_state.albums.append(album)
    return new_state, album.id


def release_album(state: GameState, album_id: str) -> Tuple[GameState, List[Notification]]:
    """
    Release an album.

    Member songs that were still unreleased go out with it. The album opens
    with ``10000 + 100 * average quality`` streams split evenly across the
    unlocked platforms; ratings and chart entry follow the average quality.

    Raises:
        InvalidActionError: the album has no songs
    """
    album = state.find_album(album_id)
    if album is None or album.released:
        logger.warning("Cannot release album %s", album_id)
        return state, []

    songs = [s for s in state.songs if s.id in album.song_ids]
    if not songs:
        raise InvalidActionError("Cannot release an album with no songs!")

    average_quality = sum(as_number(s.quality, 50) for s in songs) / len(songs)
    base_streams = RELEASE_BASE_STREAMS + math.floor(average_quality * 100)
    unlocked = [p.name for p in state.platforms if p.is_unlocked] or ["Spotify"]
    per_platform = math.floor(base_streams / len(unlocked))
    opening = {name: per_platform for name in unlocked}

    week = state.current_week
    new_state = state.clone()
    for song in new_state.songs:
        if song.id in album.song_ids and not song.released:
            song.released = True
            song.is_active = True
            song.release_date = week
            song.performance_status_week = week
            song.release_platforms = list(unlocked)

    album = new_state.find_album(album_id)
    album.released = True
    album.release_date = week
    album.streams = base_streams
    album.sales = math.floor(base_streams * 0.02)
    album.revenue = base_streams * RELEASE_REVENUE_PER_STREAM
    album.platform_streams = {**album.platform_streams, **opening}
    album.critical_rating = math.floor(average_quality / 10)
    album.fan_rating = math.floor(average_quality / 12 + 2)
    album.chart_position = 90 - math.floor(average_quality / 2)

    for platform in new_state.platforms:
        streams = opening.get(platform.name, 0)
        if not streams:
            continue
        platform.total_streams += streams
        platform.listeners += RELEASE_LISTENER_BOOST
        platform.revenue += streams * RELEASE_REVENUE_PER_STREAM

    logger.info("Released album '%s' with %s opening streams", album.title, base_streams)
    return new_state, [
        Notification("album_released", f'Your album "{album.title}" has been released!', week,
                     {"album_id": album.id, "streams": base_streams})
    ]
