"""Tests for hype events."""

import pytest

from rapsim.engine.hype import (
    ANNOUNCEMENT_HYPE,
    announce,
    complete_release,
    create_hype_event,
    decay_hype_events,
    update_hype_level,
)
from rapsim.models import ReleaseType


@pytest.mark.parametrize(
    "event_type, max_hype",
    [
        (ReleaseType.SINGLE, 60),
        (ReleaseType.EP, 80),
        (ReleaseType.ALBUM, 100),
        (ReleaseType.DELUXE, 90),
        (ReleaseType.TOUR, 85),
        (ReleaseType.REMIX, 70),
    ],
)
def test_max_hype_by_release_type(event_type, max_hype):
    event = create_hype_event(event_type, "Drop", 10)

    assert event.max_hype == max_hype
    assert event.hype_level == 0
    assert event.decay_rate == 5


def test_hype_level_is_clamped():
    event = create_hype_event(ReleaseType.SINGLE, "Drop", 10)

    assert update_hype_level(event, 500).hype_level == 60
    assert update_hype_level(event, -20).hype_level == 0


def test_announce_adds_hype_once():
    event = announce(create_hype_event(ReleaseType.ALBUM, "LP", 10))

    assert event.announced is True
    assert event.hype_level == ANNOUNCEMENT_HYPE


def test_decay_and_overdue_penalty():
    event = update_hype_level(create_hype_event(ReleaseType.ALBUM, "LP", 10), 40)

    on_time = decay_hype_events([event], 10)[0]
    overdue = decay_hype_events([event], 11)[0]

    assert on_time.hype_level == 35
    assert overdue.hype_level == 25
    assert decay_hype_events([update_hype_level(event, -38)], 11)[0].hype_level == 0


def test_complete_release_multipliers():
    single = update_hype_level(create_hype_event(ReleaseType.SINGLE, "Drop", 10), 50)
    tour = update_hype_level(create_hype_event(ReleaseType.TOUR, "Tour", 10), 50)

    done, boost = complete_release(single, 9)
    assert done.released is True and done.release_week == 9
    assert boost.stream_multiplier == 5.0
    assert boost.ticket_sales_multiplier is None

    _, tour_boost = complete_release(tour, 9)
    assert tour_boost.ticket_sales_multiplier == 1.5
    assert tour_boost.stream_multiplier is None
