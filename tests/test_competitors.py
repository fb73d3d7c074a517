"""Tests for AI competitors, feature requests and beefs."""

from rapsim.catalog import default_ai_rappers
from rapsim.engine.beefs import process_beefs, score_beef, worsen
from rapsim.engine.competitors import (
    collab_share,
    expire_requests,
    feature_request_chance,
    owned_song_growth,
    roll_feature_requests,
    smooth_listeners,
    update_ai_rappers,
)
from rapsim.models import (
    AIRapper,
    Beef,
    BeefStatus,
    FeatureRequest,
    Relationship,
    RequestStatus,
)
from rapsim.rng import RandomSource, ScriptedRandom


def _rapper(**kwargs):
    defaults = dict(id="rapper_x", name="MC Test", popularity=50, monthly_listeners=1_000_000,
                    total_streams=10_000_000)
    defaults.update(kwargs)
    return AIRapper(**defaults)


def test_featured_rapper_gets_share_of_player_song_growth(make_song):
    rapper = _rapper()
    song = make_song(tier=3, featuring=[rapper.id], last_week_growth=1000)

    result = update_ai_rappers([rapper], [song], 5, RandomSource(seed=1))

    assert result.rappers[0].total_streams == rapper.total_streams + 350
    assert result.player_spillover == {}


def test_unfeatured_rapper_gains_nothing(make_song):
    rapper = _rapper()
    song = make_song(tier=3, last_week_growth=1000)

    result = update_ai_rappers([rapper], [song], 5, RandomSource(seed=1))

    assert result.rappers[0].total_streams == rapper.total_streams


def test_owned_song_featuring_player_spills_onto_player_platforms(make_song):
    rapper = _rapper()
    song = make_song(tier=3, streams=100_000, release_date=4, ai_rapper_owner=rapper.id,
                     ai_rapper_features_player=True)

    growth = owned_song_growth(song, rapper, 4)
    result = update_ai_rappers([rapper], [song], 4, RandomSource(seed=2))

    assert growth == 15_000
    assert result.rappers[0].total_streams == rapper.total_streams + growth
    assert sum(result.player_spillover.values()) == int(growth * collab_share(3))
    assert set(result.player_spillover) <= set(song.release_platforms)


def test_inactive_owned_song_stops_growing(make_song):
    rapper = _rapper()
    song = make_song(tier=3, streams=900_000, release_date=4, ai_rapper_owner=rapper.id,
                     ai_rapper_features_player=True, is_active=False)

    result = update_ai_rappers([rapper], [song], 200, RandomSource(seed=2))

    assert result.rappers[0].total_streams == rapper.total_streams
    assert result.player_spillover == {}
    assert result.songs[0].is_active is False


def test_listener_moves_are_bounded():
    rapper = _rapper(total_streams=0)

    assert smooth_listeners(rapper, 10_000_000, 0) == 1_150_000
    assert smooth_listeners(rapper, 0, 0) == 980_000


def test_request_chance_respects_relationship_and_cap():
    friend = _rapper(relationship=Relationship.FRIEND)
    enemy = _rapper(relationship=Relationship.ENEMY)

    assert feature_request_chance(enemy, 50, 1_000_000, 5) == 0
    assert feature_request_chance(friend, 100, 100_000_000, 10, cap=0.2) == 0.2


def test_every_rapper_without_pending_request_can_ask():
    rappers = default_ai_rappers()
    pending = FeatureRequest(id="r1", rapper_id=rappers[0].id, tier=3, week_requested=1, expires_week=5)

    new = roll_feature_requests(rappers, [pending], 50, 100_000, 1, 2, ScriptedRandom([0.0]), cap=1.0)

    assert len(new) == 23
    assert rappers[0].id not in {r.rapper_id for r in new}
    assert all(r.expires_week == 6 for r in new)


def test_pending_requests_expire():
    request = FeatureRequest(id="r1", rapper_id="rapper_1", tier=3, week_requested=1, expires_week=5)

    unchanged, count = expire_requests([request], 5)
    assert count == 0 and unchanged[0].status is RequestStatus.PENDING

    expired, count = expire_requests([request], 6)
    assert count == 1
    assert expired[0].status is RequestStatus.EXPIRED


def test_relationship_worsens_one_step():
    assert worsen(Relationship.FRIEND) is Relationship.NEUTRAL
    assert worsen(Relationship.NEUTRAL) is Relationship.RIVAL
    assert worsen(Relationship.ENEMY) is Relationship.ENEMY


def test_beef_scoring():
    beef = Beef(id="b1", rapper_id="rapper_x", started_week=1, player_quality=50)

    won = score_beef(beef, 30, 2)
    assert won.beef.status is BeefStatus.WON
    assert (won.reputation_delta, won.follower_delta, won.beef.rapper_reputation_gain) == (14, 3000, -7)

    lost = score_beef(beef, 70, 2)
    assert lost.beef.status is BeefStatus.LOST
    assert (lost.reputation_delta, lost.follower_delta, lost.beef.rapper_reputation_gain) == (-7, -500, 14)

    draw = score_beef(beef, 45, 2)
    assert draw.beef.status is BeefStatus.DRAW
    assert draw.beef.resolved_week == 2


def test_beefs_are_answered_the_week_after():
    rapper = _rapper()
    beef = Beef(id="b1", rapper_id=rapper.id, started_week=3, player_quality=40)

    assert process_beefs([beef], [rapper], 3, ScriptedRandom([0.5])) == []
    results = process_beefs([beef], [rapper], 4, ScriptedRandom([0.5]))

    assert len(results) == 1
    assert results[0].beef.status is not BeefStatus.ACTIVE


def test_settled_beef_leaves_rapper_popularity_alone():
    rapper = _rapper(popularity=55)
    beef = Beef(id="b1", rapper_id=rapper.id, started_week=1, player_quality=5)

    results = process_beefs([beef], [rapper], 2, ScriptedRandom([0.5]))

    assert rapper.popularity == 55
    assert results[0].beef.status is BeefStatus.LOST
    assert results[0].beef.rapper_reputation_gain > 0
