"""Tests for player actions."""

import pytest

from rapsim.actions import (
    announce_release,
    boost_hype,
    check_feature_access,
    complete_release,
    create_album,
    create_deluxe_album,
    create_merchandise,
    create_remix_album,
    create_song,
    feature_acceptance_chance,
    player_has_access,
    post_on_social,
    promote_song,
    release_album,
    release_song,
    request_feature,
    resolve_random_event,
    respond_to_feature_request,
    restock_merchandise,
    set_merchandise_active,
    start_beef,
    start_hype_campaign,
)
from rapsim.engine.random_events import event_pool
from rapsim.exceptions import InvalidActionError
from rapsim.models import (
    AlbumType,
    FeatureRequest,
    MerchType,
    PerformanceType,
    Relationship,
    ReleaseType,
    RequestStatus,
    Subscription,
    SubscriptionType,
)
from rapsim.rng import ScriptedRandom

ALL_PLATFORMS = ["Spotify", "SoundCloud", "iTunes", "YouTube Music", "YouTube", "YouTube Vevo"]


class TestAccess:
    def test_feature_gates(self):
        assert check_feature_access("tier5_songs", "premium")
        assert check_feature_access("tier4_songs", SubscriptionType.STANDARD)
        assert not check_feature_access("tier5_songs", SubscriptionType.STANDARD)
        assert not check_feature_access("tier4_songs", None)
        assert not check_feature_access("teleportation", "platinum")

    def test_inactive_subscription_unlocks_nothing(self, game):
        state = game.clone()
        state.subscription = Subscription(SubscriptionType.PLATINUM, is_active=False)

        assert not player_has_access(state, "tier5_songs")


class TestSongs:
    def test_paid_song_costs_its_tier_price(self, game):
        state, song = create_song(game, "First", 1)

        assert state.stats.wealth == 500
        assert state.stats.creativity == game.stats.creativity + 2
        assert state.find_song(song.id).released is False
        assert game.songs == []

    def test_locked_tiers_are_rejected(self, rich_game):
        with pytest.raises(InvalidActionError):
            create_song(rich_game, "Hit", 4)
        with pytest.raises(InvalidActionError):
            create_song(rich_game, "Banger", 5)

    def test_subscription_unlocks_tier4(self, rich_game):
        state = rich_game.clone()
        state.subscription = Subscription(SubscriptionType.STANDARD, is_active=True)

        state, song = create_song(state, "Hit", 4)

        assert song.tier == 4
        with pytest.raises(InvalidActionError):
            create_song(state, "Banger", 5)

    def test_cannot_afford_song(self, game):
        with pytest.raises(InvalidActionError):
            create_song(game, "Too Expensive", 3)

    def test_free_song_is_capped_without_subscription(self, game):
        state, song = create_song(game, "", 0, rng=ScriptedRandom([0.99]))

        assert song.tier == 3
        assert song.title
        assert state.stats.wealth == game.stats.wealth
        assert state.stats.creativity == game.stats.creativity + 1

    def test_featuring_ignores_unknown_rappers(self, game):
        _, song = create_song(game, "Collab", 1, featuring=["rapper_8", "nobody"])

        assert song.featuring == ["rapper_8"]

    def test_release_boosts_chosen_platforms(self, game):
        state = game.clone()
        for platform in state.platforms:
            platform.listeners = 1000
        state, song = create_song(state, "First", 1)

        released, notes = release_song(state, song.id, platforms=["Spotify", "Tidal"], rng=ScriptedRandom([0.5]))

        song = released.find_song(song.id)
        assert song.released and song.is_active
        assert song.release_date == 1
        assert song.release_platforms == ["Spotify"]
        assert song.performance_type is PerformanceType.NORMAL
        assert released.find_platform("Spotify").listeners == 1100
        assert released.find_platform("iTunes").listeners == 1000
        assert released.stats.reputation == 5.5
        assert [n.kind for n in notes] == ["song_released"]

    def test_release_roll_can_go_viral(self, game):
        state, song = create_song(game, "First", 1)

        released, notes = release_song(state, song.id, platforms=["Spotify"], rng=ScriptedRandom([0.0]))

        assert released.find_song(song.id).performance_type is PerformanceType.VIRAL
        assert "song_viral" in [n.kind for n in notes]

    def test_release_needs_a_platform(self, game):
        state, song = create_song(game, "First", 1)

        with pytest.raises(InvalidActionError):
            release_song(state, song.id, platforms=["Tidal"])

    def test_releasing_twice_is_a_no_op(self, game):
        state, song = create_song(game, "First", 1)
        state, _ = release_song(state, song.id, platforms=["Spotify"], rng=ScriptedRandom([0.5]))

        again, notes = release_song(state, song.id, platforms=["Spotify"])

        assert again is state
        assert notes == []

    def test_promotion(self, game):
        state, song = create_song(game, "First", 1)
        state, _ = release_song(state, song.id, platforms=["Spotify"], rng=ScriptedRandom([0.5]))

        promoted, notes = promote_song(state, song.id, 500, "social")

        assert promoted.find_song(song.id).hype == 1
        assert promoted.stats.wealth == state.stats.wealth - 500
        assert promoted.stats.reputation == pytest.approx(state.stats.reputation + 0.1)
        assert promoted.total_listeners >= state.total_listeners
        assert notes[0].kind == "song_promoted"

    def test_promotion_rules(self, game):
        state, song = create_song(game, "First", 1)
        with pytest.raises(InvalidActionError):
            promote_song(state, song.id, 100)

        state, _ = release_song(state, song.id, platforms=["Spotify"], rng=ScriptedRandom([0.5]))
        with pytest.raises(InvalidActionError):
            promote_song(state, song.id, 0)
        with pytest.raises(InvalidActionError):
            promote_song(state, song.id, 1_000_000)
        with pytest.raises(InvalidActionError):
            promote_song(state, song.id, 100, "billboard")


class TestAlbums:
    def _with_songs(self, state, count=2):
        ids = []
        for i in range(count):
            state, song = create_song(state, f"Track {i}", 1)
            ids.append(song.id)
        return state, ids

    def test_release_album(self, rich_game):
        state, ids = self._with_songs(rich_game)
        state, album_id = create_album(state, "Debut", song_ids=ids + ["unknown"])

        released, notes = release_album(state, album_id)

        album = released.find_album(album_id)
        assert album.song_ids == ids
        assert album.released and album.release_date == 1
        assert album.streams == 15_000
        assert album.sales == 300
        assert album.critical_rating == 5
        assert album.fan_rating == 6
        assert album.chart_position == 65
        assert all(album.platform_streams[name] == 2500 for name in ALL_PLATFORMS)
        assert released.find_platform("Spotify").total_streams == 2500
        assert released.find_platform("Spotify").listeners == 1000
        assert all(released.find_song(sid).released for sid in ids)
        assert notes[0].kind == "album_released"

    def test_empty_album_cannot_be_released(self, game):
        state, album_id = create_album(game, "Nothing Yet")

        with pytest.raises(InvalidActionError):
            release_album(state, album_id)

    def test_album_needs_title(self, game):
        with pytest.raises(InvalidActionError):
            create_album(game, "   ")

    def test_deluxe_and_remix_editions(self, rich_game):
        state, ids = self._with_songs(rich_game, count=3)
        state, parent_id = create_album(state, "Debut", song_ids=ids[:2])

        state, deluxe_id = create_deluxe_album(state, parent_id, "Debut (Deluxe)", additional_song_ids=[ids[2]])
        state, remix_id = create_remix_album(state, parent_id, "Debut Remixed", remix_artists=["rapper_8"])

        deluxe = state.find_album(deluxe_id)
        assert deluxe.album_type is AlbumType.DELUXE
        assert deluxe.song_ids == ids
        assert deluxe.exclusive_tracks == [ids[2]]
        assert deluxe.parent_album_id == parent_id
        remix = state.find_album(remix_id)
        assert remix.album_type is AlbumType.REMIX
        assert remix.remix_artists == ["rapper_8"]

    def test_edition_of_unknown_album(self, game):
        state, album_id = create_deluxe_album(game, "missing", "Deluxe")

        assert state is game
        assert album_id is None


class TestHype:
    def test_campaign_lifecycle(self, game):
        state, event_id = start_hype_campaign(game, ReleaseType.SINGLE, "Lead Single", 4)
        state = announce_release(state, event_id)
        state = boost_hype(state, event_id, 100)

        state, boost, notes = complete_release(state, event_id)

        assert state.hype_events == []
        assert state.past_hype_events[0].released is True
        assert boost.stream_multiplier == 6.0
        assert notes[0].kind == "hype_release"

    def test_campaign_cannot_target_the_past(self, game):
        state = game.clone()
        state.current_week = 5

        with pytest.raises(InvalidActionError):
            start_hype_campaign(state, ReleaseType.ALBUM, "LP", 4)

    def test_unknown_campaign(self, game):
        assert boost_hype(game, "missing", 10) is game
        assert complete_release(game, "missing") == (game, None, [])


class TestCollaborations:
    def test_acceptance_chance(self, game):
        rapper = game.find_rapper("rapper_8")

        assert feature_acceptance_chance(rapper, 80, 0, 3) == pytest.approx(0.2)
        assert feature_acceptance_chance(rapper, 80, 5_000_000, 3) == pytest.approx(0.4)
        assert feature_acceptance_chance(rapper, 80, 0, 1) == 0

    def test_accepted_feature(self, rich_game):
        state, notes = request_feature(rich_game, "rapper_8", 3, rng=ScriptedRandom([0.0]))

        rapper = state.find_rapper("rapper_8")
        assert notes[0].kind == "feature_accepted"
        assert state.stats.wealth == rich_game.stats.wealth - 15_000
        assert state.stats.networking == rich_game.stats.networking + 5
        assert rapper.relationship is Relationship.FRIEND
        assert rapper.collab_count == 1
        song = state.songs[-1]
        assert song.title.endswith("(feat. M.F. Gloom)")
        assert song.featuring == ["rapper_8"]
        assert song.released is False

    def test_declined_feature(self, rich_game):
        state, notes = request_feature(rich_game, "rapper_8", 3, rng=ScriptedRandom([0.99]))

        assert notes[0].kind == "feature_declined"
        assert state.stats.wealth == rich_game.stats.wealth
        assert state.stats.networking == rich_game.stats.networking + 1
        assert state.songs == []

    def test_feature_needs_money(self, game):
        with pytest.raises(InvalidActionError):
            request_feature(game, "rapper_8", 3)

    def _with_request(self, state, rapper_id="rapper_6"):
        state = state.clone()
        state.feature_requests.append(
            FeatureRequest(id="req-1", rapper_id=rapper_id, tier=3, week_requested=1, expires_week=5)
        )
        return state

    def test_accepting_a_request(self, game):
        state = self._with_request(game)

        new_state, notes = respond_to_feature_request(state, "rapper_6", True, rng=ScriptedRandom([0.5]))

        assert new_state.stats.wealth == game.stats.wealth + 3900
        assert new_state.stats.reputation == game.stats.reputation + 3
        assert new_state.feature_requests[0].status is RequestStatus.ACCEPTED
        song = new_state.songs[-1]
        assert song.id.startswith("ai-rapper_6-ft-player-")
        assert song.ai_rapper_owner == "rapper_6"
        assert song.ai_rapper_features_player is True
        assert song.released and song.is_active
        assert new_state.player_songs == []
        assert notes[0].data["payment"] == 3900

    def test_declining_a_request_cools_friends(self, game):
        state = self._with_request(game)
        state.find_rapper("rapper_6").relationship = Relationship.FRIEND

        new_state, _ = respond_to_feature_request(state, "rapper_6", False)

        assert new_state.feature_requests[0].status is RequestStatus.REJECTED
        assert new_state.find_rapper("rapper_6").relationship is Relationship.NEUTRAL

    def test_no_pending_request(self, game):
        state, notes = respond_to_feature_request(game, "rapper_6", True)

        assert state is game
        assert notes == []

    def test_beef(self, game):
        state, beef_id = start_beef(game, "rapper_5", rng=ScriptedRandom([0.5]))

        assert state.beefs[0].id == beef_id
        assert state.find_rapper("rapper_5").relationship is Relationship.RIVAL
        with pytest.raises(InvalidActionError):
            start_beef(state, "rapper_5")


class TestRandomEvents:
    def test_resolving_label_offer(self, game):
        state = game.clone()
        state.find_platform("Spotify").listeners = 1000
        state.random_events.append(next(e for e in event_pool() if e.id == "event_2"))

        new_state, notes = resolve_random_event(state, "event_2", 0)

        assert new_state.stats.wealth == game.stats.wealth + 50_000
        assert new_state.stats.reputation == game.stats.reputation + 15
        assert new_state.find_platform("Spotify").listeners == 1500
        assert new_state.random_events == []
        assert new_state.resolved_random_events[0].chosen_option == 0
        assert notes[0].kind == "random_event_resolved"

    def test_invalid_option(self, game):
        state = game.clone()
        state.random_events.append(event_pool()[0])

        with pytest.raises(InvalidActionError):
            resolve_random_event(state, state.random_events[0].id, 5)


class TestMerchAndSocial:
    def test_merchandise_lifecycle(self, rich_game):
        state, item_id = create_merchandise(rich_game, "Logo Tee", MerchType.CLOTHING, 30, 10, 100)
        assert state.stats.wealth == rich_game.stats.wealth - 1000

        state = set_merchandise_active(state, item_id, False)
        assert state.merchandise[0].is_active is False

        state = restock_merchandise(state, item_id, 50)
        assert state.merchandise[0].inventory == 150
        assert state.merchandise[0].is_active is True
        assert state.stats.wealth == rich_game.stats.wealth - 1500

    def test_merchandise_needs_funds(self, game):
        with pytest.raises(InvalidActionError):
            create_merchandise(game, "Chain", MerchType.ACCESSORIES, 200, 100, 50)

    def test_posting_costs_energy(self, game):
        state = post_on_social(game, "TikTok")

        tiktok = next(p for p in state.social_platforms if p.name == "TikTok")
        assert tiktok.posts == 1
        assert tiktok.last_post_week == 1
        assert state.energy == game.energy - 10

    def test_posting_without_energy(self, game):
        state = game.clone()
        state.energy = 5

        with pytest.raises(InvalidActionError):
            post_on_social(state, "Twitter")
