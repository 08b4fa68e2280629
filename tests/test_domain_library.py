"""
Unit Tests for the Library Domain

Tests for:
- Track entity validation and playback invariants
- PlaybackStatus, PlayFields, PauseFields, PlaybackTransition
- PlaybackStateMachine play/pause planning and elapsed time
- Playback events and room topics
"""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from listening_room.domain.library.entities import NewTrack, Track
from listening_room.domain.library.events import TrackPaused, TrackPlayed, room_topic
from listening_room.domain.library.services import PlaybackStateMachine
from listening_room.domain.library.value_objects import (
    PauseFields,
    PlaybackStatus,
    PlaybackTransition,
    PlayFields,
)
from listening_room.domain.shared.exceptions import InvalidOperationError, InvalidStateError


def at(unix_seconds: float) -> datetime:
    return datetime.fromtimestamp(unix_seconds, tz=UTC)


def make_track(**overrides) -> Track:
    data = {"id": 1, "user_id": 7, "title": "Song"}
    data.update(overrides)
    return Track(**data)


# =============================================================================
# Entity Tests
# =============================================================================


class TestTrack:
    """Unit tests for the Track entity."""

    def test_new_track_defaults_to_stopped(self):
        track = make_track()

        assert track.status is PlaybackStatus.STOPPED
        assert track.is_stopped
        assert not track.is_active
        assert track.played_at is None
        assert track.paused_at is None

    def test_timestamps_are_truncated_to_seconds(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000.75))

        assert track.played_at == at(1000)
        assert track.played_at.microsecond == 0

    def test_timestamps_are_normalised_to_utc(self):
        from datetime import timezone

        plus_two = timezone(timedelta(hours=2))
        track = make_track(
            status=PlaybackStatus.PLAYING,
            played_at=datetime(1970, 1, 1, 2, 16, 40, tzinfo=plus_two),
        )

        assert track.played_at == at(1000)
        assert track.played_at.tzinfo == UTC

    def test_naive_timestamp_is_rejected(self):
        with pytest.raises(ValidationError):
            make_track(status=PlaybackStatus.PLAYING, played_at=datetime(2024, 1, 1))

    def test_playing_requires_played_at(self):
        with pytest.raises(ValidationError):
            make_track(status=PlaybackStatus.PLAYING)

    def test_paused_requires_both_timestamps(self):
        with pytest.raises(ValidationError):
            make_track(status=PlaybackStatus.PAUSED, played_at=at(1000))

    def test_paused_cannot_precede_played(self):
        with pytest.raises(ValidationError):
            make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(999))

    def test_immediate_pause_is_allowed(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1000))

        assert track.is_paused
        assert track.is_active

    def test_stopped_track_ignores_stale_paused_at(self):
        track = make_track(played_at=at(1000), paused_at=at(900))

        assert track.is_stopped

    def test_track_is_frozen(self):
        track = make_track()

        with pytest.raises(ValidationError):
            track.status = PlaybackStatus.PLAYING

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0:00"), (65, "1:05"), (3725, "1:02:05")],
    )
    def test_duration_formatted(self, seconds, expected):
        assert make_track(duration_seconds=seconds).duration_formatted == expected

    def test_new_track_rejects_empty_title(self):
        with pytest.raises(ValidationError):
            NewTrack(user_id=1, title="")

    def test_new_track_rejects_non_positive_user(self):
        with pytest.raises(ValidationError):
            NewTrack(user_id=0, title="Song")


# =============================================================================
# Value Object Tests
# =============================================================================


class TestPlaybackStatus:
    def test_active_states(self):
        assert PlaybackStatus.active_states() == {PlaybackStatus.PLAYING, PlaybackStatus.PAUSED}

    @pytest.mark.parametrize(
        ("status", "active"),
        [
            (PlaybackStatus.STOPPED, False),
            (PlaybackStatus.PLAYING, True),
            (PlaybackStatus.PAUSED, True),
        ],
    )
    def test_is_active(self, status, active):
        assert status.is_active is active

    def test_values_match_stored_strings(self):
        assert {s.value for s in PlaybackStatus} == {"stopped", "playing", "paused"}


class TestFieldSets:
    def test_play_fields_only_carry_played_at(self):
        fields = PlayFields(played_at=at(1000.4))

        assert fields.columns() == {"status": PlaybackStatus.PLAYING, "played_at": at(1000)}

    def test_pause_fields_only_carry_paused_at(self):
        fields = PauseFields(paused_at=at(1020))

        assert fields.columns() == {"status": PlaybackStatus.PAUSED, "paused_at": at(1020)}

    def test_play_fields_reject_other_status(self):
        with pytest.raises(ValidationError):
            PlayFields(status=PlaybackStatus.PAUSED, played_at=at(1000))

    def test_pause_fields_require_timestamp(self):
        with pytest.raises(ValidationError):
            PauseFields()

    def test_transition_demotes_active_states_by_default(self):
        transition = PlaybackTransition(
            user_id=7, track_id=1, target_fields=PlayFields(played_at=at(1000))
        )

        assert transition.demote_from == PlaybackStatus.active_states()
        assert transition.target_status is PlaybackStatus.PLAYING


# =============================================================================
# State Machine Tests
# =============================================================================


class TestRequestPlay:
    def test_stopped_track_starts_now(self):
        transition = PlaybackStateMachine.request_play(make_track(), at(1000))

        assert transition.target_fields == PlayFields(played_at=at(1000))
        assert transition.user_id == 7
        assert transition.track_id == 1

    def test_start_time_is_truncated(self):
        transition = PlaybackStateMachine.request_play(make_track(), at(1000.9))

        assert transition.target_fields.played_at == at(1000)

    def test_playing_track_keeps_its_clock(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        transition = PlaybackStateMachine.request_play(track, at(1050))

        assert transition.target_fields.played_at == at(1000)

    def test_paused_track_rewinds_start_by_elapsed(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1020))

        transition = PlaybackStateMachine.request_play(track, at(1100))

        assert transition.target_fields.played_at == at(1080)

    def test_resume_after_immediate_pause_starts_now(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1000))

        transition = PlaybackStateMachine.request_play(track, at(1500))

        assert transition.target_fields.played_at == at(1500)

    def test_play_demotes_other_active_tracks(self):
        transition = PlaybackStateMachine.request_play(make_track(), at(1000))

        assert transition.demote_from == {PlaybackStatus.PLAYING, PlaybackStatus.PAUSED}

    def test_unknown_status_is_rejected(self):
        track = Track.model_construct(id=1, user_id=7, title="Song", status="rewinding")

        with pytest.raises(InvalidStateError):
            PlaybackStateMachine.request_play(track, at(1000))


class TestRequestPause:
    def test_playing_track_pauses_now(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        transition = PlaybackStateMachine.request_pause(track, at(1020.6))

        assert transition.target_fields == PauseFields(paused_at=at(1020))
        assert transition.target_status is PlaybackStatus.PAUSED

    def test_paused_track_pauses_again_now(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1020))

        transition = PlaybackStateMachine.request_pause(track, at(1090.4))

        assert transition.target_fields.paused_at == at(1090)

    def test_stopped_track_cannot_be_paused(self):
        with pytest.raises(InvalidOperationError) as exc_info:
            PlaybackStateMachine.request_pause(make_track(), at(1000))

        assert exc_info.value.operation == "pause"
        assert exc_info.value.current_state == "stopped"

    def test_pause_demotes_other_active_tracks(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        transition = PlaybackStateMachine.request_pause(track, at(1001))

        assert transition.demote_from == PlaybackStatus.active_states()

    def test_immediate_pause_keeps_invariant(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        transition = PlaybackStateMachine.request_pause(track, at(1000.2))

        assert transition.target_fields.paused_at >= track.played_at


class TestElapsed:
    def test_playing_uses_live_clock(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        assert PlaybackStateMachine.elapsed(track, at(1005)) == 5

    def test_playing_floors_sub_second_reads(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        assert PlaybackStateMachine.elapsed(track, at(1005.99)) == 5

    def test_paused_is_frozen(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1020))

        assert PlaybackStateMachine.elapsed(track, at(5000)) == 20

    def test_stopped_is_zero(self):
        track = make_track(played_at=at(1000), paused_at=at(1020))

        assert PlaybackStateMachine.elapsed(track, at(5000)) == 0

    def test_unknown_status_raises(self):
        track = Track.model_construct(id=1, user_id=7, title="Song", status="rewinding")

        with pytest.raises(InvalidStateError) as exc_info:
            PlaybackStateMachine.elapsed(track, at(1000))

        assert exc_info.value.code == "INVALID_STATE"

    def test_pause_resume_cycle_preserves_elapsed(self):
        sm = PlaybackStateMachine
        track = make_track()

        played = sm.request_play(track, at(1000)).target_fields
        track = make_track(status=PlaybackStatus.PLAYING, played_at=played.played_at)

        paused = sm.request_pause(track, at(1030)).target_fields
        track = make_track(
            status=PlaybackStatus.PAUSED, played_at=track.played_at, paused_at=paused.paused_at
        )

        resumed = sm.request_play(track, at(1090)).target_fields
        track = make_track(status=PlaybackStatus.PLAYING, played_at=resumed.played_at)

        assert sm.elapsed(track, at(1090)) == 30
        assert sm.elapsed(track, at(1091)) == 31
        assert sm.elapsed(track, at(1100)) == 40


# =============================================================================
# Event Tests
# =============================================================================


class TestPlaybackEvents:
    def test_room_topic(self):
        assert room_topic(42) == "room:42"

    def test_track_played_event(self):
        track = make_track(status=PlaybackStatus.PLAYING, played_at=at(1000))

        event = TrackPlayed.from_track(track, elapsed=5)

        assert event.event_type == "play"
        assert event.user_id == 7
        assert event.track == track
        assert event.elapsed == 5
        assert event.topic == "room:7"

    def test_track_paused_event(self):
        track = make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1020))

        event = TrackPaused.from_track(track)

        assert event.event_type == "pause"
        assert event.topic == "room:7"

    def test_events_are_frozen(self):
        event = TrackPaused.from_track(
            make_track(status=PlaybackStatus.PAUSED, played_at=at(1000), paused_at=at(1020))
        )

        with pytest.raises(ValidationError):
            event.user_id = 8

    def test_events_have_unique_ids(self):
        track = make_track()

        assert TrackPlayed.from_track(track, 0).event_id != TrackPlayed.from_track(track, 0).event_id
