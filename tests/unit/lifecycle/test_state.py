"""Tests for the session phase state machine."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from contactgain.core.modules.lifecycle.models import SessionState
from contactgain.core.modules.lifecycle.state import TERMINAL_TEXT, describe, evaluate_state, format_remaining
from contactgain.core.modules.session.models import Session

CREATED = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
EXPIRES = CREATED + timedelta(hours=1)
DELETES = EXPIRES + timedelta(hours=5)


@pytest.fixture
def session():
    return Session(
        id=uuid4(),
        short_id="AbC1234",
        group_name="Study Group",
        creator_identifier="creator",
        created_at=CREATED,
        submission_duration_minutes=60,
        expires_at=EXPIRES,
        deletion_scheduled_at=DELETES,
        file_sequence_number=7,
    )


class TestEvaluateState:
    def test_before_expiry_is_open(self):
        assert evaluate_state(CREATED, EXPIRES, DELETES) == SessionState.SUBMISSION_OPEN

    def test_marker_while_open_is_already_submitted(self):
        assert evaluate_state(CREATED, EXPIRES, DELETES, has_submitted=True) == SessionState.ALREADY_SUBMITTED

    def test_expiry_instant_starts_download_window(self):
        assert evaluate_state(EXPIRES, EXPIRES, DELETES) == SessionState.DOWNLOAD_WINDOW

    def test_marker_is_ignored_after_expiry(self):
        assert evaluate_state(EXPIRES, EXPIRES, DELETES, has_submitted=True) == SessionState.DOWNLOAD_WINDOW

    def test_deletion_instant_is_terminal(self):
        assert evaluate_state(DELETES, EXPIRES, DELETES) == SessionState.TERMINAL

    def test_same_inputs_same_state(self):
        at = EXPIRES + timedelta(minutes=3)
        assert evaluate_state(at, EXPIRES, DELETES, True) == evaluate_state(at, EXPIRES, DELETES, True)

    def test_states_only_move_forward(self):
        order = [SessionState.SUBMISSION_OPEN, SessionState.DOWNLOAD_WINDOW, SessionState.TERMINAL]
        seen = [evaluate_state(CREATED + timedelta(minutes=m), EXPIRES, DELETES) for m in range(0, 8 * 60, 7)]
        ranks = [order.index(state) for state in seen]
        assert ranks == sorted(ranks)
        assert set(seen) == set(order)


class TestFormatRemaining:
    def test_hours_minutes_seconds(self):
        assert format_remaining(timedelta(hours=1, minutes=2, seconds=3)) == "1h 2m 3s"

    def test_hours_are_not_wrapped_into_days(self):
        assert format_remaining(timedelta(days=2, hours=1)) == "49h 0m 0s"

    def test_fractional_seconds_are_truncated(self):
        assert format_remaining(timedelta(seconds=59, milliseconds=999)) == "0h 0m 59s"

    def test_negative_is_clamped_to_zero(self):
        assert format_remaining(timedelta(seconds=-5)) == "0h 0m 0s"


class TestDescribe:
    def test_missing_session_is_not_found(self):
        snapshot = describe(None, CREATED)
        assert snapshot.state == SessionState.NOT_FOUND
        assert snapshot.time_left == ""
        assert snapshot.boundary is None

    def test_open_counts_down_to_expiry(self, session):
        snapshot = describe(session, EXPIRES - timedelta(minutes=30, seconds=5))
        assert snapshot.state == SessionState.SUBMISSION_OPEN
        assert snapshot.time_left == "Submissions open for: 0h 30m 5s"
        assert snapshot.boundary == EXPIRES

    def test_already_submitted_keeps_countdown(self, session):
        snapshot = describe(session, EXPIRES - timedelta(minutes=1), has_submitted=True)
        assert snapshot.state == SessionState.ALREADY_SUBMITTED
        assert snapshot.time_left == "Submissions open for: 0h 1m 0s"

    def test_download_window_counts_down_to_deletion(self, session):
        snapshot = describe(session, EXPIRES)
        assert snapshot.state == SessionState.DOWNLOAD_WINDOW
        assert snapshot.time_left == "Download available for: 5h 0m 0s"
        assert snapshot.boundary == DELETES

    def test_terminal(self, session):
        snapshot = describe(session, DELETES + timedelta(seconds=1))
        assert snapshot.state == SessionState.TERMINAL
        assert snapshot.time_left == TERMINAL_TEXT
        assert snapshot.state.is_final


class TestSessionWindows:
    def test_window_order_is_enforced(self):
        with pytest.raises(ValueError, match="created_at < expires_at < deletion_scheduled_at"):
            Session(
                short_id="AbC1234",
                group_name="Study Group",
                creator_identifier="creator",
                created_at=CREATED,
                submission_duration_minutes=60,
                expires_at=DELETES,
                deletion_scheduled_at=EXPIRES,
                file_sequence_number=1,
            )
