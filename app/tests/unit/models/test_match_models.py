"""Unit tests for match change-event models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.matches import (
    IgnoredUpdate,
    InvocationResult,
    MatchSnapshot,
    NotificationIntent,
)
from tests.factories.matches import make_intent, make_match_row, make_snapshot


@pytest.mark.unit
class TestMatchSnapshot:
    """Tests for MatchSnapshot."""

    def test_from_row(self):
        snapshot = MatchSnapshot.from_row(make_match_row(match_id=12, home_goals=3))

        assert snapshot.match_id == "12"
        assert snapshot.home_team_name == "Lions"
        assert snapshot.away_team_name == "Tigers"
        assert snapshot.home_goals == 3
        assert snapshot.kickoff_time == datetime(2024, 3, 5, 19, 30, tzinfo=timezone.utc)

    def test_from_row_without_team_join(self):
        row = make_match_row()
        row["home_team"] = None
        del row["away_team"]

        snapshot = MatchSnapshot.from_row(row)

        assert snapshot.home_team_name == ""
        assert snapshot.away_team_name == ""

    def test_is_frozen(self):
        snapshot = make_snapshot()

        with pytest.raises(ValidationError):
            snapshot.home_goals = 4


@pytest.mark.unit
class TestNotificationIntent:
    """Tests for NotificationIntent."""

    def test_blank_title_is_rejected(self):
        with pytest.raises(ValidationError):
            make_intent(title="  ")

    def test_for_match_copies_routing_keys(self):
        intent = NotificationIntent.for_match(make_snapshot(), "Title", "Body")

        assert intent.tournament_id == "t1"
        assert intent.home_team_id == "h1"
        assert intent.away_team_id == "a1"
        assert intent.match_id == "m1"


@pytest.mark.unit
class TestInvocationResult:
    """Tests for InvocationResult."""

    def test_delivered_body(self):
        result = InvocationResult.delivered(3)

        assert result.status_code == 200
        assert result.to_body() == {"success": True, "sent": 3}

    def test_delivered_zero_keeps_sent(self):
        assert InvocationResult.delivered(0).to_body() == {"success": True, "sent": 0}

    def test_informational_body(self):
        result = InvocationResult.informational("No subscribers found")

        assert result.to_body() == {"message": "No subscribers found"}

    def test_failure_body(self):
        result = InvocationResult.failure("bad payload", status_code=400)

        assert result.status_code == 400
        assert result.to_body() == {"error": "bad payload"}


@pytest.mark.unit
def test_ignored_update_has_reason():
    assert IgnoredUpdate().reason
