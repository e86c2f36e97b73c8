from unittest.mock import MagicMock

import pytest

from models.matches import MatchSnapshot
from modules.match_notifications.store import SupabaseMatchStore
from tests.factories.matches import make_match_row


@pytest.fixture
def supabase_client():
    return MagicMock()


@pytest.mark.unit
def test_get_match_snapshot_builds_snapshot(supabase_client):
    supabase_client.get_match.return_value = make_match_row(
        match_id=5, home_goals=2, away_goals=1, status="in_progress"
    )
    store = SupabaseMatchStore(supabase_client)

    snapshot = store.get_match_snapshot("5")

    supabase_client.get_match.assert_called_once_with("5")
    assert isinstance(snapshot, MatchSnapshot)
    assert snapshot.match_id == "5"
    assert snapshot.home_team_name == "Lions"
    assert snapshot.away_team_name == "Tigers"
    assert snapshot.home_goals == 2
    assert snapshot.status == "in_progress"


@pytest.mark.unit
def test_get_match_snapshot_missing_match(supabase_client):
    supabase_client.get_match.return_value = None
    store = SupabaseMatchStore(supabase_client)

    assert store.get_match_snapshot("5") is None


@pytest.mark.unit
def test_find_subscriptions_maps_token_column(supabase_client):
    supabase_client.list_subscriptions.return_value = [
        {"fcm_token": "tok-1"},
        {"fcm_token": "tok-2"},
    ]
    store = SupabaseMatchStore(supabase_client)

    rows = store.find_subscriptions("t1", "h1", "a1")

    supabase_client.list_subscriptions.assert_called_once_with("t1", "h1", "a1")
    assert rows == [{"token": "tok-1"}, {"token": "tok-2"}]
