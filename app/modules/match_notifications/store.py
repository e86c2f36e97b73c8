"""Match and subscription lookups backed by Supabase."""

from typing import Dict, List, Optional

from integrations.supabase import SupabaseRestClient
from models.matches import MatchSnapshot

TOKEN_COLUMN = "fcm_token"


class SupabaseMatchStore:
    """Adapts the PostgREST client to the lookups the engine needs."""

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def get_match_snapshot(self, match_id: str) -> Optional[MatchSnapshot]:
        row = self._client.get_match(match_id)
        if row is None:
            return None
        return MatchSnapshot.from_row(row)

    def find_subscriptions(
        self,
        tournament_id: Optional[str],
        home_team_id: Optional[str],
        away_team_id: Optional[str],
    ) -> List[Dict[str, Optional[str]]]:
        rows = self._client.list_subscriptions(tournament_id, home_team_id, away_team_id)
        return [{"token": row.get(TOKEN_COLUMN)} for row in rows]
