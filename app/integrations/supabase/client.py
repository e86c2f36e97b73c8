"""Supabase PostgREST client."""

from typing import Any, Dict, List, Optional

import requests
from core.logging import get_module_logger

logger = get_module_logger()

MATCH_SELECT = "*,home_team:home_team_id(name),away_team:away_team_id(name)"


def build_or_filter(conditions: Dict[str, List[Optional[str]]]) -> str:
    """Build a PostgREST disjunctive filter.

    Conditions whose value is None are left out.

    Example:
        >>> build_or_filter({"tournament_id": ["t1"], "team_id": ["h1", "a1"]})
        '(tournament_id.eq.t1,team_id.eq.h1,team_id.eq.a1)'
    """
    parts = [
        f"{column}.eq.{value}"
        for column, values in conditions.items()
        for value in values
        if value is not None
    ]
    return f"({','.join(parts)})"


class SupabaseRestClient:
    """Minimal PostgREST client authenticated with the service role key.

    Every call makes its own request, so one client can be shared by
    concurrent webhook invocations.
    """

    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._base_url = url.rstrip("/") + "/rest/v1"
        self._timeout = timeout_seconds
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Accept": "application/json",
        }

    def select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """Run a select against a table and return the rows.

        Raises:
            requests.HTTPError: if PostgREST answers with a non-2xx status
            requests.RequestException: on transport failures
        """
        response = requests.get(
            f"{self._base_url}/{table}",
            params=params,
            headers=self._headers,
            timeout=self._timeout,
        )
        if not 200 <= response.status_code < 300:
            logger.error(
                "supabase_query_failed",
                table=table,
                status_code=response.status_code,
                response=response.text[:500],
            )
            raise requests.HTTPError(
                f"{response.status_code} response from {table}", response=response
            )
        return response.json()

    def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a match joined with its home and away team names."""
        rows = self.select(
            "matches", {"select": MATCH_SELECT, "id": f"eq.{match_id}", "limit": "1"}
        )
        return rows[0] if rows else None

    def list_subscriptions(
        self,
        tournament_id: Optional[str],
        home_team_id: Optional[str],
        away_team_id: Optional[str],
    ) -> List[Dict[str, Any]]:
        """Fetch subscriptions to the tournament or either team in one query."""
        or_filter = build_or_filter(
            {
                "tournament_id": [tournament_id],
                "team_id": [home_team_id, away_team_id],
            }
        )
        if or_filter == "()":
            return []
        return self.select(
            "user_subscriptions", {"select": "fcm_token", "or": or_filter}
        )
