"""Recipient resolution for notification intents."""

from typing import Any, Callable, Dict, Iterable, Optional, Set

from core.logging import get_module_logger
from modules.match_notifications.errors import SubscriptionQueryError

logger = get_module_logger()

SubscriptionLookup = Callable[
    [Optional[str], Optional[str], Optional[str]], Iterable[Dict[str, Any]]
]


def resolve_tokens(
    tournament_id: Optional[str],
    home_team_id: Optional[str],
    away_team_id: Optional[str],
    subscription_lookup: SubscriptionLookup,
) -> Set[str]:
    """Resolve the deduplicated delivery tokens for a match's subscribers.

    A device subscribed to both a team and its tournament shows up in several
    rows but is returned once. An empty set is a valid result.

    Args:
        tournament_id: tournament of the match
        home_team_id: home team of the match
        away_team_id: away team of the match
        subscription_lookup: runs the single disjunctive subscription query and
            returns rows of ``{"token": ...}``

    Returns:
        Set of delivery tokens.

    Raises:
        SubscriptionQueryError: if the subscription query fails.
    """
    logger.info(
        "querying_subscribers",
        tournament_id=tournament_id,
        home_team_id=home_team_id,
        away_team_id=away_team_id,
    )
    try:
        rows = list(subscription_lookup(tournament_id, home_team_id, away_team_id))
    except SubscriptionQueryError:
        raise
    except Exception as e:
        logger.error("subscription_query_failed", error=str(e))
        raise SubscriptionQueryError(f"Subscription query failed: {e}") from e

    tokens = {row["token"] for row in rows if row.get("token")}
    logger.info("subscriber_tokens_resolved", row_count=len(rows), token_count=len(tokens))
    return tokens
