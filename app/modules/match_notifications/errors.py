"""Errors for the match notifications module."""

from typing import Any, Optional


class MatchNotificationError(Exception):
    """Base exception for failures that end a match notification invocation."""

    status_code = 500


class InvalidEnvelope(MatchNotificationError):
    """Raised when a change event payload cannot be interpreted.

    Attributes:
        payload: the raw payload that was rejected
    """

    status_code = 400

    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message)
        self.payload = payload


class MatchNotFound(MatchNotificationError):
    """Raised when the match referenced by an event does not exist."""

    def __init__(self, match_id: str):
        super().__init__("Match not found")
        self.match_id = match_id


class SubscriptionQueryError(MatchNotificationError):
    """Raised when subscribers for a match cannot be resolved."""
