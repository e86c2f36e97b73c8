"""Push delivery result models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DeliveryOutcome(BaseModel):
    """Result of one delivery attempt to one token.

    Attributes:
        token: Delivery token the attempt was made for
        delivered: True when the platform accepted the message
        error_code: Platform or transport error code on failure
        detail: Platform response body or exception text on failure
    """

    model_config = ConfigDict(frozen=True)

    token: str
    delivered: bool
    error_code: Optional[str] = None
    detail: Optional[Any] = None

    @property
    def token_prefix(self) -> str:
        """First 10 characters of the token, the only part ever logged."""
        return self.token[:10]


class DeliverySummary(BaseModel):
    """Counts for one fan-out.

    Attributes:
        sent_count: Number of tokens the platform accepted
        total_count: Number of tokens attempted
        outcomes: Per-token outcomes, in completion order
    """

    sent_count: int = 0
    total_count: int = 0
    outcomes: List[DeliveryOutcome] = Field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return self.total_count - self.sent_count
