"""Match change-event models.

Envelopes describe the database change (or synthetic reminder) that
triggered an invocation, the snapshot is the authoritative state of the
match at classification time, and the intent is the decided notification
content with its routing keys. All of them live for a single invocation.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator


def _coerce_id(v: Any) -> Any:
    # Ids may be integers or UUIDs depending on the table definition
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(int(v))
    return v


class MatchEventInsert(BaseModel):
    """Row inserted into the match events source."""

    model_config = ConfigDict(frozen=True)

    event_type: str
    match_id: str

    @field_validator("match_id", mode="before")
    @classmethod
    def _normalize_match_id(cls, v: Any) -> Any:
        return _coerce_id(v)


class MatchUpdate(BaseModel):
    """Row updated in the matches source, with before and after values."""

    model_config = ConfigDict(frozen=True)

    match_id: str
    old_status: Optional[str] = None
    new_status: Optional[str] = None
    old_kickoff: Optional[datetime] = None
    new_kickoff: Optional[datetime] = None
    home_goals: int = 0
    away_goals: int = 0

    @field_validator("match_id", mode="before")
    @classmethod
    def _normalize_match_id(cls, v: Any) -> Any:
        return _coerce_id(v)

    @field_validator("home_goals", "away_goals", mode="before")
    @classmethod
    def _default_goals(cls, v: Any) -> Any:
        return 0 if v is None else v


class ReminderEvent(BaseModel):
    """Scheduled reminder for a match that starts soon."""

    model_config = ConfigDict(frozen=True)

    match_id: str

    @field_validator("match_id", mode="before")
    @classmethod
    def _normalize_match_id(cls, v: Any) -> Any:
        return _coerce_id(v)


ChangeEventEnvelope = Union[MatchEventInsert, MatchUpdate, ReminderEvent]


class MatchSnapshot(BaseModel):
    """Read-only projection of a match joined with its team names."""

    model_config = ConfigDict(frozen=True)

    match_id: str
    tournament_id: Optional[str] = None
    home_team_id: Optional[str] = None
    away_team_id: Optional[str] = None
    home_team_name: str
    away_team_name: str
    home_goals: int = 0
    away_goals: int = 0
    kickoff_time: Optional[datetime] = None
    status: Optional[str] = None

    @field_validator(
        "match_id", "tournament_id", "home_team_id", "away_team_id", mode="before"
    )
    @classmethod
    def _normalize_ids(cls, v: Any) -> Any:
        return _coerce_id(v)

    @field_validator("home_goals", "away_goals", mode="before")
    @classmethod
    def _default_goals(cls, v: Any) -> Any:
        return 0 if v is None else v

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MatchSnapshot":
        """Build a snapshot from a matches row with embedded team names.

        The row is expected in the shape returned by
        ``select=*,home_team:home_team_id(name),away_team:away_team_id(name)``.
        """
        home_team = row.get("home_team") or {}
        away_team = row.get("away_team") or {}
        return cls(
            match_id=row["id"],
            tournament_id=row.get("tournament_id"),
            home_team_id=row.get("home_team_id"),
            away_team_id=row.get("away_team_id"),
            home_team_name=home_team.get("name") or "",
            away_team_name=away_team.get("name") or "",
            home_goals=row.get("home_goals"),
            away_goals=row.get("away_goals"),
            kickoff_time=row.get("kickoff_time"),
            status=row.get("status"),
        )


class NotificationIntent(BaseModel):
    """Decided notification content plus the keys used to find subscribers."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    tournament_id: Optional[str] = None
    home_team_id: Optional[str] = None
    away_team_id: Optional[str] = None
    match_id: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """A blank title means there is nothing to send."""
        if not v or not v.strip():
            raise ValueError("Notification title cannot be empty")
        return v

    @classmethod
    def for_match(cls, snapshot: MatchSnapshot, title: str, body: str):
        return cls(
            title=title,
            body=body,
            tournament_id=snapshot.tournament_id,
            home_team_id=snapshot.home_team_id,
            away_team_id=snapshot.away_team_id,
            match_id=snapshot.match_id,
        )


class IgnoredUpdate(BaseModel):
    """A match update that does not warrant a notification."""

    model_config = ConfigDict(frozen=True)

    reason: str = "no kickoff, full time or schedule change"


class InvocationResult(BaseModel):
    """Outcome of one invocation, as returned to the HTTP caller."""

    status_code: int = 200
    success: Optional[bool] = None
    sent: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def delivered(cls, sent: int) -> "InvocationResult":
        return cls(success=True, sent=sent)

    @classmethod
    def informational(cls, message: str) -> "InvocationResult":
        return cls(message=message)

    @classmethod
    def failure(cls, error: str, status_code: int = 500) -> "InvocationResult":
        return cls(status_code=status_code, error=error)

    def to_body(self) -> Dict[str, Any]:
        """JSON body sent back to the caller."""
        return self.model_dump(exclude_none=True, exclude={"status_code"})
