"""Change event envelope parsing.

The webhook receives two payload shapes: database row changes
(``table``/``type``/``record``/``old_record``) and synthetic reminders
(``{"type": "reminder", "match_id": ...}``). The reminder shape is checked
first and must not carry a ``table``, so the two shapes can never both apply.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError
from core.logging import get_module_logger
from models.matches import (
    ChangeEventEnvelope,
    MatchEventInsert,
    MatchUpdate,
    ReminderEvent,
)
from modules.match_notifications.errors import InvalidEnvelope

logger = get_module_logger()

REMINDER_TYPE = "reminder"
MATCH_EVENTS_TABLE = "match_events"
MATCHES_TABLE = "matches"


def _require_record(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    record = payload.get(key)
    if not isinstance(record, dict):
        raise InvalidEnvelope(f"Missing {key} in {payload.get('table')} change event", payload)
    return record


def parse_envelope(payload: Dict[str, Any]) -> Optional[ChangeEventEnvelope]:
    """Turn a raw webhook payload into a typed change event envelope.

    Args:
        payload: the decoded webhook JSON body

    Returns:
        The envelope variant for the payload, or None when the payload
        describes a change this service does not react to.

    Raises:
        InvalidEnvelope: if the payload claims a known shape but is
            incomplete, or mixes the reminder and row-change shapes.
    """
    if not isinstance(payload, dict):
        raise InvalidEnvelope("Change event payload must be a JSON object", payload)

    event_type = payload.get("type")
    table = payload.get("table")

    try:
        if event_type == REMINDER_TYPE:
            if table is not None:
                raise InvalidEnvelope(
                    "Reminder payload must not carry a table", payload
                )
            return ReminderEvent(match_id=payload.get("match_id"))

        if table == MATCH_EVENTS_TABLE and event_type == "INSERT":
            record = _require_record(payload, "record")
            return MatchEventInsert(
                event_type=record.get("event_type") or "",
                match_id=record.get("match_id"),
            )

        if table == MATCHES_TABLE and event_type == "UPDATE":
            record = _require_record(payload, "record")
            old_record = _require_record(payload, "old_record")
            return MatchUpdate(
                match_id=record.get("id"),
                old_status=old_record.get("status"),
                new_status=record.get("status"),
                old_kickoff=old_record.get("kickoff_time"),
                new_kickoff=record.get("kickoff_time"),
                home_goals=record.get("home_goals"),
                away_goals=record.get("away_goals"),
            )
    except ValidationError as e:
        logger.warning(
            "change_event_validation_failed",
            table=table,
            type=event_type,
            error=str(e),
        )
        raise InvalidEnvelope(
            f"Invalid {table or event_type} change event: {e.error_count()} validation error(s)",
            payload,
        ) from e

    logger.debug("change_event_not_handled", table=table, type=event_type)
    return None
