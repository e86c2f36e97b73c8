"""Change event classification.

Decides whether a change event warrants a notification and, if so, what it
says and who it is routed to. Classification is an ordered list of rules:
the first rule whose predicate accepts the envelope fetches the match once and
builds the result. Match updates carry a second ordered list of sub-rules
(kickoff, full time, reschedule) evaluated against the before/after values.

Results:
    NotificationIntent: a notification must be sent
    IgnoredUpdate: a match update that changed nothing worth notifying
    None: no rule applies to the envelope
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from core.logging import get_module_logger
from models.matches import (
    ChangeEventEnvelope,
    IgnoredUpdate,
    MatchEventInsert,
    MatchSnapshot,
    MatchUpdate,
    NotificationIntent,
    ReminderEvent,
)
from modules.match_notifications.errors import MatchNotFound
from modules.match_notifications.formatting import format_kickoff

logger = get_module_logger()

MatchLookup = Callable[[str], Optional[MatchSnapshot]]
ClassificationResult = Union[NotificationIntent, IgnoredUpdate, None]

GOAL_TITLE = "GGGOOOAAALLL!!! ⚽"
KICKOFF_TITLE = "KICK OFF! ⚔️"
FULL_TIME_TITLE = "FULL TIME 🏁"
RESCHEDULE_TITLE = "SCHEDULE UPDATE 📅"
REMINDER_TITLE = "MATCH STARTING SOON! 🔔"

STATUS_SCHEDULED = "scheduled"
STATUS_IN_PROGRESS = "in_progress"
STATUS_FINISHED = "finished"


@dataclass(frozen=True)
class UpdateRule:
    """Sub-rule for a match update, evaluated after the match is fetched."""

    name: str
    applies: Callable[[MatchUpdate], bool]
    build: Callable[[MatchUpdate, MatchSnapshot, str], NotificationIntent]


@dataclass(frozen=True)
class ClassificationRule:
    """Top-level rule keyed on the envelope shape."""

    name: str
    applies: Callable[[ChangeEventEnvelope], bool]
    build: Callable[
        [ChangeEventEnvelope, MatchSnapshot, str],
        Union[NotificationIntent, IgnoredUpdate],
    ]


def _fixture(snapshot: MatchSnapshot) -> str:
    return f"{snapshot.home_team_name} vs {snapshot.away_team_name}"


def _kickoff_intent(
    update: MatchUpdate, snapshot: MatchSnapshot, tz_name: str
) -> NotificationIntent:
    return NotificationIntent.for_match(
        snapshot, KICKOFF_TITLE, f"{_fixture(snapshot)} has started!"
    )


def _full_time_intent(
    update: MatchUpdate, snapshot: MatchSnapshot, tz_name: str
) -> NotificationIntent:
    # The update's own score is authoritative at the moment of the final whistle
    body = (
        f"Finished: {snapshot.home_team_name} {update.home_goals} - "
        f"{update.away_goals} {snapshot.away_team_name}"
    )
    return NotificationIntent.for_match(snapshot, FULL_TIME_TITLE, body)


def _reschedule_intent(
    update: MatchUpdate, snapshot: MatchSnapshot, tz_name: str
) -> NotificationIntent:
    when = format_kickoff(update.new_kickoff, tz_name)
    return NotificationIntent.for_match(
        snapshot,
        RESCHEDULE_TITLE,
        f"{_fixture(snapshot)} has been moved to {when}",
    )


UPDATE_RULES: Sequence[UpdateRule] = (
    UpdateRule(
        name="kickoff",
        applies=lambda u: u.old_status == STATUS_SCHEDULED
        and u.new_status == STATUS_IN_PROGRESS,
        build=_kickoff_intent,
    ),
    UpdateRule(
        name="full_time",
        applies=lambda u: u.old_status == STATUS_IN_PROGRESS
        and u.new_status == STATUS_FINISHED,
        build=_full_time_intent,
    ),
    UpdateRule(
        name="reschedule",
        applies=lambda u: u.old_kickoff != u.new_kickoff,
        build=_reschedule_intent,
    ),
)


def _goal_intent(
    event: MatchEventInsert, snapshot: MatchSnapshot, tz_name: str
) -> NotificationIntent:
    # Score comes from the freshly fetched match, not from the event row
    body = (
        f"{snapshot.home_team_name} {snapshot.home_goals} - "
        f"{snapshot.away_goals} {snapshot.away_team_name}"
    )
    return NotificationIntent.for_match(snapshot, GOAL_TITLE, body)


def _match_update_result(
    update: MatchUpdate, snapshot: MatchSnapshot, tz_name: str
) -> Union[NotificationIntent, IgnoredUpdate]:
    for rule in UPDATE_RULES:
        if rule.applies(update):
            logger.debug("match_update_rule_matched", rule=rule.name)
            return rule.build(update, snapshot, tz_name)
    return IgnoredUpdate()


def _reminder_intent(
    event: ReminderEvent, snapshot: MatchSnapshot, tz_name: str
) -> NotificationIntent:
    return NotificationIntent.for_match(
        snapshot, REMINDER_TITLE, f"{_fixture(snapshot)} starts in 1 hour!"
    )


CLASSIFICATION_RULES: Sequence[ClassificationRule] = (
    ClassificationRule(
        name="goal",
        applies=lambda e: isinstance(e, MatchEventInsert) and e.event_type == "goal",
        build=_goal_intent,
    ),
    ClassificationRule(
        name="match_update",
        applies=lambda e: isinstance(e, MatchUpdate),
        build=_match_update_result,
    ),
    ClassificationRule(
        name="reminder",
        applies=lambda e: isinstance(e, ReminderEvent),
        build=_reminder_intent,
    ),
)


def classify(
    envelope: Optional[ChangeEventEnvelope],
    match_lookup: MatchLookup,
    display_timezone: str = "UTC",
) -> ClassificationResult:
    """Classify a change event into a notification intent.

    The match is looked up exactly once, and only when a rule applies.

    Args:
        envelope: the parsed change event (None is accepted and yields None)
        match_lookup: returns the current snapshot of a match, or None
        display_timezone: timezone used to render rescheduled kickoff times

    Returns:
        NotificationIntent, IgnoredUpdate or None.

    Raises:
        MatchNotFound: if a rule applies but the match does not exist.
    """
    if envelope is None:
        return None

    rule = next((r for r in CLASSIFICATION_RULES if r.applies(envelope)), None)
    if rule is None:
        logger.info("change_event_not_classified", envelope=type(envelope).__name__)
        return None

    snapshot = match_lookup(envelope.match_id)
    if snapshot is None:
        logger.error("match_not_found", match_id=envelope.match_id, rule=rule.name)
        raise MatchNotFound(envelope.match_id)

    result = rule.build(envelope, snapshot, display_timezone)
    if isinstance(result, IgnoredUpdate):
        logger.info("match_update_ignored", match_id=envelope.match_id, reason=result.reason)
    else:
        logger.info(
            "notification_intent_ready",
            rule=rule.name,
            match_id=result.match_id,
            title=result.title,
            body=result.body,
        )
    return result
