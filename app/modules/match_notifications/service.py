"""Match notification orchestration.

Runs one change event through the pipeline:

    parse envelope → classify → resolve tokens → dispatch

and turns the outcome (including failures) into the status code and JSON body
returned to the webhook caller. Every collaborator is passed in explicitly so
the pipeline can be exercised without a database or push platform.
"""

from typing import Any, Dict, Optional

from core.logging import bind_event_context, get_module_logger
from infrastructure.notifications import (
    FcmChannel,
    ServiceAccountCredentialProvider,
    dispatch,
)
from infrastructure.notifications.dispatcher import CredentialProvider, SendFunction
from integrations.supabase import SupabaseRestClient
from models.matches import IgnoredUpdate, InvocationResult
from modules.match_notifications.classifier import MatchLookup, classify
from modules.match_notifications.envelopes import parse_envelope
from modules.match_notifications.errors import InvalidEnvelope
from modules.match_notifications.resolver import SubscriptionLookup, resolve_tokens
from modules.match_notifications.store import SupabaseMatchStore

logger = get_module_logger()

IGNORED_UPDATE_MESSAGE = "Ignored match update"
NO_NOTIFICATION_MESSAGE = "No notification to send"
NO_SUBSCRIBERS_MESSAGE = "No subscribers found"


def _event_kind(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    if payload.get("table"):
        return f"{payload['table']}.{payload.get('type')}"
    return payload.get("type")


def _event_match_id(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    record = payload.get("record")
    if isinstance(record, dict):
        match_id = record.get("match_id", record.get("id"))
    else:
        match_id = payload.get("match_id")
    return str(match_id) if match_id is not None else None


class MatchNotificationService:
    """Handles one change event per call.

    Args:
        match_lookup: Returns the current MatchSnapshot for a match id, or None
        subscription_lookup: Returns subscription rows for a match's routing keys
        credential_provider: Produces the push platform access token
        send_fn: Sends to a single token
        display_timezone: Timezone used to render rescheduled kickoff times
    """

    def __init__(
        self,
        match_lookup: MatchLookup,
        subscription_lookup: SubscriptionLookup,
        credential_provider: CredentialProvider,
        send_fn: SendFunction,
        display_timezone: str = "UTC",
    ):
        self.match_lookup = match_lookup
        self.subscription_lookup = subscription_lookup
        self.credential_provider = credential_provider
        self.send_fn = send_fn
        self.display_timezone = display_timezone

    def handle_event(self, payload: Dict[str, Any]) -> InvocationResult:
        """Process one change event and report the outcome.

        Args:
            payload: Decoded webhook body.

        Returns:
            InvocationResult carrying the HTTP status code and body.
        """
        with bind_event_context(
            event_kind=_event_kind(payload), match_id=_event_match_id(payload)
        ):
            try:
                return self._process(payload)
            except InvalidEnvelope as e:
                logger.warning("invalid_change_event", error=str(e))
                return InvocationResult.failure(str(e), status_code=e.status_code)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("match_notification_failed", error=str(e))
                return InvocationResult.failure(str(e))

    def _process(self, payload: Dict[str, Any]) -> InvocationResult:
        logger.info("processing_change_event")
        envelope = parse_envelope(payload)
        result = classify(envelope, self.match_lookup, self.display_timezone)

        if isinstance(result, IgnoredUpdate):
            return InvocationResult.informational(IGNORED_UPDATE_MESSAGE)
        if result is None:
            return InvocationResult.informational(NO_NOTIFICATION_MESSAGE)

        tokens = resolve_tokens(
            result.tournament_id,
            result.home_team_id,
            result.away_team_id,
            self.subscription_lookup,
        )
        if not tokens:
            logger.info("no_subscribers_found", match_id=result.match_id)
            return InvocationResult.informational(NO_SUBSCRIBERS_MESSAGE)

        summary = dispatch(result, tokens, self.credential_provider, self.send_fn)
        logger.info(
            "match_notification_sent",
            title=result.title,
            sent_count=summary.sent_count,
            total_count=summary.total_count,
        )
        return InvocationResult.delivered(summary.sent_count)


def build_notification_service(settings) -> MatchNotificationService:
    """Wire the service from application settings.

    Args:
        settings: Settings instance (see core.config).

    Returns:
        MatchNotificationService backed by Supabase and FCM.
    """
    client = SupabaseRestClient(
        url=settings.supabase.SUPABASE_URL,
        service_role_key=settings.supabase.SUPABASE_SERVICE_ROLE_KEY,
        timeout_seconds=settings.supabase.SUPABASE_TIMEOUT_SECONDS,
    )
    store = SupabaseMatchStore(client)
    credential_provider = ServiceAccountCredentialProvider(
        service_account_info=settings.fcm.FCM_SERVICE_ACCOUNT,
        scopes=settings.fcm.FCM_SCOPES,
        project_id=settings.fcm.FCM_PROJECT_ID,
    )
    channel = FcmChannel(
        project_id=settings.fcm.project_id,
        timeout_seconds=settings.fcm.FCM_TIMEOUT_SECONDS,
    )
    logger.info(
        "match_notification_service_built",
        supabase_url=settings.supabase.SUPABASE_URL,
        fcm_project_id=channel.project_id,
    )
    return MatchNotificationService(
        match_lookup=store.get_match_snapshot,
        subscription_lookup=store.find_subscriptions,
        credential_provider=credential_provider,
        send_fn=channel.send,
        display_timezone=settings.notifications.DISPLAY_TIMEZONE,
    )
